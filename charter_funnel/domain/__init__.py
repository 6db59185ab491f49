"""Domain layer - Core business models, step graph and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    CharterFunnelError,
    ConfigurationError,
    LookupUnavailableError,
    QuoteProviderError,
    StepGraphError,
    SubmissionError,
)
from .models import (
    AircraftClass,
    CanonicalAirport,
    Itinerary,
    Quote,
    QuoteResult,
    ScoredCandidate,
    SubmissionResult,
    TripType,
    WizardField,
    WizardState,
)
from .steps import FlowVariant, Step, StepGraph, build_step_graph

__all__ = [
    # Models
    "AircraftClass",
    "CanonicalAirport",
    "Itinerary",
    "Quote",
    "QuoteResult",
    "ScoredCandidate",
    "SubmissionResult",
    "TripType",
    "WizardField",
    "WizardState",
    # Step graph
    "FlowVariant",
    "Step",
    "StepGraph",
    "build_step_graph",
    # Errors
    "CharterFunnelError",
    "ConfigurationError",
    "LookupUnavailableError",
    "QuoteProviderError",
    "StepGraphError",
    "SubmissionError",
]
