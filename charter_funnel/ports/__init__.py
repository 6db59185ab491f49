"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the funnel core and its external
collaborators: airport directories, the submission endpoint, quote
providers and the resolution cache.
"""

from .airport_directory import AirportDirectoryPort, RawAirportItem
from .cache import ResultCachePort
from .quotes import QuoteProviderPort
from .submission import SubmissionPort

__all__ = [
    # Lookup
    "AirportDirectoryPort",
    "RawAirportItem",
    # Cache
    "ResultCachePort",
    # Collaborators
    "QuoteProviderPort",
    "SubmissionPort",
]
