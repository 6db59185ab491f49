"""Typed domain errors for the charter funnel.

Errors are raised inside adapters and converted into non-fatal
outcomes (empty suggestions, error-flagged quote lists, logged
submission failures) at the component boundary.

All errors inherit from CharterFunnelError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class CharterFunnelError(Exception):
    """Base error for the charter funnel domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class LookupUnavailableError(CharterFunnelError):
    """An airport lookup attempt failed (network, status or payload).

    Attributes:
        endpoint: The endpoint that was queried
        status_code: HTTP status code when a response was received
    """

    endpoint: str = ""
    status_code: Optional[int] = None


@dataclass
class SubmissionError(CharterFunnelError):
    """The itinerary could not be delivered to the submission collaborator.

    Attributes:
        url: Submission endpoint
        status_code: HTTP status code when a response was received
    """

    url: str = ""
    status_code: Optional[int] = None


@dataclass
class QuoteProviderError(CharterFunnelError):
    """The quote collaborator failed or returned an unusable payload.

    Attributes:
        provider: Name of the quote provider that failed
    """

    provider: str = ""


@dataclass
class StepGraphError(CharterFunnelError):
    """The wizard step graph is malformed.

    Attributes:
        variant: Name of the flow variant being built
    """

    variant: str = ""


@dataclass
class ConfigurationError(CharterFunnelError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
