"""Submission port - Hands a finished itinerary to the lead pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Itinerary, SubmissionResult


class SubmissionPort(Protocol):
    """Port for the e-mail/webhook submission collaborator.

    Implementation: adapters/submission/http_submission_adapter.py

    Implementations log their own failures and report them through the
    result; they do not raise and they do not retry.
    """

    def submit(self, itinerary: Itinerary) -> SubmissionResult:
        ...
