"""Submission adapters - Implementations of SubmissionPort.

Available implementations:
- HttpSubmissionAdapter: POSTs the itinerary JSON to the lead endpoint
"""

from .http_submission_adapter import HttpSubmissionAdapter

__all__ = ["HttpSubmissionAdapter"]
