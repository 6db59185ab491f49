"""HTTP submission adapter for finished itineraries.

The endpoint answers with {"success": bool}. Failures are logged here
and reported through SubmissionResult; nothing is retried and nothing
is raised to the wizard.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import requests

from ...config import SubmissionConfig, get_config
from ...domain.errors import SubmissionError
from ...domain.models import Itinerary, SubmissionResult


@dataclass
class HttpSubmissionAdapter:
    """POST itineraries to the e-mail/webhook endpoint.

    Attributes:
        config: Submission configuration (URL, timeout)
        session: HTTP session
    """

    config: SubmissionConfig = field(default_factory=lambda: get_config().submission)
    session: requests.Session = field(default_factory=requests.Session, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def submit(self, itinerary: Itinerary) -> SubmissionResult:
        try:
            success = self._post(itinerary)
        except SubmissionError as e:
            self._logger.error(
                "Itinerary submission failed",
                extra={"url": e.url, "status": e.status_code, "error": str(e)},
            )
            return SubmissionResult(success=False, error=str(e))

        if success:
            self._logger.info("Itinerary submitted", extra={"url": self.config.url})
            return SubmissionResult(success=True)

        self._logger.warning(
            "Submission endpoint reported failure", extra={"url": self.config.url}
        )
        return SubmissionResult(success=False, error="Submission endpoint reported failure")

    def _post(self, itinerary: Itinerary) -> bool:
        """Send the payload and return the endpoint's success flag.

        Raises:
            SubmissionError: On network errors, non-2xx responses or
                undecodable bodies.
        """
        url = self.config.url
        try:
            response = self.session.post(
                url,
                json=itinerary.to_payload(),
                headers={"Content-Type": "application/json"},
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise SubmissionError("Submission request failed", cause=e, url=url)

        if not 200 <= response.status_code < 300:
            raise SubmissionError(
                f"Submission endpoint returned HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise SubmissionError(
                "Submission endpoint returned invalid JSON",
                cause=e,
                url=url,
                status_code=response.status_code,
            )
        return isinstance(body, dict) and body.get("success") is True
