"""Aviation Edge airport directory adapter.

Two endpoint families are used:
- the airport database, queried by exact IATA code for short inputs;
- autocomplete, queried through a chain of parameter names (city, q,
  search) until one attempt answers with a result array.

Each HTTP attempt is bounded by the configured timeout. Failed attempts
are logged and skipped; the adapter reports total unavailability by
returning None rather than raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import requests

from ...config import LookupConfig, get_config
from ...domain.errors import LookupUnavailableError
from ...domain.normalization import extract_array, normalize_item


@dataclass
class AviationEdgeDirectoryAdapter:
    """Aviation Edge lookup with exact-code search and autocomplete fallback.

    Attributes:
        config: Lookup configuration (base URL, key, timeouts, parameters)
        session: HTTP session used for every request
    """

    config: LookupConfig = field(default_factory=lambda: get_config().lookup)
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    name: str = "aviation_edge"

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def lookup(self, query: str) -> Optional[Sequence[Any]]:
        """Look up airports for a query.

        Args:
            query: Trimmed user input.

        Returns:
            Raw items from the first successful attempt, or None if every
            attempt failed.
        """
        if len(query) <= self.config.code_query_max_length:
            items = self.lookup_code(query)
            if items:
                return items

        for param in self.config.fallback_params:
            try:
                body = self._get_json(self.config.autocomplete_endpoint, {param: query})
            except LookupUnavailableError as e:
                self._logger.debug(
                    "Autocomplete attempt failed",
                    extra={"param": param, "query": query, "error": str(e)},
                )
                continue

            items = extract_array(body)
            if items is None:
                self._logger.debug(
                    "Autocomplete response has no result array",
                    extra={"param": param, "query": query},
                )
                continue

            self._logger.debug(
                "Autocomplete attempt succeeded",
                extra={"param": param, "query": query, "items": len(items)},
            )
            return list(items)

        self._logger.warning(
            "All airport lookup endpoints failed", extra={"query": query}
        )
        return None

    def lookup_code(self, query: str) -> Optional[List[Any]]:
        """Exact IATA code search.

        Returns:
            The matching record(s) when the response holds at least one
            usable airport, otherwise None.
        """
        code = query.strip().upper()
        try:
            body = self._get_json(self.config.code_endpoint, {"codeIataAirport": code})
        except LookupUnavailableError as e:
            self._logger.debug(
                "Airport code search failed", extra={"code": code, "error": str(e)}
            )
            return None

        if isinstance(body, dict):
            items: List[Any] = [body]
        elif isinstance(body, list):
            items = list(body)
        else:
            return None

        if any(normalize_item(item) is not None for item in items):
            self._logger.debug(
                "Airport code search hit", extra={"code": code, "items": len(items)}
            )
            return items
        return None

    def _get_json(self, endpoint: str, params: Dict[str, str]) -> Any:
        """GET one endpoint and decode its JSON body.

        Raises:
            LookupUnavailableError: On network errors, timeouts, non-2xx
                responses or undecodable bodies.
        """
        url = f"{self.config.base_url.rstrip('/')}/{endpoint}"
        query_params = dict(params)
        if self.config.api_key:
            query_params["key"] = self.config.api_key

        try:
            response = self.session.get(
                url,
                params=query_params,
                headers={"Accept": "application/json"},
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise LookupUnavailableError(
                "Airport lookup request failed", cause=e, endpoint=endpoint
            )

        if not 200 <= response.status_code < 300:
            raise LookupUnavailableError(
                f"Airport lookup returned HTTP {response.status_code}",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise LookupUnavailableError(
                "Airport lookup returned invalid JSON",
                cause=e,
                endpoint=endpoint,
                status_code=response.status_code,
            )
