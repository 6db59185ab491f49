"""Remote charter-quote API adapter.

Posts the resolved airport codes, departure date, passenger count and
trip type, and reads quotes from either {"data": {"quotes": [...]}} or
{"data": [...]}. Items the funnel cannot represent are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import requests

from ...config import QuoteConfig, get_config
from ...dates import departure_timestamp, normalize_date
from ...domain.errors import QuoteProviderError
from ...domain.models import AircraftClass, Itinerary, Quote
from ...services.airport_search import AirportSearchService
from ...services.flight_time import estimate, extract_code


@dataclass
class HttpQuoteProvider:
    """Quote provider backed by a charter-quote HTTP API.

    Attributes:
        config: Quote configuration (URL, key, timeout, currency)
        search: Used to find airport codes for free-text locations
        session: HTTP session
    """

    config: QuoteConfig = field(default_factory=lambda: get_config().quotes)
    search: Optional[AirportSearchService] = None
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    name: str = "http"

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def fetch_quotes(self, itinerary: Itinerary) -> List[Quote]:
        """Request quotes for the itinerary.

        Raises:
            QuoteProviderError: If codes cannot be resolved, the request
                fails, or the response is not a successful quote list.
        """
        from_code = self._code_for(itinerary.from_location)
        to_code = self._code_for(itinerary.to_location)
        if not from_code or not to_code:
            raise QuoteProviderError(
                "Could not find airport codes for the specified locations",
                provider=self.name,
            )

        body: Dict[str, Any] = {
            "departure_airport": from_code,
            "arrival_airport": to_code,
            "departure_date": normalize_date(itinerary.depart_date) or itinerary.depart_date,
            "passengers": itinerary.passenger_count,
            "trip_type": itinerary.trip_type.value,
        }
        if itinerary.is_round_trip and itinerary.return_date:
            body["return_date"] = normalize_date(itinerary.return_date) or itinerary.return_date

        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"

        try:
            response = self.session.post(
                self.config.url,
                json=body,
                headers=headers,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise QuoteProviderError("Quote request failed", cause=e, provider=self.name)

        if not 200 <= response.status_code < 300:
            raise QuoteProviderError(
                f"API Error: {response.status_code} {response.reason}",
                provider=self.name,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise QuoteProviderError(
                "Quote API returned invalid JSON", cause=e, provider=self.name
            )

        raw_quotes = self._extract_quotes(payload)
        departs = departure_timestamp(itinerary.depart_date, itinerary.depart_time)
        quotes: List[Quote] = []
        for index, item in enumerate(raw_quotes, start=1):
            quote = self._to_quote(item, index, itinerary, departs)
            if quote is not None:
                quotes.append(quote)
        self._logger.info(
            "Remote quotes received",
            extra={"received": len(raw_quotes), "kept": len(quotes)},
        )
        return quotes

    def _code_for(self, location: str) -> Optional[str]:
        if self.search is not None:
            return self.search.best_code(location)
        return extract_code(location)

    def _extract_quotes(self, payload: Any) -> List[Any]:
        if not isinstance(payload, Mapping):
            raise QuoteProviderError("Quote API returned a non-object body", provider=self.name)
        if not payload.get("success", False):
            raise QuoteProviderError(
                str(payload.get("error") or "Quote API reported failure"),
                provider=self.name,
            )
        data = payload.get("data")
        if isinstance(data, Mapping):
            data = data.get("quotes")
        if not isinstance(data, list):
            raise QuoteProviderError("Quote API returned no quote list", provider=self.name)
        return data

    def _to_quote(
        self, item: Any, index: int, itinerary: Itinerary, departs: str
    ) -> Optional[Quote]:
        if not isinstance(item, Mapping):
            return None
        label = str(item.get("aircraft_class") or item.get("aircraft") or "")
        aircraft_class = AircraftClass.from_label(label)
        price = item.get("price_low", item.get("price"))
        if aircraft_class is None or not isinstance(price, (int, float)):
            self._logger.debug(
                "Skipping unusable quote", extra={"aircraft": label, "price": price}
            )
            return None

        price_high = item.get("price_high")
        return Quote(
            quote_id=str(item.get("id") or index),
            aircraft_class=aircraft_class,
            aircraft_model=str(item.get("aircraft_model") or ""),
            price_low=int(price),
            price_high=int(price_high) if isinstance(price_high, (int, float)) else None,
            currency=str(item.get("currency") or self.config.currency),
            departure_timestamp=str(item.get("departure_time") or departs),
            flight_duration=str(
                item.get("flight_time")
                or estimate(itinerary.from_location, itinerary.to_location, aircraft_class)
            ),
            operator_name=str(item.get("company") or item.get("operator") or ""),
        )
