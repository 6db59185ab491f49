"""Synthetic quote provider.

Produces one quote per aircraft class with a random price inside the
class band. Durations come from the flight-time estimator. When a price
range multiplier is configured the quote carries a range
(low, low * multiplier); otherwise a flat price.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ...config import QuoteConfig, get_config
from ...dates import departure_timestamp
from ...domain.models import AircraftClass, Itinerary, Quote
from ...services.flight_time import estimate


@dataclass(frozen=True)
class FleetEntry:
    """One aircraft offered by the synthetic provider."""

    aircraft_class: AircraftClass
    model: str
    base_price: int
    price_spread: int
    operator: str


FLEET: Tuple[FleetEntry, ...] = (
    FleetEntry(AircraftClass.LIGHT, "Citation CJ3", 8000, 4000, "Charter Jet One, Inc."),
    FleetEntry(AircraftClass.MIDSIZE, "Hawker 800", 12000, 5000, "Integra Jet, LLC"),
    FleetEntry(AircraftClass.HEAVY, "Gulfstream G550", 18000, 8000, "Secure Air Charter"),
    FleetEntry(
        AircraftClass.ULTRA_LONG_RANGE, "Global 7500", 25000, 10000, "GFK Flight Support"
    ),
)


@dataclass
class SyntheticQuoteProvider:
    """Quote provider that synthesizes prices locally.

    Attributes:
        config: Quote configuration (currency, range multiplier, seed)
        fleet: Aircraft offered, one quote each
        rng: Random source; seeded from config.seed when not given
    """

    config: QuoteConfig = field(default_factory=lambda: get_config().quotes)
    fleet: Tuple[FleetEntry, ...] = FLEET
    rng: Optional[random.Random] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.rng is None:
            self.rng = random.Random(self.config.seed)

    def fetch_quotes(self, itinerary: Itinerary) -> List[Quote]:
        assert self.rng is not None
        departs = departure_timestamp(itinerary.depart_date, itinerary.depart_time)
        multiplier = self.config.price_range_multiplier

        quotes: List[Quote] = []
        for index, entry in enumerate(self.fleet, start=1):
            price = int(entry.base_price + self.rng.random() * entry.price_spread)
            quotes.append(
                Quote(
                    quote_id=str(index),
                    aircraft_class=entry.aircraft_class,
                    aircraft_model=entry.model,
                    price_low=price,
                    price_high=price * multiplier if multiplier and multiplier > 1 else None,
                    currency=self.config.currency,
                    departure_timestamp=departs,
                    flight_duration=estimate(
                        itinerary.from_location,
                        itinerary.to_location,
                        entry.aircraft_class,
                    ),
                    operator_name=entry.operator,
                )
            )

        self._logger.info(
            "Synthetic quotes generated",
            extra={"quotes": len(quotes), "departure": departs},
        )
        return quotes
