"""Immutable domain models for the charter funnel.

All models are frozen dataclasses with slots. They have no external
dependencies; downstream code only ever touches these types, never the
raw provider payloads they were built from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class TripType(Enum):
    """Trip-type choice made mid-flow; drives the wizard branch."""

    UNSET = "unset"
    ONE_WAY = "one-way"
    ROUND_TRIP = "round-trip"


class AircraftClass(Enum):
    """Charter aircraft size classes, labelled as shown to the user."""

    LIGHT = "Light"
    MIDSIZE = "Midsize"
    HEAVY = "Heavy"
    ULTRA_LONG_RANGE = "Ultra Long Range"

    @classmethod
    def from_label(cls, label: str) -> Optional[AircraftClass]:
        """Look up a class by its display label or member name."""
        cleaned = label.strip()
        for member in cls:
            if cleaned == member.value or cleaned.upper() == member.name:
                return member
        return None


@dataclass(frozen=True, slots=True)
class CanonicalAirport:
    """Unified airport record, independent of the provider schema.

    Attributes:
        display_name: Airport (or city) name shown to the user
        iata_code: Three-letter IATA code, upper-cased
        city: City served by the airport
        region: State or region
        country: Country name or ISO code
    """

    display_name: str = ""
    iata_code: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None

    def __post_init__(self) -> None:
        """Require at least a name or a code."""
        if not self.display_name.strip() and not (self.iata_code or "").strip():
            raise ValueError("CanonicalAirport needs a display name or an IATA code")


@dataclass(frozen=True, slots=True)
class ScoredCandidate:
    """A canonical airport with its relevance score for one query."""

    airport: CanonicalAirport
    score: int


@dataclass(frozen=True, slots=True)
class Itinerary:
    """Snapshot of the collected trip, assembled at submission time.

    Attributes:
        from_location: Origin as typed or selected
        to_location: Destination as typed or selected
        depart_date: Departure date as entered
        depart_time: Departure time as entered
        passenger_count: Number of passengers
        trip_type: One-way or round-trip
        contact_email: Lead e-mail address
        contact_name: Lead name
        return_date: Return date (round-trip only)
        return_time: Return time (round-trip only)
        contact_phone: Phone number (extended flow only)
    """

    from_location: str
    to_location: str
    depart_date: str
    depart_time: str
    passenger_count: int
    trip_type: TripType
    contact_email: str
    contact_name: str
    return_date: Optional[str] = None
    return_time: Optional[str] = None
    contact_phone: Optional[str] = None

    @property
    def is_round_trip(self) -> bool:
        return self.trip_type is TripType.ROUND_TRIP

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON body expected by the submission endpoint."""
        payload: Dict[str, Any] = {
            "from": self.from_location,
            "to": self.to_location,
            "date": self.depart_date,
            "time": self.depart_time,
            "passengers": self.passenger_count,
            "tripType": None if self.trip_type is TripType.UNSET else self.trip_type.value,
            "email": self.contact_email,
            "name": self.contact_name,
            "returnDate": self.return_date or "",
            "returnTime": self.return_time or "",
        }
        if self.contact_phone is not None:
            payload["phone"] = self.contact_phone
        return payload


@dataclass(frozen=True, slots=True)
class Quote:
    """A charter price quote.

    Attributes:
        quote_id: Identifier within one result set
        aircraft_class: Size class of the aircraft
        aircraft_model: Aircraft model name
        price_low: Lower bound (or flat) price
        currency: ISO currency code
        departure_timestamp: Departure as ISO-like timestamp text
        flight_duration: Estimated duration, e.g. "1h 45m"
        operator_name: Operating company
        price_high: Upper bound of the price range, if any
    """

    quote_id: str
    aircraft_class: AircraftClass
    aircraft_model: str
    price_low: int
    currency: str
    departure_timestamp: str
    flight_duration: str
    operator_name: str
    price_high: Optional[int] = None

    @property
    def price_label(self) -> str:
        """Human-readable price, e.g. "$8,500-$34,000 USD"."""
        if self.price_high is not None and self.price_high != self.price_low:
            return f"${self.price_low:,}-${self.price_high:,} {self.currency}"
        return f"${self.price_low:,} {self.currency}"


@dataclass(frozen=True, slots=True)
class QuoteResult:
    """Quotes shown on the results step, possibly error-flagged."""

    quotes: tuple[Quote, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    """Outcome of handing an itinerary to the submission collaborator."""

    success: bool
    error: Optional[str] = None


class WizardField(Enum):
    """Text and count fields collected by the booking wizard."""

    ORIGIN = "from"
    DESTINATION = "to"
    DEPART_DATE = "date"
    DEPART_TIME = "time"
    PASSENGERS = "passengers"
    RETURN_DATE = "returnDate"
    RETURN_TIME = "returnTime"
    EMAIL = "email"
    PHONE = "phone"
    NAME = "name"


@dataclass(slots=True)
class WizardState:
    """The one mutable record behind the booking wizard.

    Attributes:
        current_step: 1-based id of the step being shown
        trip_type: Trip-type choice, UNSET until chosen
        fields: Collected values keyed by WizardField
    """

    current_step: int = 1
    trip_type: TripType = TripType.UNSET
    fields: Dict[WizardField, Any] = field(default_factory=dict)

    def text(self, key: WizardField) -> str:
        value = self.fields.get(key)
        return value.strip() if isinstance(value, str) else ""

    def has_text(self, key: WizardField) -> bool:
        return bool(self.text(key))
