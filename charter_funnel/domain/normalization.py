"""Normalization of provider-shaped airport payloads.

Airport directories disagree on field names. Each canonical attribute
has an ordered list of accessor strategies; the first accessor that
yields a non-empty value wins. Items that end up with neither a name
nor a code are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from .models import CanonicalAirport

logger = logging.getLogger(__name__)

Accessor = Callable[[Mapping[str, Any]], Optional[str]]

# Named array fields tried, in order, when a body is an object.
KNOWN_ARRAY_FIELDS: Tuple[str, ...] = ("airportsByCities", "cities", "airports", "results")


def field_accessor(key: str) -> Accessor:
    """Accessor returning the stripped text of one field, or None."""

    def access(item: Mapping[str, Any]) -> Optional[str]:
        value = item.get(key)
        if value is None or isinstance(value, (bool, dict, list)):
            return None
        text = str(value).strip()
        return text or None

    access.__name__ = f"field[{key}]"
    return access


@dataclass(frozen=True)
class AttributeStrategy:
    """Ordered accessors for one canonical attribute."""

    attribute: str
    accessors: Tuple[Accessor, ...]

    @classmethod
    def from_fields(cls, attribute: str, *keys: str) -> AttributeStrategy:
        return cls(attribute, tuple(field_accessor(k) for k in keys))

    def extract(self, item: Mapping[str, Any]) -> Optional[str]:
        for accessor in self.accessors:
            value = accessor(item)
            if value:
                return value
        return None


NAME_STRATEGY = AttributeStrategy.from_fields(
    "display_name", "nameAirport", "nameCity", "city", "nameIata", "name"
)
CODE_STRATEGY = AttributeStrategy.from_fields(
    "iata_code", "codeIataAirport", "codeIata", "iata", "code"
)
CITY_STRATEGY = AttributeStrategy.from_fields("city", "nameCity", "city", "municipality")
REGION_STRATEGY = AttributeStrategy.from_fields("region", "state", "region", "nameState")
COUNTRY_STRATEGY = AttributeStrategy.from_fields(
    "country", "nameCountry", "country", "codeIso2Country"
)


def normalize_item(item: Any) -> Optional[CanonicalAirport]:
    """Build a CanonicalAirport from one raw item, or None if unusable."""
    if not isinstance(item, Mapping):
        return None

    name = NAME_STRATEGY.extract(item)
    code = CODE_STRATEGY.extract(item)
    if not name and not code:
        return None

    return CanonicalAirport(
        display_name=name or "",
        iata_code=code.upper() if code else None,
        city=CITY_STRATEGY.extract(item),
        region=REGION_STRATEGY.extract(item),
        country=COUNTRY_STRATEGY.extract(item),
    )


def normalize_items(items: Iterable[Any]) -> List[CanonicalAirport]:
    """Normalize raw items in provider order, dropping invalid ones."""
    airports: List[CanonicalAirport] = []
    dropped = 0
    for item in items:
        airport = normalize_item(item)
        if airport is None:
            dropped += 1
            continue
        airports.append(airport)
    if dropped:
        logger.debug(
            "Dropped raw airport items without name or code",
            extra={"dropped": dropped, "kept": len(airports)},
        )
    return airports


def extract_array(body: Any) -> Optional[Sequence[Any]]:
    """Find the result array in an autocomplete response body.

    The body itself if it is a list; else the first known array field;
    else the first list-valued field in the body's own order.
    """
    if isinstance(body, list):
        return body
    if not isinstance(body, Mapping):
        return None
    for key in KNOWN_ARRAY_FIELDS:
        value = body.get(key)
        if isinstance(value, list):
            return value
    for value in body.values():
        if isinstance(value, list):
            return value
    return None


def format_airport_label(airport: CanonicalAirport) -> str:
    """Text written into a location field when a suggestion is chosen."""
    name = airport.display_name or "Unknown"
    return f"{name} ({airport.iata_code})" if airport.iata_code else name


def format_airport_location(airport: CanonicalAirport) -> str:
    city = airport.city or ""
    country = airport.country or ""
    if city and country:
        return f"{city} • {country}"
    return city or country or "Unknown Location"
