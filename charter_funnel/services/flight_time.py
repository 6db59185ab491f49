"""Flight-time estimation for charter quotes.

Three tiers, first hit wins:
1. exact IATA code pair from a directed table of base minutes,
2. known city names found in the free-text locations,
3. a per-class default duration.

Base minutes from tiers 1 and 2 are scaled by an aircraft-class factor
and rounded half up. The estimator never raises.
"""

from __future__ import annotations

import math
import re
from typing import Dict, Optional, Tuple, Union

from ..domain.models import AircraftClass

_PAREN_CODE = re.compile(r"\(([A-Z]{3})\)")
_BARE_CODE = re.compile(r"[A-Z]{3}")

ROUTE_MINUTES: Dict[Tuple[str, str], int] = {
    ("AUS", "MSY"): 105, ("MSY", "AUS"): 105,
    ("AUS", "LAX"): 180, ("LAX", "AUS"): 180,
    ("AUS", "JFK"): 210, ("JFK", "AUS"): 210,
    ("AUS", "LGA"): 210, ("LGA", "AUS"): 210,
    ("AUS", "MIA"): 165, ("MIA", "AUS"): 165,
    ("AUS", "SEA"): 240, ("SEA", "AUS"): 240,
    ("AUS", "ORD"): 135, ("ORD", "AUS"): 135,
    ("JFK", "LAX"): 360, ("LAX", "JFK"): 360,
    ("LGA", "LAX"): 360, ("LAX", "LGA"): 360,
    ("LAX", "MIA"): 270, ("MIA", "LAX"): 270,
    ("ORD", "MIA"): 150, ("MIA", "ORD"): 150,
    ("JFK", "MIA"): 165, ("MIA", "JFK"): 165,
    ("LGA", "MIA"): 165, ("MIA", "LGA"): 165,
}  # fmt: skip

# Lower-case city names matched as substrings of the location text.
CITY_PAIR_MINUTES: Dict[Tuple[str, str], int] = {
    ("austin", "new orleans"): 105,
    ("austin", "los angeles"): 180,
    ("austin", "new york"): 210,
    ("austin", "miami"): 165,
    ("austin", "seattle"): 240,
    ("austin", "chicago"): 135,
    ("new york", "los angeles"): 360,
    ("los angeles", "miami"): 270,
    ("chicago", "miami"): 150,
    ("new york", "miami"): 165,
}

CLASS_FACTORS: Dict[AircraftClass, float] = {
    AircraftClass.LIGHT: 1.00,
    AircraftClass.MIDSIZE: 0.95,
    AircraftClass.HEAVY: 0.90,
    AircraftClass.ULTRA_LONG_RANGE: 0.85,
}

DEFAULT_DURATIONS: Dict[AircraftClass, str] = {
    AircraftClass.LIGHT: "2h 15m",
    AircraftClass.MIDSIZE: "2h 10m",
    AircraftClass.HEAVY: "2h 5m",
    AircraftClass.ULTRA_LONG_RANGE: "2h 0m",
}

FALLBACK_DURATION = "2h 0m"

AircraftClassLike = Union[AircraftClass, str]


def extract_code(location: Optional[str]) -> Optional[str]:
    """IATA code in a location string: "Austin (AUS)" or a bare "AUS"."""
    if not location:
        return None
    match = _PAREN_CODE.search(location)
    if match:
        return match.group(1)
    stripped = location.strip()
    if _BARE_CODE.fullmatch(stripped):
        return stripped
    return None


def format_duration(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m" if hours > 0 else f"{mins}m"


def _coerce_class(aircraft_class: AircraftClassLike) -> Optional[AircraftClass]:
    if isinstance(aircraft_class, AircraftClass):
        return aircraft_class
    return AircraftClass.from_label(str(aircraft_class))


def _city_pair_minutes(origin: str, destination: str) -> Optional[int]:
    origin_l = origin.lower()
    destination_l = destination.lower()
    for (a, b), minutes in CITY_PAIR_MINUTES.items():
        if (a in origin_l and b in destination_l) or (b in origin_l and a in destination_l):
            return minutes
    return None


def base_minutes(origin: Optional[str], destination: Optional[str]) -> Optional[int]:
    """Unadjusted minutes from the code table or the city heuristics."""
    origin_code = extract_code(origin)
    destination_code = extract_code(destination)
    if origin_code and destination_code:
        minutes = ROUTE_MINUTES.get((origin_code, destination_code))
        if minutes is not None:
            return minutes

    if origin and destination:
        return _city_pair_minutes(origin, destination)
    return None


def estimate_minutes(
    origin: Optional[str],
    destination: Optional[str],
    aircraft_class: AircraftClassLike,
) -> Optional[int]:
    """Adjusted minutes, or None when only the default table applies."""
    minutes = base_minutes(origin, destination)
    if minutes is None:
        return None
    cls = _coerce_class(aircraft_class)
    factor = CLASS_FACTORS.get(cls, 1.0) if cls is not None else 1.0
    # Half up, not banker's rounding: 94.5 -> 95
    return int(math.floor(minutes * factor + 0.5))


def estimate(
    origin: Optional[str],
    destination: Optional[str],
    aircraft_class: AircraftClassLike,
) -> str:
    """Estimated flight duration, e.g. "1h 45m".

    Args:
        origin: Origin location text or IATA code.
        destination: Destination location text or IATA code.
        aircraft_class: AircraftClass or its display label.
    """
    minutes = estimate_minutes(origin, destination, aircraft_class)
    if minutes is not None:
        return format_duration(minutes)
    cls = _coerce_class(aircraft_class)
    if cls is None:
        return FALLBACK_DURATION
    return DEFAULT_DURATIONS.get(cls, FALLBACK_DURATION)
