"""Airport directory port - Abstraction over airport lookup services.

Directories return raw, provider-shaped items; turning them into
CanonicalAirport records is the resolver's job, so every directory can
keep its own schema.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

RawAirportItem = Mapping[str, Any]


class AirportDirectoryPort(Protocol):
    """Port for airport lookup services.

    Implementations:
    - adapters/lookup/aviation_edge_adapter.py (AviationEdgeDirectoryAdapter)
    - adapters/lookup/static_directory.py (StaticAirportDirectory)
    """

    name: str

    def lookup(self, query: str) -> Optional[Sequence[Any]]:
        """Look up airports matching a user query.

        Args:
            query: Trimmed user input, at least the minimum query length.

        Returns:
            Raw result items (possibly empty) when the directory answered,
            or None when it was unavailable.
        """
        ...
