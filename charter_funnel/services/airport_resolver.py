"""Airport resolution service - free text to canonical airports.

The service walks its directories in order and returns the first
non-empty normalized answer. Directory failures of any kind are logged
and end in an empty list; resolve() never raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..adapters.cache.memory_cache import InMemoryResultCache
from ..config import LookupConfig, get_config
from ..domain.models import CanonicalAirport
from ..domain.normalization import normalize_items
from ..ports.airport_directory import AirportDirectoryPort
from ..ports.cache import ResultCachePort


@dataclass
class AirportResolutionService:
    """Resolve user input against one or more airport directories.

    Attributes:
        directories: Directories tried in order
        config: Lookup configuration (minimum query length)
        cache: Cache of successful resolutions
    """

    directories: Sequence[AirportDirectoryPort]
    config: LookupConfig = field(default_factory=lambda: get_config().lookup)
    cache: Optional[ResultCachePort[Tuple[CanonicalAirport, ...]]] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.cache is None:
            self.cache = InMemoryResultCache(
                name="airports",
                default_ttl_seconds=self.config.cache_ttl_seconds,
                max_size=self.config.cache_max_size,
            )

    def resolve(self, query: str) -> List[CanonicalAirport]:
        """Resolve a query to canonical airports, in provider order.

        Args:
            query: Raw user input.

        Returns:
            Canonical airports, or an empty list when the query is too
            short, nothing matched, or every directory failed.
        """
        q = query.strip()
        if len(q) < self.config.min_query_length:
            return []

        assert self.cache is not None
        cached = self.cache.get(q)
        if cached is not None:
            self._logger.debug("Resolution cache hit", extra={"query": q})
            return list(cached)

        for directory in self.directories:
            directory_name = getattr(directory, "name", type(directory).__name__)
            try:
                raw = directory.lookup(q)
            except Exception as e:
                self._logger.error(
                    "Airport directory raised",
                    extra={"directory": directory_name, "query": q, "error": str(e)},
                )
                continue

            if raw is None:
                self._logger.info(
                    "Airport directory unavailable",
                    extra={"directory": directory_name, "query": q},
                )
                continue

            airports = normalize_items(raw)
            if airports:
                self._logger.debug(
                    "Query resolved",
                    extra={
                        "directory": directory_name,
                        "query": q,
                        "airports": len(airports),
                    },
                )
                self.cache.set(q, tuple(airports))
                return airports

        self._logger.info("No airports resolved", extra={"query": q})
        return []
