"""Airport search - resolution followed by ranking."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..domain.models import CanonicalAirport
from .airport_resolver import AirportResolutionService
from .flight_time import extract_code
from .ranking import RelevanceRanker


@dataclass
class AirportSearchService:
    """Type-ahead search: resolve, then rank and truncate.

    Attributes:
        resolver: Resolution engine
        ranker: Relevance ranking
    """

    resolver: AirportResolutionService
    ranker: RelevanceRanker = field(default_factory=RelevanceRanker)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def suggest(self, query: str) -> List[CanonicalAirport]:
        """Ranked suggestions for a location input."""
        candidates = self.resolver.resolve(query)
        if not candidates:
            return []
        return self.ranker.rank(candidates, query)

    def best_code(self, location: str) -> Optional[str]:
        """IATA code for a location field value.

        A code written into the text, e.g. "Austin (AUS)", wins; otherwise
        the best-ranked suggestion carrying a code is used.
        """
        code = extract_code(location)
        if code:
            return code
        for airport in self.suggest(location):
            if airport.iata_code:
                return airport.iata_code
        self._logger.info("No airport code for location", extra={"location": location})
        return None
