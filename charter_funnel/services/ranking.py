"""Relevance ranking of resolved airports against a partial query.

Scores are additive. Candidates that match the query on neither code,
name nor city are penalized rather than removed, so loosely related
provider results still show up, last. Sorting is stable: equal scores
keep the provider's order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..config import RankingConfig, get_config
from ..domain.models import CanonicalAirport, ScoredCandidate
from ..domain.us_states import US_STATE_NAMES_LOWER

MAX_RESULTS = 8

CODE_EXACT = 1000
NAME_PREFIX = 500
NAME_CONTAINS = 200
CITY_PREFIX = 150
CITY_CONTAINS = 100
COUNTRY_OR_REGION_CONTAINS = 50
STATE_IN_US = 200
STATE_OUTSIDE_US = -100
NO_MATCH_PENALTY = -500


def normalize_query(query: str) -> str:
    return query.strip().lower()


def score_candidate(airport: CanonicalAirport, query: str) -> int:
    """Relevance of one airport for a query."""
    q = normalize_query(query)
    if not q:
        return 0

    name = airport.display_name.lower()
    city = (airport.city or "").lower()
    code = (airport.iata_code or "").lower()
    country = (airport.country or "").lower()
    region = (airport.region or "").lower()

    score = 0
    code_match = bool(code) and code == q
    if code_match:
        score += CODE_EXACT
    if name.startswith(q):
        score += NAME_PREFIX
    name_match = q in name
    if name_match:
        score += NAME_CONTAINS
    if city.startswith(q):
        score += CITY_PREFIX
    city_match = q in city
    if city_match:
        score += CITY_CONTAINS
    if q in country or q in region:
        score += COUNTRY_OR_REGION_CONTAINS

    if q in US_STATE_NAMES_LOWER:
        score += STATE_IN_US if "united states" in country else STATE_OUTSIDE_US

    if not (code_match or name_match or city_match):
        score += NO_MATCH_PENALTY

    return score


def score_candidates(
    candidates: Sequence[CanonicalAirport], query: str
) -> List[ScoredCandidate]:
    """Score every candidate, keeping provider order."""
    return [ScoredCandidate(airport, score_candidate(airport, query)) for airport in candidates]


def rank_scored(
    candidates: Sequence[CanonicalAirport], query: str, limit: int = MAX_RESULTS
) -> List[ScoredCandidate]:
    """Scored candidates, best first, at most `limit` of them."""
    scored = score_candidates(candidates, query)
    # sorted() is stable, so ties keep provider order
    scored = sorted(scored, key=lambda c: c.score, reverse=True)
    return scored[: max(limit, 0)]


def rank(
    candidates: Sequence[CanonicalAirport], query: str, limit: int = MAX_RESULTS
) -> List[CanonicalAirport]:
    """Airports ordered by relevance, at most `limit` of them."""
    return [c.airport for c in rank_scored(candidates, query, limit)]


@dataclass
class RelevanceRanker:
    """Ranking with the configured result limit."""

    config: RankingConfig = field(default_factory=lambda: get_config().ranking)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def rank(
        self,
        candidates: Sequence[CanonicalAirport],
        query: str,
        limit: Optional[int] = None,
    ) -> List[CanonicalAirport]:
        limit = self.config.max_results if limit is None else limit
        ranked = rank(candidates, query, limit)
        self._logger.debug(
            "Candidates ranked",
            extra={"query": query, "candidates": len(candidates), "kept": len(ranked)},
        )
        return ranked
