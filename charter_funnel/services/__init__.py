"""Services layer - Application orchestration.

This module contains the funnel services that orchestrate the flow of
data through adapters to fulfill use cases.

Available services:
- AirportResolutionService: Directory fallback chain with caching
- RelevanceRanker: Scores and orders candidates for a query
- AirportSearchService: Resolution followed by ranking
- LocationSuggester: Type-ahead with a freshness guard
- BookingWizard: Step-graph state machine for one booking
"""

from .airport_resolver import AirportResolutionService
from .airport_search import AirportSearchService
from .booking_wizard import BookingWizard
from .ranking import RelevanceRanker
from .suggestions import LocationSuggester, SuggestionTicket

__all__ = [
    "AirportResolutionService",
    "AirportSearchService",
    "BookingWizard",
    "LocationSuggester",
    "RelevanceRanker",
    "SuggestionTicket",
]
