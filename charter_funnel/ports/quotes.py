"""Quote provider port - Produces charter quotes for an itinerary."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Itinerary, Quote


class QuoteProviderPort(Protocol):
    """Port for quote providers.

    Implementations:
    - adapters/quotes/synthetic_quote_adapter.py (SyntheticQuoteProvider)
    - adapters/quotes/http_quote_adapter.py (HttpQuoteProvider)
    """

    def fetch_quotes(self, itinerary: Itinerary) -> Sequence[Quote]:
        """Return quotes for the itinerary.

        Raises:
            QuoteProviderError: If no quotes could be produced.
        """
        ...
