"""Quote provider adapters - Implementations of QuoteProviderPort.

Available implementations:
- SyntheticQuoteProvider: Client-side synthesized quotes (one per aircraft class)
- HttpQuoteProvider: Remote charter-quote API
"""

from .http_quote_adapter import HttpQuoteProvider
from .synthetic_quote_adapter import FLEET, FleetEntry, SyntheticQuoteProvider

__all__ = ["FLEET", "FleetEntry", "HttpQuoteProvider", "SyntheticQuoteProvider"]
