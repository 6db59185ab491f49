"""Airport directory adapters - Implementations of AirportDirectoryPort.

Available implementations:
- AviationEdgeDirectoryAdapter: Aviation Edge HTTP API (code search + autocomplete chain)
- StaticAirportDirectory: Bundled list of US commercial airports
"""

from .aviation_edge_adapter import AviationEdgeDirectoryAdapter
from .static_directory import StaticAirportDirectory

__all__ = ["AviationEdgeDirectoryAdapter", "StaticAirportDirectory"]
