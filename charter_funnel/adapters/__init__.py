"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the funnel core to external systems:
- Airport directories (Aviation Edge HTTP API, bundled US list)
- Resolution caches (in-memory, null)
- Itinerary submission (HTTP webhook)
- Quote providers (synthetic, HTTP)
"""
