"""Cache port - Injectable cache for airport resolution results."""

from __future__ import annotations

from typing import Generic, Optional, Protocol, TypeVar

T = TypeVar("T")


class ResultCachePort(Protocol[T]):
    """Port for caching resolution results keyed by query.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryResultCache) - Production
    - adapters/cache/null_cache.py (NullResultCache) - Testing
    """

    def get(self, query: str) -> Optional[T]:
        """Return the cached value for a query, or None if absent or expired."""
        ...

    def set(self, query: str, value: T) -> None:
        """Store a value for a query."""
        ...

    def invalidate(self, query: str) -> bool:
        """Drop one query. Returns True if it was cached."""
        ...

    def clear(self) -> int:
        """Drop everything. Returns the number of entries removed."""
        ...

    def size(self) -> int:
        ...
