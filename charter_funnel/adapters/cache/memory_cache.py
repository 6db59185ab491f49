"""Thread-safe in-memory cache for airport resolution results.

Keys are user queries folded to a canonical form, so "JFK ", "jfk" and
"Jfk" share one entry. Entries expire after a TTL and the oldest entry
is evicted once the cache is full.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


def normalize_query_key(query: str) -> str:
    return " ".join(query.split()).lower()


@dataclass
class InMemoryResultCache(Generic[T]):
    """Thread-safe query cache with optional TTL and size bound.

    Attributes:
        default_ttl_seconds: Time-to-live for entries (None = no expiry)
        max_size: Maximum number of entries (None = unlimited)
        name: Cache name for logging

    Example:
        cache = InMemoryResultCache[tuple](name="airports", default_ttl_seconds=300)
        cache.set("Austin", airports)
        cache.get("austin")
    """

    default_ttl_seconds: Optional[float] = None
    max_size: Optional[int] = None
    name: str = "results"

    _store: Dict[str, Tuple[Any, float]] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def get(self, query: str) -> Optional[T]:
        key = normalize_query_key(query)
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None

            value, expiry = entry
            if time.monotonic() > expiry:
                del self._store[key]
                self._logger.debug("Cache entry expired", extra={"key": key})
                self._misses += 1
                return None

            self._hits += 1
            return value

    def set(self, query: str, value: T, ttl: Optional[float] = None) -> None:
        key = normalize_query_key(query)
        with self._lock:
            if (
                self.max_size is not None
                and key not in self._store
                and len(self._store) >= self.max_size
            ):
                oldest_key = next(iter(self._store))
                del self._store[oldest_key]
                self._logger.debug(
                    "Cache evicted entry",
                    extra={"key": oldest_key, "reason": "max_size"},
                )

            effective_ttl = ttl if ttl is not None else self.default_ttl_seconds
            expiry = (
                time.monotonic() + effective_ttl
                if effective_ttl is not None
                else float("inf")
            )
            # Re-inserting moves the key to the back of the eviction order.
            self._store.pop(key, None)
            self._store[key] = (value, expiry)

    def invalidate(self, query: str) -> bool:
        key = normalize_query_key(query)
        with self._lock:
            if key in self._store:
                del self._store[key]
                return True
            return False

    def clear(self) -> int:
        with self._lock:
            count = len(self._store)
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._logger.info("Cache cleared", extra={"entries_cleared": count})
            return count

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict[str, Any]:
        """Return hit/miss counts, hit rate and size."""
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate_percent": round(hit_rate, 1),
            }
