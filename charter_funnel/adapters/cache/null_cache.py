"""Null result cache for testing.

Always misses, so every resolution reaches the directories. Use it in
tests that count lookup calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class NullResultCache(Generic[T]):
    """No-op cache - stores nothing, always misses."""

    name: str = "null"

    def get(self, query: str) -> Optional[T]:
        return None

    def set(self, query: str, value: T, ttl: Optional[float] = None) -> None:
        pass

    def invalidate(self, query: str) -> bool:
        return False

    def clear(self) -> int:
        return 0

    def size(self) -> int:
        return 0

    def stats(self) -> Dict[str, int]:
        return {"size": 0, "hits": 0, "misses": 0, "hit_rate_percent": 0}
