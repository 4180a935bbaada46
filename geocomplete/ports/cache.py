"""Cache port - Injectable caching for provider lookups.

Implementations:
- adapters/cache/memory_cache.py (InMemoryCache) - Production
- adapters/cache/null_cache.py (NullCache) - Testing
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Port for caching geocode and reverse-geocode results."""

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or None if missing or expired."""
        ...

    def set(self, key: str, value: T) -> None:
        """Store a value under ``key``."""
        ...

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Return the cached value, computing and storing it on a miss.

        Exceptions raised by ``compute_fn`` propagate and nothing is
        stored.
        """
        ...

    def clear(self) -> int:
        """Drop every entry and return how many there were."""
        ...

    def invalidate(self, key: str) -> bool:
        """Drop one entry. Returns True if it existed."""
        ...

    def size(self) -> int:
        """Return the number of entries."""
        ...
