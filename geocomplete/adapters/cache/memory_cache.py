"""Thread-safe in-memory cache for provider lookups.

Geocoding results are cached for ``default_ttl_seconds`` (30 days by
default, see GeocodingConfig.cache_duration_seconds) so repeated form
loads do not hit the provider for the same coordinates.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, NamedTuple, Optional, TypeVar

T = TypeVar("T")


class _Entry(NamedTuple):
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


@dataclass
class InMemoryCache(Generic[T]):
    """Geocoding cache with per-entry expiry and insertion-order eviction.

    Implements CachePort.

    Attributes:
        default_ttl_seconds: Lifetime of an entry (None = never expires)
        max_size: Maximum number of entries (None = unlimited)
        name: Cache name, used as logger suffix

    Example:
        cache = InMemoryCache[GeocodeResult](name="reverse", default_ttl_seconds=3600)
        result = cache.get_or_compute("40.0,-75.0", lambda: lookup(40.0, -75.0))
    """

    default_ttl_seconds: Optional[float] = None
    max_size: Optional[int] = None
    name: str = "cache"

    _entries: "OrderedDict[str, _Entry]" = field(default_factory=OrderedDict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)
    _counters: Dict[str, int] = field(
        default_factory=lambda: {"hits": 0, "misses": 0, "evictions": 0}, repr=False
    )

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _expiry(self, ttl: Optional[float]) -> float:
        lifetime = self.default_ttl_seconds if ttl is None else ttl
        if lifetime is None:
            return float("inf")
        return time.monotonic() + lifetime

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_expired(time.monotonic()):
                del self._entries[key]
                self._logger.debug("Geocode cache entry expired", extra={"key": key})
                entry = None

            if entry is None:
                self._counters["misses"] += 1
                return None

            self._counters["hits"] += 1
            return entry.value

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Store ``value``; ``ttl`` overrides the default lifetime."""
        with self._lock:
            self._entries.pop(key, None)
            while self.max_size is not None and len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self._counters["evictions"] += 1
                self._logger.debug("Geocode cache full, evicted", extra={"key": evicted})
            self._entries[key] = _Entry(value, self._expiry(ttl))

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached

        # No lock held here: provider calls are slow.
        value = compute_fn()
        self.set(key, value)
        return value

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        with self._lock:
            now = time.monotonic()
            stale = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in stale:
                del self._entries[key]
            return len(stale)

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            for counter in self._counters:
                self._counters[counter] = 0
            self._logger.info("Geocode cache cleared", extra={"entries_cleared": count})
            return count

    def invalidate(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> Dict[str, Any]:
        """Return hit/miss/eviction counters and current size."""
        with self._lock:
            lookups = self._counters["hits"] + self._counters["misses"]
            return {
                "size": len(self._entries),
                **self._counters,
                "hit_rate_percent": (
                    round(self._counters["hits"] / lookups * 100, 1) if lookups else 0.0
                ),
            }
