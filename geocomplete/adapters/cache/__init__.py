"""Cache adapters - Implementations of the CachePort.

- InMemoryCache: thread-safe in-memory cache with optional TTL
- NullCache: no-op cache (always misses)
"""

from .memory_cache import InMemoryCache
from .null_cache import NullCache

__all__ = ["InMemoryCache", "NullCache"]
