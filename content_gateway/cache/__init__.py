"""Two-tier caching layer for gateway responses.

This package provides:
- Cache stores (RedisCache, MemoryCache) behind the CacheStore protocol
- Cache key generation for primary and stale keys (CacheKeyGenerator)
- TTL resolution (resolve_ttl)
- Cache operations (CacheManager)
- Request coalescing for concurrent misses (RequestCoalescer)
- Graceful fail-open behavior
"""

from content_gateway.cache.coalescer import RequestCoalescer
from content_gateway.cache.connection import RedisCache
from content_gateway.cache.keys import CacheKeyGenerator
from content_gateway.cache.manager import CachedValue, CacheManager
from content_gateway.cache.memory import MemoryCache
from content_gateway.cache.store import CacheStore
from content_gateway.cache.ttl import resolve_ttl, to_seconds

__all__ = [
    # Stores
    "CacheStore",
    "MemoryCache",
    "RedisCache",
    # Key generation
    "CacheKeyGenerator",
    # Cache manager
    "CacheManager",
    "CachedValue",
    # TTL
    "resolve_ttl",
    "to_seconds",
    # Coalescing
    "RequestCoalescer",
]
