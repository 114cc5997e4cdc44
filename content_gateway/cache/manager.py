"""Cache manager for the two-tier cache with fail-open error handling.

This module provides the CacheManager class which stores parsed payloads in
a key-value store under a primary key and, optionally, a longer-lived stale
key. Store failures degrade to cache misses instead of failing requests.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from content_gateway.cache.keys import CacheKeyGenerator
from content_gateway.cache.store import CacheStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CachedValue:
    """
    A payload read back from the cache.

    Attributes:
        data: The decoded payload, exactly as it was parsed when written
        cached_at: When the entry was written (UTC)
        ttl: Lifetime the entry was written with, None if it never expires
    """

    data: Any
    cached_at: datetime
    ttl: Optional[int]

    @property
    def age_seconds(self) -> int:
        return int((datetime.now(timezone.utc) - self.cached_at).total_seconds())


class CacheManager:
    """
    Typed wrapper over a CacheStore.

    Values are stored as a JSON envelope ``{"data", "cached_at", "ttl"}`` so
    that a cached JSON ``null`` can be told apart from a miss. All operations
    fail open when the store is unavailable or erroring.

    Attributes:
        store: Backend implementing CacheStore
        keys: Key generator for primary/stale keys
    """

    def __init__(self, store: CacheStore, keys: Optional[CacheKeyGenerator] = None) -> None:
        self.store = store
        self.keys = keys or CacheKeyGenerator()

    async def read(self, key: str) -> Optional[CachedValue]:
        """
        Retrieve cached value by key.

        Args:
            key: Cache key to retrieve

        Returns:
            CachedValue if found, None on miss (or when the store fails)

        Example:
            >>> cached = await manager.read("content_gateway:http://api.example.com/a")
            >>> if cached:
            ...     print(f"Cache age: {cached.age_seconds}s")
        """
        if not self.store.is_available():
            logger.debug("cache_get_skipped", reason="store_not_available", key=key)
            return None

        try:
            raw = await self.store.get(key)

            if raw is None:
                logger.debug("cache_miss", key=key)
                return None

            envelope = json.loads(raw)
            cached = CachedValue(
                data=envelope["data"],
                cached_at=datetime.fromisoformat(envelope["cached_at"]),
                ttl=envelope.get("ttl"),
            )

            logger.debug(
                "cache_hit",
                key=key,
                age_seconds=cached.age_seconds,
                ttl=cached.ttl,
            )
            return cached

        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error(
                "cache_get_decode_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            # Invalid cached data - delete it
            await self.delete(key)
            return None

        except Exception as e:
            logger.error(
                "cache_get_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            # Fail open - treat as cache miss
            return None

    async def write(self, key: str, value: Any, ttl: Optional[int]) -> bool:
        """
        Store value under key, overwriting any previous entry.

        The TTL counts from the moment of writing and is not renewed by reads.

        Args:
            key: Cache key
            value: Parsed payload (must be JSON-serializable)
            ttl: Time to live in seconds; None means no expiry

        Returns:
            True if cached successfully, False otherwise
        """
        if not self.store.is_available():
            logger.debug("cache_set_skipped", reason="store_not_available", key=key)
            return False

        if ttl is not None and ttl <= 0:
            logger.warning("cache_set_skipped", reason="non_positive_ttl", key=key, ttl=ttl)
            return False

        try:
            envelope = {
                "data": value,
                "cached_at": datetime.now(timezone.utc).isoformat(),
                "ttl": ttl,
            }
            serialized = json.dumps(envelope)

            await self.store.set(key, serialized, ttl)

            logger.debug(
                "cache_set",
                key=key,
                ttl=ttl,
                data_size=len(serialized),
            )
            return True

        except (TypeError, ValueError) as e:
            logger.error(
                "cache_set_serialization_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        except Exception as e:
            logger.error(
                "cache_set_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            # Cache write failures shouldn't break requests
            return False

    async def delete(self, key: str) -> bool:
        """
        Delete cached value by key.

        Returns:
            True if deleted, False if absent or the store failed
        """
        if not self.store.is_available():
            logger.debug("cache_delete_skipped", reason="store_not_available", key=key)
            return False

        try:
            deleted = await self.store.delete(key)
            logger.debug("cache_delete", key=key, deleted=deleted)
            return deleted

        except Exception as e:
            logger.error(
                "cache_delete_error",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    async def read_primary(self, url: str) -> Optional[CachedValue]:
        return await self.read(self.keys.primary(url))

    async def read_stale(self, url: str) -> Optional[CachedValue]:
        return await self.read(self.keys.stale(url))

    async def write_primary(self, url: str, value: Any, ttl: Optional[int]) -> bool:
        return await self.write(self.keys.primary(url), value, ttl)

    async def write_stale(self, url: str, value: Any, ttl: Optional[int]) -> bool:
        return await self.write(self.keys.stale(url), value, ttl)

    async def clear(self, url: str) -> None:
        """
        Remove both cache tiers for a URL.

        Idempotent: clearing a URL with nothing cached is not an error.

        Example:
            >>> await manager.clear("http://api.example.com/items")
        """
        primary_deleted = await self.delete(self.keys.primary(url))
        stale_deleted = await self.delete(self.keys.stale(url))

        logger.info(
            "cache_cleared",
            url=url,
            primary_deleted=primary_deleted,
            stale_deleted=stale_deleted,
        )
