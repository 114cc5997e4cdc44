"""Redis connection and pooling management.

This module provides the RedisCache store for managing Redis connections
with connection pooling and graceful error handling.
"""

from typing import Optional

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

import structlog

logger = structlog.get_logger(__name__)


class RedisCache:
    """
    Redis-backed cache store with connection pooling.

    Provides connection pool management, health checks and the get/set/delete
    primitives used by CacheManager. Errors from individual operations are
    raised; CacheManager decides how to degrade.

    Attributes:
        pool: Redis connection pool
        client: Redis client instance
    """

    def __init__(self, redis_url: str = "redis://localhost:6379/0", max_connections: int = 20) -> None:
        """
        Initialize Redis cache with connection pooling.

        Args:
            redis_url: Redis connection URL
            max_connections: Upper bound of pooled connections
        """
        self.redis_url = redis_url
        self.max_connections = max_connections
        self.pool: Optional[ConnectionPool] = None
        self.client: Optional[redis.Redis] = None
        self._initialize_pool()

    def _initialize_pool(self) -> None:
        """Initialize Redis connection pool from the configured URL."""
        try:
            self.pool = ConnectionPool.from_url(
                self.redis_url,
                max_connections=self.max_connections,
                decode_responses=True,  # Auto-decode bytes to str
                socket_timeout=5,
                socket_connect_timeout=5,
                retry_on_timeout=True,
            )

            self.client = redis.Redis(connection_pool=self.pool)

            logger.info(
                "redis_pool_initialized",
                max_connections=self.max_connections,
                redis_url=self.redis_url.split("@")[-1],  # Don't log credentials
            )

        except Exception as e:
            logger.error(
                "redis_pool_initialization_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            # Fail open - cache unavailable but the gateway keeps fetching
            self.client = None
            self.pool = None

    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent or expired."""
        return await self._require_client().get(key)

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """
        Store value, replacing any previous one.

        Args:
            key: Cache key
            value: Serialized value
            ttl: Seconds until expiry; None stores without expiry
        """
        client = self._require_client()
        if ttl is None:
            await client.set(key, value)
        else:
            await client.setex(key, ttl, value)

    async def delete(self, key: str) -> bool:
        """Delete key; return whether it existed."""
        result = await self._require_client().delete(key)
        return bool(result)

    def _require_client(self) -> redis.Redis:
        if self.client is None:
            raise ConnectionError("Redis client not initialized")
        return self.client

    async def ping(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            True if Redis is healthy, False otherwise

        Example:
            >>> cache = RedisCache("redis://localhost:6379/0")
            >>> is_healthy = await cache.ping()
        """
        if not self.client:
            logger.warning("redis_ping_failed", reason="client_not_initialized")
            return False

        try:
            result = await self.client.ping()
            logger.debug("redis_ping_success", result=result)
            return result

        except Exception as e:
            logger.error(
                "redis_ping_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    async def close(self) -> None:
        """
        Close Redis connection pool gracefully.

        Should be called during application shutdown to ensure
        all connections are properly closed.
        """
        try:
            if self.client:
                await self.client.aclose()
                logger.info("redis_client_closed")

            if self.pool:
                await self.pool.disconnect()
                logger.info("redis_pool_disconnected")

        except Exception as e:
            logger.error(
                "redis_close_error",
                error=str(e),
                error_type=type(e).__name__,
            )

    def is_available(self) -> bool:
        """
        Check if Redis client is available.

        Note:
            This only checks if the client exists, not if Redis is reachable.
            Use ping() for a real health check.
        """
        return self.client is not None
