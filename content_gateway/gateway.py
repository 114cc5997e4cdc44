"""
Content gateway: cache-aside fetching with stale fallback.

``ContentGateway.get`` resolves the caller's options, serves the primary
cache entry when present, otherwise fetches the URL and caches the parsed
payload. Transient failures are answered from the longer-lived stale copy
when one exists; client errors (4xx) are returned as-is.
"""

import json
import time
from typing import Any, Optional

import httpx
import structlog

from content_gateway.cache import (
    CacheKeyGenerator,
    CacheManager,
    CacheStore,
    MemoryCache,
    RedisCache,
    RequestCoalescer,
    resolve_ttl,
)
from content_gateway.config import GatewayConfig
from content_gateway.fetcher import (
    ClientError,
    ContentFetcher,
    OtherFailure,
    Outcome,
    Success,
    create_http_client,
)
from content_gateway.models.responses import ErrorKind, GatewayResult, ResultSource
from content_gateway.policy import RawOptions, ResolvedOptions, resolve_options

logger = structlog.get_logger(__name__)


class ContentGateway:
    """
    Fetch gateway for third-party JSON APIs.

    Collaborators are injected: the cache store (Redis, in-memory or a fake)
    and the HTTP client (the connection pool). Whatever the gateway creates
    itself it also closes in ``close()``.

    Attributes:
        config: Gateway configuration
        cache: CacheManager over the cache store
        fetcher: ContentFetcher over the HTTP client

    Example:
        >>> async with ContentGateway(GatewayConfig(user_agent="Example/1.0")) as gateway:
        ...     result = await gateway.get(
        ...         "http://api.example.com/items",
        ...         {"cache_policy": {"expires_in": 120, "stale_expires_in": 3600}},
        ...     )
        ...     print(result.ok, result.data)
    """

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        store: Optional[CacheStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            config: Gateway configuration (defaults apply when None)
            store: Cache store; built from ``config.redis_url`` when None
                (MemoryCache if no URL is configured)
            http_client: Shared HTTP client; created from config when None
        """
        self.config = config or GatewayConfig()

        self._owns_store = store is None
        if store is None:
            store = RedisCache(self.config.redis_url) if self.config.redis_url else MemoryCache()

        self._owns_client = http_client is None
        if http_client is None:
            http_client = create_http_client(self.config)

        self.cache = CacheManager(store, CacheKeyGenerator(self.config.key_namespace))
        self.fetcher = ContentFetcher(self.config, http_client)
        self._coalescer = RequestCoalescer() if self.config.coalesce_requests else None

    async def get(self, url: str, options: RawOptions = None) -> GatewayResult:
        """
        Fetch a URL, consulting the cache according to the cache policy.

        Args:
            url: Resource URL
            options: None, a FetchOptions, or a mapping with keys ``headers``,
                ``request_options`` and ``cache_policy``

        Returns:
            GatewayResult with the payload, or the error kind

        Raises:
            InvalidOptionsError: If options are malformed
        """
        resolved = resolve_options(options)
        started = time.perf_counter()

        if resolved.skip:
            result = await self._get_uncached(url, resolved)
        else:
            result = await self._get_cache_aside(url, resolved)

        logger.info(
            "gateway_request",
            url=url,
            skip_cache=resolved.skip,
            source=result.source.value,
            error=result.error.value if result.error else None,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return result

    async def clear_cache(self, url: str) -> None:
        """Delete both the primary and the stale entry for a URL."""
        await self.cache.clear(url)

    async def _get_uncached(self, url: str, resolved: ResolvedOptions) -> GatewayResult:
        outcome = await self._fetch(url, resolved)

        if isinstance(outcome, Success):
            return GatewayResult.success(outcome.value, ResultSource.UPSTREAM)
        if isinstance(outcome, ClientError):
            return GatewayResult.failure(outcome.kind)
        return GatewayResult.failure(ErrorKind.REQUEST_FAILED, outcome.message)

    async def _get_cache_aside(self, url: str, resolved: ResolvedOptions) -> GatewayResult:
        cached = await self.cache.read_primary(url)
        if cached is not None:
            logger.debug("primary_cache_hit", url=url, age_seconds=cached.age_seconds)
            return GatewayResult.success(cached.data, ResultSource.CACHE)

        logger.info("cache_miss", url=url)

        if self._coalescer is not None:
            outcome = await self._coalescer.run(
                self._coalescing_key(url, resolved),
                lambda: self._fetch(url, resolved),
            )
        else:
            outcome = await self._fetch(url, resolved)

        if isinstance(outcome, Success):
            await self._store(url, outcome.value, resolved)
            return GatewayResult.success(outcome.value, ResultSource.UPSTREAM)

        if isinstance(outcome, ClientError):
            return GatewayResult.failure(outcome.kind)

        return await self._fallback_to_stale(url, outcome)

    def _coalescing_key(self, url: str, resolved: ResolvedOptions) -> str:
        """Primary key plus everything that shapes the upstream request."""
        headers = sorted((name.lower(), value) for name, value in resolved.headers.items())
        return json.dumps(
            [
                self.cache.keys.primary(url),
                headers,
                resolved.request_options.model_dump(mode="json"),
            ],
            sort_keys=True,
            default=str,
        )

    async def _fetch(self, url: str, resolved: ResolvedOptions) -> Outcome:
        return await self.fetcher.fetch(url, resolved.headers, resolved.request_options)

    async def _store(self, url: str, value: Any, resolved: ResolvedOptions) -> None:
        await self.cache.write_primary(url, value, resolve_ttl(resolved.expires_in, value))

        if resolved.stale_expires_in is not None:
            await self.cache.write_stale(url, value, resolve_ttl(resolved.stale_expires_in, value))

    async def _fallback_to_stale(self, url: str, failure: OtherFailure) -> GatewayResult:
        stale = await self.cache.read_stale(url)

        if stale is not None:
            logger.info(
                "stale_fallback",
                url=url,
                reason=failure.message,
                age_seconds=stale.age_seconds,
            )
            return GatewayResult.success(stale.data, ResultSource.STALE)

        logger.warning("no_stale_available", url=url, reason=failure.message)
        return GatewayResult.failure(ErrorKind.NO_STALE, failure.message)

    async def close(self) -> None:
        """Close the HTTP client and cache store if this gateway created them."""
        if self._owns_client:
            await self.fetcher.client.aclose()
            logger.info("http_pool_closed", pool=self.config.pool_name)

        if self._owns_store:
            await self.cache.store.close()

    async def __aenter__(self) -> "ContentGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
