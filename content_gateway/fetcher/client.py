"""
Upstream HTTP fetcher using httpx.

This module provides ContentFetcher, which performs a single GET per call
through a shared ``httpx.AsyncClient`` and classifies the result into an
Outcome (Success, ClientError or OtherFailure).
"""

import json
import time
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

import httpx
import structlog

from content_gateway.config import GatewayConfig
from content_gateway.fetcher.outcome import ClientError, OtherFailure, Outcome, Success
from content_gateway.models.options import RequestOptions
from content_gateway.models.responses import CLIENT_ERROR_STATUSES

logger = structlog.get_logger(__name__)

# Parse failures are reported with this message (stale-fallback eligible)
PARSE_ERROR = "parse_error"


def create_http_client(config: GatewayConfig) -> httpx.AsyncClient:
    """
    Create the pooled HTTP client shared by all fetches of a gateway.

    Args:
        config: Gateway configuration (timeouts, User-Agent)

    Returns:
        httpx.AsyncClient configured with the gateway defaults
    """
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.request_timeout, connect=config.connection_timeout),
        headers={"User-Agent": config.user_agent},
    )
    logger.info(
        "http_pool_initialized",
        pool=config.pool_name,
        connection_timeout=config.connection_timeout,
        request_timeout=config.request_timeout,
    )
    return client


class ContentFetcher:
    """
    Fetches and classifies upstream JSON resources.

    Attributes:
        config: Gateway configuration supplying timeouts and User-Agent
        client: Shared httpx.AsyncClient (the connection pool)

    Example:
        >>> fetcher = ContentFetcher(config, create_http_client(config))
        >>> outcome = await fetcher.fetch("http://api.example.com/items")
        >>> if isinstance(outcome, Success):
        ...     print(outcome.value)
    """

    def __init__(self, config: GatewayConfig, client: httpx.AsyncClient) -> None:
        self.config = config
        self.client = client

    def merge_headers(self, headers: Optional[Mapping[str, str]] = None) -> httpx.Headers:
        """
        Merge caller headers with the identifying User-Agent.

        Header names are case-insensitive; the User-Agent always carries the
        configured value.
        """
        merged = httpx.Headers(headers or {})
        merged["User-Agent"] = self.config.user_agent
        return merged

    def merge_request_options(self, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        """
        Merge configured timeouts with caller request options.

        Caller values win. Returns keyword arguments for ``AsyncClient.get``.
        """
        options = options or RequestOptions()

        connect_timeout = options.connect_timeout or self.config.connection_timeout
        read_timeout = options.read_timeout or self.config.request_timeout

        kwargs: Dict[str, Any] = {
            "timeout": httpx.Timeout(read_timeout, connect=connect_timeout),
        }
        if options.follow_redirects is not None:
            kwargs["follow_redirects"] = options.follow_redirects
        if options.params:
            kwargs["params"] = options.params
        return kwargs

    async def fetch(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        request_options: Optional[RequestOptions] = None,
    ) -> Outcome:
        """
        Issue one GET and classify the result.

        Args:
            url: Resource URL
            headers: Caller headers
            request_options: Caller transport options

        Returns:
            Success with the parsed JSON body for HTTP 200,
            ClientError for 400/401/403/404,
            OtherFailure for anything else (status, transport, parse)
        """
        merged_headers = self.merge_headers(headers)
        transport_options = self.merge_request_options(request_options)
        started = time.perf_counter()

        try:
            response = await self.client.get(url, headers=merged_headers, **transport_options)
        # InvalidURL is not an HTTPError; URLs without a host fail with ValueError
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            reason = str(e) or type(e).__name__
            message = f"request error: {reason}, url={url}"
            logger.warning(
                "request_error",
                url=url,
                error=reason,
                error_type=type(e).__name__,
                duration_ms=self._elapsed_ms(started),
            )
            return OtherFailure(message)

        logger.debug(
            "upstream_response",
            host=urlparse(url).hostname,
            status=response.status_code,
            duration_ms=self._elapsed_ms(started),
        )

        return self._classify(url, response)

    def _classify(self, url: str, response: httpx.Response) -> Outcome:
        status = response.status_code

        if status == 200:
            return self._parse(url, response.text)

        kind = CLIENT_ERROR_STATUSES.get(status)
        if kind is not None:
            logger.info("client_error", kind=kind.value, status=status, url=url)
            return ClientError(kind, response.text)

        logger.warning("request_failed", status=status, url=url)
        return OtherFailure(f"request failed: status={status}, url={url}")

    def _parse(self, url: str, body: str) -> Outcome:
        try:
            return Success(json.loads(body))
        except ValueError as e:
            logger.error(
                "response_parse_error",
                url=url,
                body=body,
                error=str(e),
            )
            return OtherFailure(PARSE_ERROR)

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 2)
