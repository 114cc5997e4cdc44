"""
Upstream fetch layer using httpx.

This package provides:
- ContentFetcher: one GET per call, classified into an Outcome
- create_http_client: the pooled httpx.AsyncClient shared by a gateway
- Outcome types: Success, ClientError, OtherFailure

Example:
    >>> from content_gateway.fetcher import ContentFetcher, create_http_client
    >>> fetcher = ContentFetcher(config, create_http_client(config))
    >>> outcome = await fetcher.fetch("http://api.example.com/items")
"""

from content_gateway.fetcher.client import (
    PARSE_ERROR,
    ContentFetcher,
    create_http_client,
)
from content_gateway.fetcher.outcome import (
    ClientError,
    OtherFailure,
    Outcome,
    Success,
)

__all__ = [
    # Fetching
    "ContentFetcher",
    "create_http_client",
    "PARSE_ERROR",
    # Outcomes
    "ClientError",
    "OtherFailure",
    "Outcome",
    "Success",
]
