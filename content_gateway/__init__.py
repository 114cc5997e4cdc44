"""
Content Gateway: cache-aside fetching of third-party JSON APIs.

Example:
    >>> from content_gateway import ContentGateway, GatewayConfig
    >>> async with ContentGateway(GatewayConfig(user_agent="Example/1.0")) as gateway:
    ...     result = await gateway.get(
    ...         "http://api.example.com/items",
    ...         {"cache_policy": {"expires_in": 120, "stale_expires_in": 3600}},
    ...     )
"""

from content_gateway.cache import MemoryCache, RedisCache
from content_gateway.config import GatewayConfig
from content_gateway.exceptions import (
    ConfigurationError,
    ContentGatewayError,
    InvalidOptionsError,
)
from content_gateway.gateway import ContentGateway
from content_gateway.models import (
    CachePolicy,
    ErrorKind,
    FetchOptions,
    GatewayResult,
    RequestOptions,
    ResultSource,
)

__version__ = "1.1.0"

__all__ = [
    "ContentGateway",
    "GatewayConfig",
    # Options and results
    "CachePolicy",
    "ErrorKind",
    "FetchOptions",
    "GatewayResult",
    "RequestOptions",
    "ResultSource",
    # Stores
    "MemoryCache",
    "RedisCache",
    # Exceptions
    "ConfigurationError",
    "ContentGatewayError",
    "InvalidOptionsError",
]
