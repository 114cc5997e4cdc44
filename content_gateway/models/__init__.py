"""Option and result models for the content gateway."""

from content_gateway.models.options import (
    CachePolicy,
    Duration,
    ExpiresIn,
    FetchOptions,
    RequestOptions,
)
from content_gateway.models.responses import (
    CLIENT_ERROR_STATUSES,
    ErrorKind,
    GatewayResult,
    ResultSource,
)

__all__ = [
    # Options
    "CachePolicy",
    "Duration",
    "ExpiresIn",
    "FetchOptions",
    "RequestOptions",
    # Results
    "CLIENT_ERROR_STATUSES",
    "ErrorKind",
    "GatewayResult",
    "ResultSource",
]
