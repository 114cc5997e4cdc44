"""
Result models returned by the gateway.

Every ``ContentGateway.get`` call resolves to a ``GatewayResult``: either the
parsed payload (fresh, cached or stale) or an ``ErrorKind`` naming why no
payload is available.
"""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """
    Terminal error kinds surfaced to callers.

    Client errors (4xx) are never eligible for stale fallback. ``NO_STALE``
    means a transient failure happened and no stale copy was cached.
    ``REQUEST_FAILED`` is the same failure in skip mode, where the stale tier
    is not consulted.
    """

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    NO_STALE = "no_stale"
    REQUEST_FAILED = "request_failed"


# HTTP status -> client error kind
CLIENT_ERROR_STATUSES = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
}


class ResultSource(str, Enum):
    """Where the returned payload came from."""

    CACHE = "cache"  # primary entry
    UPSTREAM = "upstream"  # fresh fetch
    STALE = "stale"  # fallback copy after a failed fetch
    NONE = "none"  # error, no payload


class GatewayResult(BaseModel):
    """
    Outcome of a gateway call.

    Attributes:
        data: Parsed JSON payload (None on error; may also be a cached JSON null)
        error: Error kind, None on success
        message: Diagnostic detail for transient failures
        source: Origin of ``data``

    Example:
        >>> result = await gateway.get(url, {"cache_policy": {"expires_in": 120}})
        >>> if result.ok:
        ...     print(result.data, result.source)
        ... else:
        ...     print(result.error)
    """

    model_config = ConfigDict(frozen=True)

    data: Any = Field(
        None,
        description="Parsed response payload",
    )
    error: Optional[ErrorKind] = Field(
        None,
        description="Error kind when no payload is available",
    )
    message: Optional[str] = Field(
        None,
        description="Underlying failure message, if any",
    )
    source: ResultSource = Field(
        ResultSource.NONE,
        description="Origin of the payload",
    )

    @property
    def ok(self) -> bool:
        """True when a payload is available."""
        return self.error is None

    @classmethod
    def success(cls, data: Any, source: ResultSource) -> "GatewayResult":
        """Build a successful result."""
        return cls(data=data, source=source)

    @classmethod
    def failure(cls, error: ErrorKind, message: Optional[str] = None) -> "GatewayResult":
        """Build an error result."""
        return cls(error=error, message=message)
