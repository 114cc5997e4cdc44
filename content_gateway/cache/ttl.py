"""TTL (Time To Live) resolution for cache writes.

A cache policy states lifetimes either as a fixed duration or as a function
of the payload about to be cached (for example an API that embeds its own
expiry). Both are turned into whole seconds here, at write time.
"""

import math
from datetime import timedelta
from typing import Any, Optional

import structlog

from content_gateway.models.options import Duration, ExpiresIn

logger = structlog.get_logger(__name__)


def to_seconds(duration: Duration) -> int:
    """
    Convert a duration to whole seconds, rounding up.

    Rounding up keeps sub-second lifetimes (e.g. 0.5) from collapsing to 0.

    Args:
        duration: Seconds as int/float, or a timedelta

    Returns:
        TTL in whole seconds

    Example:
        >>> to_seconds(timedelta(minutes=2))
        120
        >>> to_seconds(0.5)
        1
    """
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    else:
        seconds = float(duration)
    return math.ceil(seconds)


def resolve_ttl(expires_in: Optional[ExpiresIn], value: Any) -> Optional[int]:
    """
    Determine the TTL for a value about to be cached.

    Args:
        expires_in: Fixed duration, callable of the value, or None
        value: The parsed payload that will be stored

    Returns:
        TTL in seconds, or None when the entry should not expire

    Example:
        >>> resolve_ttl(120, {"status": "success"})
        120
        >>> resolve_ttl(lambda data: data["max_age"], {"max_age": 30})
        30
    """
    if expires_in is None:
        return None

    if callable(expires_in):
        duration = expires_in(value)
        ttl = to_seconds(duration)
        logger.debug("ttl_computed_from_value", ttl_seconds=ttl)
        return ttl

    return to_seconds(expires_in)
