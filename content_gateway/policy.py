"""
Fetch option resolution.

Turns whatever the caller passed to ``ContentGateway.get`` (nothing, a dict,
or a FetchOptions model) into fully-resolved options, and decides between
skip mode and cache-aside mode.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from content_gateway.exceptions import InvalidOptionsError
from content_gateway.models.options import (
    Duration,
    ExpiresIn,
    FetchOptions,
    RequestOptions,
)

RawOptions = Union[None, FetchOptions, Mapping[str, Any]]


@dataclass(frozen=True)
class ResolvedOptions:
    """
    Options for one call with all defaults applied.

    Attributes:
        headers: Caller headers (empty when not supplied)
        request_options: Transport options (all unset when not supplied)
        skip: True to bypass both cache tiers
        expires_in: Primary TTL (duration or callable), None for no expiry
        stale_expires_in: Stale copy TTL, None for no stale copy
    """

    headers: Dict[str, str] = field(default_factory=dict)
    request_options: RequestOptions = field(default_factory=RequestOptions)
    skip: bool = True
    expires_in: Optional[ExpiresIn] = None
    stale_expires_in: Optional[Duration] = None


def resolve_options(raw: RawOptions = None) -> ResolvedOptions:
    """
    Resolve caller-supplied options.

    Caching is opt-in: with no cache policy, or an empty one, the call runs in
    skip mode. Supplying any policy field enables cache-aside mode unless
    ``skip=True`` is given explicitly.

    Args:
        raw: None, a FetchOptions instance, or a mapping with the same keys

    Returns:
        ResolvedOptions

    Raises:
        InvalidOptionsError: If the options are malformed

    Example:
        >>> resolve_options().skip
        True
        >>> resolve_options({"cache_policy": {"expires_in": 120}}).skip
        False
        >>> resolve_options({"cache_policy": {"skip": True, "expires_in": 120}}).skip
        True
    """
    options = _to_fetch_options(raw)
    policy = options.cache_policy

    if policy is None or policy.is_empty:
        return ResolvedOptions(
            headers=dict(options.headers),
            request_options=options.request_options,
        )

    return ResolvedOptions(
        headers=dict(options.headers),
        request_options=options.request_options,
        skip=policy.skip is True,
        expires_in=policy.expires_in,
        stale_expires_in=policy.stale_expires_in,
    )


def _to_fetch_options(raw: RawOptions) -> FetchOptions:
    if raw is None:
        return FetchOptions()
    if isinstance(raw, FetchOptions):
        return raw

    try:
        return FetchOptions.model_validate(dict(raw))
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or None
        raise InvalidOptionsError(error["msg"], field=location) from e
    except (TypeError, ValueError) as e:
        raise InvalidOptionsError(f"options must be a mapping, got {type(raw).__name__}") from e
