"""
Pydantic models for per-call fetch options.

Callers pass these (or plain dicts with the same shape) to
``ContentGateway.get``. All models are frozen: options are immutable for the
duration of a call.
"""
from datetime import timedelta
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Seconds (int or float) or a timedelta
Duration = Union[float, timedelta]

# A fixed duration, or a function of the parsed payload returning one
ExpiresIn = Union[float, timedelta, Callable[[Any], Duration]]


class RequestOptions(BaseModel):
    """
    Transport-level knobs for a single request.

    Unset fields fall back to the gateway configuration (timeouts) or to the
    HTTP client defaults.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    connect_timeout: Optional[float] = Field(
        None,
        gt=0,
        description="Seconds allowed to establish the connection",
    )
    read_timeout: Optional[float] = Field(
        None,
        gt=0,
        description="Seconds allowed to receive the response",
    )
    follow_redirects: Optional[bool] = Field(
        None,
        description="Follow 3xx redirects",
    )
    params: Optional[Dict[str, Any]] = Field(
        None,
        description="Query string parameters",
    )


class CachePolicy(BaseModel):
    """
    Caching behaviour requested by the caller.

    An empty policy means "do not cache". Supplying any field opts the call
    into cache-aside mode unless ``skip`` is explicitly True.

    Example:
        >>> CachePolicy(expires_in=120, stale_expires_in=3600)
        >>> CachePolicy(expires_in=lambda data: data["max_age"])
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    skip: Optional[bool] = Field(
        None,
        description="Bypass both cache tiers",
    )
    expires_in: Optional[ExpiresIn] = Field(
        None,
        description="Primary entry lifetime, or a function of the parsed value",
    )
    stale_expires_in: Optional[Duration] = Field(
        None,
        description="Lifetime of the stale fallback copy",
    )

    @model_validator(mode="after")
    def stale_requires_primary(self) -> "CachePolicy":
        """A stale copy is only ever written next to a primary entry."""
        if self.stale_expires_in is not None and self.expires_in is None:
            raise ValueError("stale_expires_in requires expires_in")
        return self

    @property
    def is_empty(self) -> bool:
        """True when the caller supplied no policy field at all."""
        return not self.model_fields_set


class FetchOptions(BaseModel):
    """
    Options for one ``ContentGateway.get`` call.

    Example:
        >>> FetchOptions(
        ...     headers={"Accept": "application/json"},
        ...     request_options=RequestOptions(read_timeout=5),
        ...     cache_policy=CachePolicy(expires_in=120),
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Request headers",
    )
    request_options: RequestOptions = Field(
        default_factory=RequestOptions,
        description="Transport-level options",
    )
    cache_policy: Optional[CachePolicy] = Field(
        None,
        description="Caching behaviour (no caching when absent or empty)",
    )
