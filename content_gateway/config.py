"""
Gateway configuration.

Embedding applications describe their upstream here instead of overriding
hooks: connection/request timeouts, the identifying User-Agent, the name of
the connection pool and the cache backend.
"""

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from content_gateway.exceptions import ConfigurationError

DEFAULT_USER_AGENT = "Python (Content Gateway)"

# Environment variable -> GatewayConfig field
ENV_VARS = {
    "CONTENT_GATEWAY_CONNECTION_TIMEOUT": "connection_timeout",
    "CONTENT_GATEWAY_REQUEST_TIMEOUT": "request_timeout",
    "CONTENT_GATEWAY_USER_AGENT": "user_agent",
    "CONTENT_GATEWAY_POOL_NAME": "pool_name",
    "CONTENT_GATEWAY_KEY_NAMESPACE": "key_namespace",
    "REDIS_URL": "redis_url",
    "CONTENT_GATEWAY_COALESCE": "coalesce_requests",
}


class GatewayConfig(BaseModel):
    """
    Settings for a ContentGateway instance.

    Timeouts are in seconds. ``redis_url`` selects the Redis store; when it is
    unset the gateway keeps entries in process memory.
    """

    model_config = ConfigDict(frozen=True)

    connection_timeout: float = Field(
        1.0,
        gt=0,
        description="Seconds allowed to establish the upstream connection",
    )
    request_timeout: float = Field(
        0.3,
        gt=0,
        description="Seconds allowed to receive the upstream response",
    )
    user_agent: str = Field(
        DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent header sent with every request",
    )
    pool_name: str = Field(
        "content_gateway",
        min_length=1,
        description="Name of the HTTP connection pool, used in logs",
    )
    key_namespace: str = Field(
        "content_gateway",
        min_length=1,
        description="Prefix of primary cache keys",
    )
    redis_url: Optional[str] = Field(
        None,
        description="Redis connection URL (in-memory cache when unset)",
    )
    coalesce_requests: bool = Field(
        False,
        description=(
            "Share one upstream fetch between concurrent misses of a URL "
            "sent with the same headers and request options"
        ),
    )

    @field_validator("key_namespace")
    @classmethod
    def namespace_not_reserved(cls, v: str) -> str:
        """Reject namespaces that would overlap the stale key prefix."""
        if v == "stale" or ":" in v:
            raise ValueError("key_namespace must not be 'stale' or contain ':'")
        return v

    @classmethod
    def from_env(cls, **overrides: Any) -> "GatewayConfig":
        """
        Build configuration from environment variables.

        Args:
            **overrides: Field values taking precedence over the environment

        Returns:
            Validated GatewayConfig

        Raises:
            ConfigurationError: If a variable holds an invalid value

        Example:
            >>> os.environ["CONTENT_GATEWAY_REQUEST_TIMEOUT"] = "2.5"
            >>> GatewayConfig.from_env().request_timeout
            2.5
        """
        values: Dict[str, Any] = {}
        for env_var, field_name in ENV_VARS.items():
            raw = os.getenv(env_var)
            if raw is not None and raw != "":
                values[field_name] = raw
        values.update(overrides)

        try:
            return cls(**values)
        except ValidationError as e:
            error = e.errors()[0]
            field_name = str(error["loc"][0]) if error["loc"] else None
            raise ConfigurationError(error["msg"], field=field_name) from e
