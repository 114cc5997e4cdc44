"""
Custom exceptions for the content gateway.

Upstream failures are never raised to callers: ``ContentGateway.get`` always
returns a ``GatewayResult``. The exceptions below cover programming and
deployment mistakes only (malformed fetch options, invalid configuration).
"""

from typing import Optional


class ContentGatewayError(Exception):
    """
    Base exception for all content gateway errors.

    Use this for catching any gateway-specific error.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        """
        Initialize ContentGatewayError.

        Args:
            message: Error description
            field: Optional name of the option or setting at fault
        """
        self.field = field

        if field:
            message = f"{field}: {message}"

        self.message = message
        super().__init__(self.message)


class InvalidOptionsError(ContentGatewayError):
    """
    Raised when caller-supplied fetch options cannot be resolved.

    This occurs when:
    - An option has the wrong type (e.g. a string TTL)
    - An unknown request option is supplied
    - ``stale_expires_in`` is given without ``expires_in``

    Example:
        >>> raise InvalidOptionsError("requires expires_in", field="stale_expires_in")
    """


class ConfigurationError(ContentGatewayError):
    """
    Raised when gateway configuration is invalid.

    Example:
        >>> raise ConfigurationError("must be a number", field="CONTENT_GATEWAY_REQUEST_TIMEOUT")
    """
