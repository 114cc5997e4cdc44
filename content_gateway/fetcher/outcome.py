"""
Classified results of a single upstream fetch.

The fetcher never raises for upstream problems; it returns one of these
instead and the gateway decides what to do with it.
"""

from dataclasses import dataclass
from typing import Any, Union

from content_gateway.models.responses import ErrorKind


@dataclass(frozen=True)
class Success:
    """HTTP 200 with a body that parsed as JSON."""

    value: Any


@dataclass(frozen=True)
class ClientError:
    """
    HTTP 400/401/403/404.

    These are the caller's fault, so they are never cached and never answered
    from the stale tier.
    """

    kind: ErrorKind
    body: str


@dataclass(frozen=True)
class OtherFailure:
    """Any other status, a transport error or an unparseable body."""

    message: str


Outcome = Union[Success, ClientError, OtherFailure]
