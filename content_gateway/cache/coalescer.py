"""
Request coalescing to prevent duplicate upstream fetches.

When several coroutines miss the cache for the same key at once, only the
first one fetches; the others await its result.
"""
import asyncio
from typing import Any, Awaitable, Callable, Dict

import structlog

logger = structlog.get_logger(__name__)


class RequestCoalescer:
    """
    Ensures concurrent requests for the same cache key share one upstream call.

    Pattern:
    - First request for a key starts the fetch in a task
    - Every request for the key, the first included, awaits that task
    - When the fetch completes, every waiter receives the same result
    - The key is released once the fetch finishes, so later calls fetch again

    Usage:
        coalescer = RequestCoalescer()
        outcome = await coalescer.run(
            key="content_gateway:http://api.example.com/items",
            fetch_fn=lambda: fetcher.fetch(url, headers, options),
        )
    """

    def __init__(self) -> None:
        self._in_flight: Dict[str, "asyncio.Task[Any]"] = {}

    async def run(self, key: str, fetch_fn: Callable[[], Awaitable[Any]]) -> Any:
        """
        Either join an existing in-flight fetch or start a new one.

        The fetch runs in its own task. Cancelling one caller, including the
        one that started the fetch, leaves the fetch and the other callers
        untouched.

        Args:
            key: Unique key for this request
            fetch_fn: Coroutine function performing the fetch

        Returns:
            The fetch result (shared among all concurrent callers)

        Raises:
            Exception: Any error from fetch_fn is propagated to every caller
        """
        task = self._in_flight.get(key)
        if task is not None:
            logger.debug("request_coalesced", key=key)
        else:
            task = asyncio.ensure_future(fetch_fn())
            self._in_flight[key] = task
            task.add_done_callback(lambda done: self._release(key, done))
            logger.debug("request_initiated", key=key)

        return await asyncio.shield(task)

    def _release(self, key: str, task: "asyncio.Task[Any]") -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Mark the error retrieved when every caller was cancelled before it landed
        if not task.cancelled():
            task.exception()

    @property
    def active_requests(self) -> int:
        """Number of currently in-flight fetches."""
        return len(self._in_flight)
