"""Shared fixtures: a recording in-memory store, a fake clock and a fake upstream."""

from typing import Any, Callable, List, Optional, Tuple

import httpx
import pytest

from content_gateway.cache.memory import MemoryCache
from content_gateway.config import GatewayConfig
from content_gateway.gateway import ContentGateway


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingStore(MemoryCache):
    """MemoryCache that records every get/set/delete."""

    def __init__(self, clock: Callable[[], float]) -> None:
        super().__init__(clock=clock)
        self.calls: List[Tuple[Any, ...]] = []

    async def get(self, key: str) -> Optional[str]:
        self.calls.append(("get", key))
        return await super().get(key)

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        self.calls.append(("set", key, ttl))
        await super().set(key, value, ttl)

    async def delete(self, key: str) -> bool:
        self.calls.append(("delete", key))
        return await super().delete(key)

    def ops(self, name: str) -> List[Tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]

    def reset_calls(self) -> None:
        self.calls.clear()


class FakeUpstream:
    """httpx.MockTransport handler returning queued responses."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._status = 200
        self._body = '{"status":"success"}'
        self._error: Optional[Exception] = None

    def respond(self, status: int, body: str) -> None:
        self._status = status
        self._body = body
        self._error = None

    def fail(self, error: Exception) -> None:
        self._error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return httpx.Response(self._status, text=self._body)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> RecordingStore:
    return RecordingStore(clock)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def config() -> GatewayConfig:
    return GatewayConfig(
        connection_timeout=0.3,
        request_timeout=1.0,
        user_agent="Python (User Profile API; Webmedia)",
    )


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def gateway(config: GatewayConfig, store: RecordingStore, http_client: httpx.AsyncClient) -> ContentGateway:
    return ContentGateway(config, store=store, http_client=http_client)
