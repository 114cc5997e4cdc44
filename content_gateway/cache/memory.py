"""In-process cache store with per-entry TTL.

Used when no Redis URL is configured and as the real store in tests.
Expired entries are dropped lazily when read.
"""

import time
from typing import Callable, Dict, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)


class MemoryCache:
    """
    Dictionary-backed cache store.

    Each entry keeps its absolute expiry on the monotonic clock (None for
    entries without TTL). The clock is injectable so tests can move time
    forward without sleeping.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: Dict[str, Tuple[str, Optional[float]]] = {}
        self._clock = clock

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            logger.debug("memory_cache_expired", key=key)
            return None

        return value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        expires_at = None if ttl is None else self._clock() + ttl
        self._entries[key] = (value, expires_at)

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
