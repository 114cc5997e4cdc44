"""Protocol implemented by key-value cache backends."""

from typing import Optional, Protocol


class CacheStore(Protocol):
    """Key-value store with per-entry TTL (Redis, in-memory, test fakes)."""

    def is_available(self) -> bool:
        """Return True if the store is connected and usable."""
        ...

    async def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None if absent or expired."""
        ...

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Store value, expiring after ``ttl`` seconds (never when None)."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key; return whether it existed."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
