"""CacheClient abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CacheClient(ABC):
    """Key-value store with per-key TTL holding serialized sessions.

    Implementations must make each get/set/delete atomic per key and evict
    entries once their TTL has passed. Transport failures are raised as
    :class:`~session_token.exceptions.CacheUnavailableError`.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent or expired."""
        ...

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int) -> None:
        """Store value under key for ttl seconds, replacing any previous value."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove key. True if something was deleted."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        return None
