"""InMemoryCacheClient implementation."""

from __future__ import annotations

import time
from collections.abc import Callable

from .cache import CacheClient


class _CacheEntry:
    __slots__ = ("value", "expires_at")

    def __init__(self, value: str, expires_at: float) -> None:
        self.value = value
        self.expires_at = expires_at


class InMemoryCacheClient(CacheClient):
    """Process-local cache for tests and single-process deployments.

    Expired entries are dropped when read, and in bulk by a sweep that runs
    from ``set`` at most once per ``sweep_interval`` seconds.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = 60.0,
    ) -> None:
        self._store: dict[str, _CacheEntry] = {}
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval

    def _is_expired(self, entry: _CacheEntry) -> bool:
        return self._clock() >= entry.expires_at

    def _sweep(self) -> None:
        now = self._clock()
        expired = [key for key, entry in self._store.items() if now >= entry.expires_at]
        for key in expired:
            del self._store[key]
        self._next_sweep = now + self._sweep_interval

    async def get(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._is_expired(entry):
            del self._store[key]
            return None
        return entry.value

    async def set(self, key: str, value: str, ttl: int) -> None:
        if self._clock() >= self._next_sweep:
            self._sweep()
        self._store[key] = _CacheEntry(value, self._clock() + ttl)

    async def delete(self, key: str) -> bool:
        entry = self._store.pop(key, None)
        return entry is not None and not self._is_expired(entry)

    def size(self) -> int:
        """Number of live entries."""
        return sum(1 for entry in self._store.values() if not self._is_expired(entry))

    def stored(self) -> int:
        """Number of entries held, expired or not."""
        return len(self._store)
