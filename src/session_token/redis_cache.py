"""Redis-backed CacheClient."""

from __future__ import annotations

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from .cache import CacheClient
from .exceptions import CacheUnavailableError, ErrorCodes


class RedisCacheClient(CacheClient):
    """Stores sessions as plain string values with ``SET key value EX ttl``."""

    def __init__(
        self,
        redis_url: str,
        *,
        socket_timeout: float = 5.0,
        client: aioredis.Redis | None = None,
    ) -> None:
        self.redis_url = redis_url
        self.client = client or aioredis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )

    def _unavailable(self, op: str, e: RedisError) -> CacheUnavailableError:
        return CacheUnavailableError(
            code=ErrorCodes.CACHE_UNAVAILABLE,
            message=f"Redis {op} failed: {e}",
            cause=e,
        )

    async def get(self, key: str) -> str | None:
        try:
            return await self.client.get(key)
        except RedisError as e:
            raise self._unavailable("GET", e) from e

    async def set(self, key: str, value: str, ttl: int) -> None:
        # Redis rejects EX values below 1.
        try:
            await self.client.set(key, value, ex=max(1, int(ttl)))
        except RedisError as e:
            raise self._unavailable("SET", e) from e

    async def delete(self, key: str) -> bool:
        try:
            return bool(await self.client.delete(key))
        except RedisError as e:
            raise self._unavailable("DEL", e) from e

    async def close(self) -> None:
        await self.client.aclose()
