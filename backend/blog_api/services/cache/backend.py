"""Cache backend: get/set-with-expiry/delete/ping. Errors propagate; CacheStore absorbs them."""
import logging
from typing import Protocol

from redis import asyncio as aioredis

logger = logging.getLogger(__name__)


class CacheBackend(Protocol):
    """Interface for the key/value store behind CacheStore (Redis in production, dict in tests)."""

    async def get(self, key: str) -> str | None:
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store value with a physical expiry."""
        ...

    async def delete(self, key: str) -> None:
        ...

    async def ping(self) -> bool:
        ...


class RedisCacheBackend:
    """Redis via redis.asyncio. REDIS_TOKEN, when set, is sent as the password."""

    def __init__(self, url: str, token: str | None = None) -> None:
        self._client = aioredis.Redis.from_url(
            url,
            password=token or None,
            decode_responses=True,
            socket_timeout=5,
            socket_connect_timeout=5,
        )

    async def get(self, key: str) -> str | None:
        return await self._client.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._client.setex(key, ttl_seconds, value)

    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    async def ping(self) -> bool:
        return bool(await self._client.ping())

    async def close(self) -> None:
        await self._client.aclose()


def create_cache_backend(url: str, token: str = "") -> RedisCacheBackend | None:
    """Build the Redis backend, or None when REDIS_URL is not set (cache disabled)."""
    if not url:
        logger.info("REDIS_URL not set; post cache disabled, serving from GitHub only")
        return None
    try:
        return RedisCacheBackend(url, token)
    except Exception as e:
        logger.warning("Failed to initialize Redis client: %s", e)
        return None
