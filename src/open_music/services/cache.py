"""Key-value cache backends used for cache-aside reads.

Values are plain strings. A miss is reported as ``None``; only transport
or server failures raise ``CacheError``.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from open_music.config import get_settings
from open_music.services.base import CacheError

logger = logging.getLogger(__name__)


@runtime_checkable
class CacheBackend(Protocol):
    """Protocol for cache backends injected into repositories."""

    async def get(self, key: str) -> str | None:
        """Return the cached value, or None on a miss."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store a value using the backend's configured expiry."""
        ...

    async def delete(self, key: str) -> None:
        """Remove a key. Deleting a missing key is not an error."""
        ...


class RedisCache:
    """Redis-backed cache.

    Every ``set`` applies ``default_ttl`` seconds of expiry; callers never
    pass their own.
    """

    def __init__(self, client: aioredis.Redis, default_ttl: int | None = None) -> None:
        """Initialize the Redis cache.

        Args:
            client: An async Redis client created with ``decode_responses=True``.
            default_ttl: Expiry applied to every stored key, in seconds.
        """
        self.client = client
        self.default_ttl = default_ttl

    @classmethod
    def from_url(cls, url: str, default_ttl: int | None = None) -> "RedisCache":
        """Create a cache from a ``redis://`` URL."""
        client = aioredis.from_url(url, decode_responses=True)
        return cls(client, default_ttl=default_ttl)

    async def get(self, key: str) -> str | None:
        try:
            return await self.client.get(key)
        except RedisError as e:
            raise CacheError(f"Redis get failed for {key}: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            await self.client.set(key, value, ex=self.default_ttl)
        except RedisError as e:
            raise CacheError(f"Redis set failed for {key}: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except RedisError as e:
            raise CacheError(f"Redis delete failed for {key}: {e}") from e

    async def ping(self) -> bool:
        """Check the Redis connection."""
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self.client.aclose()


class InMemoryCache:
    """Dict-backed cache for tests and single-process development.

    No persistence - data is lost on restart.
    """

    def __init__(self, default_ttl: int | None = None) -> None:
        self.default_ttl = default_ttl
        self._store: dict[str, tuple[str, datetime | None]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and datetime.now(UTC) >= expires_at:
            del self._store[key]
            return None
        return value

    async def set(self, key: str, value: str) -> None:
        expires_at = None
        if self.default_ttl is not None:
            expires_at = datetime.now(UTC) + timedelta(seconds=self.default_ttl)
        self._store[key] = (value, expires_at)

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._store


_cache: RedisCache | None = None


def get_cache() -> RedisCache:
    """Dependency that provides the process-wide Redis cache."""
    global _cache
    if _cache is None:
        settings = get_settings()
        _cache = RedisCache.from_url(settings.redis_url, default_ttl=settings.cache_expire_seconds)
        logger.info("Redis cache initialized (expiry %ss)", settings.cache_expire_seconds)
    return _cache


async def close_cache() -> None:
    """Release the process-wide Redis cache, if one was created."""
    global _cache
    if _cache is not None:
        await _cache.close()
        _cache = None
