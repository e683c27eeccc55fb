"""Error types and cache backends."""

from open_music.services.base import (
    APIError,
    CacheError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from open_music.services.cache import CacheBackend, InMemoryCache, RedisCache, get_cache

__all__ = [
    "APIError",
    "CacheError",
    "ConflictError",
    "NotFoundError",
    "ValidationError",
    "CacheBackend",
    "InMemoryCache",
    "RedisCache",
    "get_cache",
]
