"""
In-process implementation of cache client

Default backend: no infrastructure needed, entries are lost on restart.
"""

import logging
import time
from datetime import timedelta

from core.interfaces.cache import BaseCacheClient
from core.models.cache import CacheKey

logger = logging.getLogger(__name__)


class InMemoryCacheClient(BaseCacheClient):
    """
    Dict-backed TTL cache

    Expired entries are evicted lazily on read.

    Example:
        >>> cache = InMemoryCacheClient()
        >>> await cache.set(CacheKey.build("top_coins", limit=10), "[]", ttl=timedelta(seconds=60))
        >>> await cache.get(CacheKey.build("top_coins", limit=10))
        '[]'
    """

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._entries: dict[CacheKey, tuple[str, float | None]] = {}

    async def connect(self) -> None:
        logger.info("✓ Using in-memory cache")

    async def get(self, key: CacheKey) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: CacheKey, value: str, ttl: timedelta | None = None) -> bool:
        expires_at = self._clock() + ttl.total_seconds() if ttl else None
        self._entries[key] = (value, expires_at)
        return True

    async def delete(self, key: CacheKey) -> bool:
        return self._entries.pop(key, None) is not None

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
