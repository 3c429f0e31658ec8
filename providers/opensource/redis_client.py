"""
Redis implementation of cache client

Shares cached upstream responses between processes (dashboard API + ETH service)
"""

import logging
from datetime import timedelta

from redis.asyncio import Redis

from config.settings import get_settings
from core.interfaces.cache import BaseCacheClient
from core.models.cache import CacheKey

logger = logging.getLogger(__name__)

KEY_PREFIX = "market:"


class RedisClient(BaseCacheClient):
    """
    Redis implementation

    Keys are rendered as "market:" + CacheKey.render(); expiry is delegated
    to Redis (SET ... EX).
    """

    def __init__(self, url: str | None = None):
        self.settings = get_settings()
        self.url = url or self.settings.redis_url
        self.client: Redis | None = None

    @staticmethod
    def _redis_key(key: CacheKey) -> str:
        return KEY_PREFIX + key.render()

    async def connect(self) -> None:
        """Connect to Redis"""
        try:
            self.client = Redis.from_url(self.url, decode_responses=True)
            # Test connection
            await self.client.ping()
            logger.info(
                f"✓ Connected to Redis: {self.settings.REDIS_HOST}:{self.settings.REDIS_PORT}"
            )
        except Exception as e:
            logger.error(f"✗ Failed to connect to Redis: {e}")
            raise

    async def get(self, key: CacheKey) -> str | None:
        """Get value by key"""
        if not self.client:
            raise RuntimeError("Redis client not connected")

        try:
            return await self.client.get(self._redis_key(key))
        except Exception as e:
            logger.error(f"✗ Redis GET error: {e}")
            raise

    async def set(self, key: CacheKey, value: str, ttl: timedelta | None = None) -> bool:
        """
        Set key-value with optional TTL

        Sub-second TTLs are rounded up to one second (Redis EX granularity).
        """
        if not self.client:
            raise RuntimeError("Redis client not connected")

        try:
            ex = max(1, int(ttl.total_seconds())) if ttl else None
            return bool(await self.client.set(self._redis_key(key), value, ex=ex))
        except Exception as e:
            logger.error(f"✗ Redis SET error: {e}")
            raise

    async def delete(self, key: CacheKey) -> bool:
        """Delete one key"""
        if not self.client:
            raise RuntimeError("Redis client not connected")

        try:
            return await self.client.delete(self._redis_key(key)) > 0
        except Exception as e:
            logger.error(f"✗ Redis DELETE error: {e}")
            raise

    async def close(self) -> None:
        """Close connection"""
        if self.client:
            await self.client.aclose()
            logger.info("✓ Redis connection closed")
