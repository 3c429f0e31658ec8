from abc import ABC, abstractmethod
from datetime import timedelta

from core.models.cache import CacheKey


class BaseCacheClient(ABC):
    """
    Abstract interface for caching layer

    Values are JSON strings; entries are written once and expire after their TTL.

    Implementations:
    - InMemoryCacheClient (process-local, default)
    - RedisClient (shared across processes)
    """

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection to cache service"""

    @abstractmethod
    async def get(self, key: CacheKey) -> str | None:
        """
        Get value by key

        Args:
            key: Structured cache key

        Returns:
            Value as string, or None if not found or expired
        """

    @abstractmethod
    async def set(self, key: CacheKey, value: str, ttl: timedelta | None = None) -> bool:
        """
        Set key-value with optional TTL

        Args:
            key: Structured cache key
            value: Value to store (string)
            ttl: Time to live (optional, no expiry when None)

        Returns:
            True if successful
        """

    @abstractmethod
    async def delete(self, key: CacheKey) -> bool:
        """
        Remove a key

        Returns:
            True if a key was removed
        """

    @abstractmethod
    async def close(self) -> None:
        """Close connection"""
