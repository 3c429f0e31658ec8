"""
Unit tests for cache clients

- InMemoryCacheClient: TTL expiry with a fake clock
- RedisClient: key rendering and EX handling against a mocked redis.asyncio client
"""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from core.models.cache import CacheKey
from providers.opensource.memory_cache import InMemoryCacheClient
from providers.opensource.redis_client import KEY_PREFIX, RedisClient


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


KEY = CacheKey.build("top_coins", limit=10)


@pytest.mark.unit
class TestInMemoryCacheClient:
    """Test dict-backed TTL cache"""

    @pytest.mark.asyncio
    async def test_set_then_get(self):
        cache = InMemoryCacheClient()

        assert await cache.set(KEY, "[]", ttl=timedelta(seconds=60)) is True
        assert await cache.get(KEY) == "[]"

    @pytest.mark.asyncio
    async def test_miss_returns_none(self):
        assert await InMemoryCacheClient().get(KEY) is None

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self):
        clock = FakeClock()
        cache = InMemoryCacheClient(clock=clock)
        await cache.set(KEY, "value", ttl=timedelta(seconds=60))

        clock.now += 59.9
        assert await cache.get(KEY) == "value"

        clock.now += 0.1
        assert await cache.get(KEY) is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_no_ttl_never_expires(self):
        clock = FakeClock()
        cache = InMemoryCacheClient(clock=clock)
        await cache.set(KEY, "value")

        clock.now += 10**9
        assert await cache.get(KEY) == "value"

    @pytest.mark.asyncio
    async def test_keys_with_different_params_are_separate(self):
        cache = InMemoryCacheClient()
        await cache.set(CacheKey.build("top_coins", limit=10), "ten")
        await cache.set(CacheKey.build("top_coins", limit=20), "twenty")

        assert await cache.get(CacheKey.build("top_coins", limit=10)) == "ten"
        assert await cache.get(CacheKey.build("top_coins", limit=20)) == "twenty"

    @pytest.mark.asyncio
    async def test_delete_and_close(self):
        cache = InMemoryCacheClient()
        await cache.set(KEY, "value")
        await cache.set(CacheKey.build("other"), "value")

        assert await cache.delete(KEY) is True
        assert await cache.delete(KEY) is False

        await cache.close()
        assert len(cache) == 0


@pytest.fixture
def mock_redis():
    """Mock redis.asyncio.Redis.from_url"""
    with patch("providers.opensource.redis_client.Redis") as mock:
        client = MagicMock()
        client.ping = AsyncMock(return_value=True)
        client.get = AsyncMock(return_value=None)
        client.set = AsyncMock(return_value=True)
        client.delete = AsyncMock(return_value=1)
        client.aclose = AsyncMock()
        mock.from_url.return_value = client
        yield mock, client


@pytest.mark.unit
class TestRedisClient:
    """Test Redis cache client"""

    @pytest.mark.asyncio
    async def test_connect_pings(self, mock_redis):
        redis_cls, client = mock_redis
        cache = RedisClient(url="redis://localhost:6379/0")

        await cache.connect()

        redis_cls.from_url.assert_called_once_with(
            "redis://localhost:6379/0", decode_responses=True
        )
        client.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_failure_propagates(self, mock_redis):
        _, client = mock_redis
        client.ping.side_effect = ConnectionError("refused")

        with pytest.raises(ConnectionError):
            await RedisClient(url="redis://localhost:6379/0").connect()

    @pytest.mark.asyncio
    async def test_set_uses_rendered_key_and_ex(self, mock_redis):
        _, client = mock_redis
        cache = RedisClient(url="redis://localhost:6379/0")
        await cache.connect()

        await cache.set(KEY, "[]", ttl=timedelta(seconds=60))

        client.set.assert_awaited_once_with(KEY_PREFIX + KEY.render(), "[]", ex=60)

    @pytest.mark.asyncio
    async def test_sub_second_ttl_rounds_up(self, mock_redis):
        _, client = mock_redis
        cache = RedisClient(url="redis://localhost:6379/0")
        await cache.connect()

        await cache.set(KEY, "[]", ttl=timedelta(milliseconds=200))

        assert client.set.await_args.kwargs["ex"] == 1

    @pytest.mark.asyncio
    async def test_get_and_delete(self, mock_redis):
        _, client = mock_redis
        client.get.return_value = "cached"
        cache = RedisClient(url="redis://localhost:6379/0")
        await cache.connect()

        assert await cache.get(KEY) == "cached"
        assert await cache.delete(KEY) is True
        client.get.assert_awaited_once_with(KEY_PREFIX + KEY.render())

    @pytest.mark.asyncio
    async def test_requires_connection(self):
        cache = RedisClient(url="redis://localhost:6379/0")

        with pytest.raises(RuntimeError, match="not connected"):
            await cache.get(KEY)

    @pytest.mark.asyncio
    async def test_close(self, mock_redis):
        _, client = mock_redis
        cache = RedisClient(url="redis://localhost:6379/0")
        await cache.connect()

        await cache.close()

        client.aclose.assert_awaited_once()
