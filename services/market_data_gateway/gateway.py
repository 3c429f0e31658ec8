"""
Market Data Gateway

Single entry point for upstream market data:
- Read-through TTL cache (hits never reach the network)
- Global pacing clock: every outbound attempt waits out min_request_interval
- 429 → fixed backoff, one retry
- Any other primary failure → permanent switch to the secondary provider

The serving provider is picked after each pacing wait, so requests queued
behind the pacing lock follow a switch made while they waited.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterable
from datetime import timedelta
from typing import TypeVar

from pydantic import TypeAdapter

from config.settings import get_settings
from core.exceptions import MarketDataError, RateLimitedError
from core.interfaces.cache import BaseCacheClient
from core.interfaces.market_data import BaseMarketDataProvider
from core.models.cache import CacheKey
from core.models.market_data import CoinSummary, NewsItem, PriceSeries
from services.market_data_gateway.state import GatewayState, ProviderMode
from services.market_data_gateway.timeframes import timeframe_to_days, validate_resolution

logger = logging.getLogger(__name__)

T = TypeVar("T")

_COINS = TypeAdapter(list[CoinSummary])
_NEWS = TypeAdapter(list[NewsItem])


class MarketDataGateway:
    """
    Rate-limited, cached, fail-over access to market data providers

    Example:
        >>> gateway = MarketDataGateway(CoinGeckoRestAPI(), CoinCapRestAPI(), InMemoryCacheClient())
        >>> coins = await gateway.get_top_coins(30)
        >>> series = await gateway.get_historical_series("bitcoin", "1M")
    """

    def __init__(
        self,
        primary: BaseMarketDataProvider,
        secondary: BaseMarketDataProvider,
        cache: BaseCacheClient,
        state: GatewayState | None = None,
        *,
        cache_ttl: float | None = None,
        min_request_interval: float | None = None,
        rate_limit_backoff: float | None = None,
        stablecoins: Iterable[str] | None = None,
        default_resolution: str | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        settings = get_settings()
        self.primary = primary
        self.secondary = secondary
        self.cache = cache
        self.state = state or GatewayState()
        self.cache_ttl = timedelta(
            seconds=settings.CACHE_TTL_SECONDS if cache_ttl is None else cache_ttl
        )
        self.min_request_interval = (
            settings.MIN_REQUEST_INTERVAL_SECONDS
            if min_request_interval is None
            else min_request_interval
        )
        self.rate_limit_backoff = (
            settings.RATE_LIMIT_BACKOFF_SECONDS
            if rate_limit_backoff is None
            else rate_limit_backoff
        )
        self.stablecoins = frozenset(
            settings.STABLECOIN_DENYLIST if stablecoins is None else stablecoins
        )
        self.default_resolution = validate_resolution(
            default_resolution or settings.DEFAULT_RESOLUTION
        )
        self._clock = clock

    @property
    def mode(self) -> ProviderMode:
        return self.state.mode

    @property
    def active_provider(self) -> BaseMarketDataProvider:
        return self.secondary if self.state.in_fallback else self.primary

    # ============================================
    # PUBLIC API
    # ============================================

    async def get_top_coins(self, limit: int) -> list[CoinSummary]:
        """
        Top coins by market cap, stablecoins excluded

        Requests limit + len(denylist) rows so the filtered list can still
        fill `limit`. The request is capped at the provider's page size, so
        near that size the result may hold fewer than `limit` coins.
        """
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        key = CacheKey.build("top_coins", limit=limit)
        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key.endpoint} limit={limit}")
            return _COINS.validate_json(cached)

        request_limit = limit + len(self.stablecoins)
        coins = await self._fetch(
            f"top coins (limit={request_limit})",
            lambda provider: provider.fetch_top_coins(provider.page_limit(request_limit)),
        )
        coins = [c for c in coins if c.id not in self.stablecoins][:limit]

        await self.cache.set(key, _COINS.dump_json(coins).decode(), ttl=self.cache_ttl)
        return coins

    async def get_historical_series(
        self, coin_id: str, window: str | int = "1M", resolution: str | None = None
    ) -> PriceSeries:
        """
        Price history for one coin

        Args:
            coin_id: Provider coin id
            window: Timeframe code ("1M", "3M", other → 1 year) or day count
            resolution: "auto" or "daily" (default_resolution when omitted)

        Returns:
            PriceSeries, empty when the serving provider has no history
        """
        days = timeframe_to_days(window)
        resolution = validate_resolution(resolution or self.default_resolution)

        key = CacheKey.build("price_history", coin_id=coin_id, days=days, resolution=resolution)
        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key.endpoint} {coin_id} {days}d")
            return PriceSeries.model_validate_json(cached)

        series = await self._fetch(
            f"history {coin_id} ({days}d, {resolution})",
            lambda provider: provider.fetch_price_history(coin_id, days, resolution),
        )

        await self.cache.set(key, series.model_dump_json(), ttl=self.cache_ttl)
        return series

    async def get_status_updates(self, coin_id: str) -> list[NewsItem]:
        """News / status updates for one coin (empty when the provider has none)"""
        key = CacheKey.build("status_updates", coin_id=coin_id)
        cached = await self.cache.get(key)
        if cached is not None:
            return _NEWS.validate_json(cached)

        news = await self._fetch(
            f"status updates {coin_id}",
            lambda provider: provider.fetch_status_updates(coin_id),
        )

        await self.cache.set(key, _NEWS.dump_json(news).decode(), ttl=self.cache_ttl)
        return news

    async def close(self) -> None:
        await self.primary.close()
        await self.secondary.close()
        await self.cache.close()

    # ============================================
    # RECOVERY
    # ============================================

    async def _fetch(
        self,
        description: str,
        request: Callable[[BaseMarketDataProvider], Awaitable[T]],
    ) -> T:
        """
        Run one logical request with backoff and fallback

        Every attempt is paced first and then sent to the provider active at
        that moment. A 429 sleeps rate_limit_backoff and retries once per
        provider. A non-429 primary failure flips to FALLBACK and the request
        is retried on the secondary. Secondary failures propagate.
        """
        rate_limited = False
        while True:
            provider = await self._paced_provider()
            try:
                return await request(provider)
            except RateLimitedError:
                if rate_limited:
                    raise
                rate_limited = True
                logger.warning(
                    f"⚠️ {provider.name} rate limited on {description}; "
                    f"retrying in {self.rate_limit_backoff:g}s"
                )
                await asyncio.sleep(self.rate_limit_backoff)
            except MarketDataError as e:
                if provider is self.secondary:
                    raise
                logger.error(f"✗ {provider.name} failed on {description}: {e}")
                self.state.switch_to_fallback(f"{provider.name} error: {e}")
                rate_limited = False

    async def _paced_provider(self) -> BaseMarketDataProvider:
        """Wait for a pacing slot, then pick the provider serving requests now"""
        await self._pace()
        return self.active_provider

    async def _pace(self) -> None:
        """Wait out the rest of min_request_interval since the last attempt"""
        async with self.state.pacing_lock:
            if self.state.last_request_at is not None:
                wait = self.min_request_interval - (self._clock() - self.state.last_request_at)
                if wait > 0:
                    logger.debug(f"Pacing: sleeping {wait:.3f}s")
                    await asyncio.sleep(wait)
            self.state.last_request_at = self._clock()
