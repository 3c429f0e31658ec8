"""
ETH Price Service

Live ETH/USDT price:
- Binance trade stream (WebSocket) while it stays up
- REST polling every poll_interval once the stream has given up

Every REST read falls back Binance → CoinGecko per call.
"""

import asyncio
import contextlib
import logging

from config.settings import get_settings
from core.exceptions import MarketDataError, UpstreamError
from core.interfaces.market_data import BaseExchangeRestAPI, BasePriceStream
from core.models.market_data import PriceSeries
from core.models.trading import SimulationResult
from domain.trading.simulation import ThresholdStrategySimulator
from providers.coingecko.rest_api import CoinGeckoRestAPI

logger = logging.getLogger(__name__)


class EthPriceService:
    """
    Single-asset price service

    Example:
        >>> service = EthPriceService(BinanceRestAPI(), CoinGeckoRestAPI(), stream)
        >>> await service.start()
        >>> await service.get_current_price()
        3012.55
        >>> await service.stop()
    """

    def __init__(
        self,
        exchange: BaseExchangeRestAPI,
        coingecko: CoinGeckoRestAPI,
        stream: BasePriceStream | None = None,
    ):
        self.settings = get_settings()
        self.exchange = exchange
        self.coingecko = coingecko
        self.stream = stream

        self.symbol = self.settings.ETH_EXCHANGE_SYMBOL
        self.coin_id = self.settings.ETH_COINGECKO_ID
        self.history_days = self.settings.ETH_HISTORY_DAYS
        self.poll_interval = self.settings.ETH_POLL_INTERVAL_SECONDS

        self.current_price: float | None = None
        self.running = False
        self._tasks: list[asyncio.Task] = []

        if self.stream is not None:
            self.stream.on_price(self._on_price)

    # ============================================
    # PRICE READS
    # ============================================

    async def fetch_price_from_api(self) -> float:
        """
        Spot price from Binance, CoinGecko on failure

        Raises:
            UpstreamError: Both sources failed
        """
        try:
            return await self.exchange.fetch_ticker_price(self.symbol)
        except MarketDataError as binance_error:
            logger.error(f"✗ Error fetching price from Binance: {binance_error}")

        try:
            return await self.coingecko.fetch_simple_price(self.coin_id)
        except MarketDataError as gecko_error:
            logger.error(f"✗ Error fetching price from CoinGecko: {gecko_error}")
            raise UpstreamError("eth", "Failed to fetch price from all sources") from gecko_error

    async def get_current_price(self) -> float:
        """Latest streamed/polled price, or a fresh REST read before the first update"""
        if self.current_price is None:
            self.current_price = await self.fetch_price_from_api()
        return self.current_price

    async def get_historical_data(self) -> PriceSeries:
        """
        Daily closes for the last history_days days

        Raises:
            UpstreamError: Both sources failed
        """
        try:
            return await self.exchange.fetch_daily_closes(self.symbol, limit=self.history_days)
        except MarketDataError as binance_error:
            logger.error(f"✗ Error fetching historical data from Binance: {binance_error}")

        try:
            return await self.coingecko.fetch_price_history(
                self.coin_id, self.history_days, resolution="daily"
            )
        except MarketDataError as gecko_error:
            logger.error(f"✗ Error fetching historical data from CoinGecko: {gecko_error}")
            raise UpstreamError(
                "eth", "Failed to fetch historical data from all sources"
            ) from gecko_error

    async def simulate_trading(self, initial_investment: float) -> SimulationResult:
        """Threshold strategy over the daily history"""
        series = await self.get_historical_data()
        simulator = ThresholdStrategySimulator(
            series.closes(), threshold=self.settings.ETH_SIMULATION_THRESHOLD
        )
        return simulator.simulate(initial_investment)

    # ============================================
    # LIFECYCLE
    # ============================================

    async def _on_price(self, price: float) -> None:
        self.current_price = price

    async def _refresh_price(self) -> None:
        try:
            self.current_price = await self.fetch_price_from_api()
            logger.debug(f"Updated price: {self.current_price}")
        except MarketDataError as e:
            logger.error(f"✗ Error polling price: {e}")

    async def _poll_loop(self) -> None:
        logger.info(f"Polling {self.symbol} every {self.poll_interval:g}s")
        while self.running:
            await asyncio.sleep(self.poll_interval)
            await self._refresh_price()

    async def _stream_then_poll(self) -> None:
        await self.stream.start()
        if self.running:
            logger.warning("Price stream gave up. Falling back to polling.")
            await self._poll_loop()

    async def start(self) -> None:
        """Fetch an initial price, then follow the stream (or poll without one)"""
        self.running = True
        await self._refresh_price()

        if self.stream is not None:
            self._tasks.append(asyncio.create_task(self._stream_then_poll()))
        else:
            self._tasks.append(asyncio.create_task(self._poll_loop()))
        logger.info("✅ ETH price service started")

    async def stop(self) -> None:
        self.running = False
        if self.stream is not None:
            await self.stream.stop()

        for task in self._tasks:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._tasks.clear()

        await self.exchange.close()
        await self.coingecko.close()
        logger.info("✓ ETH price service stopped")
