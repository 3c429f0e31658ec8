"""
Binance REST API client for spot ticker and daily klines.

Uses ccxt library for unified exchange interface.
"""

import logging
from datetime import UTC, datetime

import ccxt.async_support as ccxt

from config.settings import get_settings
from core.exceptions import MalformedPayloadError, RateLimitedError, UpstreamError
from core.interfaces.market_data import BaseExchangeRestAPI
from core.models.market_data import PricePoint, PriceSeries

logger = logging.getLogger(__name__)


class BinanceRestAPI(BaseExchangeRestAPI):
    """
    Binance REST API client

    Uses ccxt library for:
    - Unified interface across exchanges
    - Built-in rate limiting
    - Symbol normalization ("ETH/USDT" ↔ "ETHUSDT")

    ccxt errors are translated into the market data exception hierarchy so
    callers can fall back to another source.
    """

    def __init__(self):
        super().__init__(exchange_name="binance")
        settings = get_settings()

        self.client = ccxt.binance(
            {
                "enableRateLimit": True,
                "timeout": settings.REST_API_TIMEOUT_MS,
            }
        )
        logger.info("BinanceRestAPI initialized")

    def _translate(self, error: Exception, action: str) -> UpstreamError:
        if isinstance(error, ccxt.RateLimitExceeded | ccxt.DDoSProtection):
            return RateLimitedError(self.exchange_name, f"{action}: {error}")
        return UpstreamError(self.exchange_name, f"{action}: {error}")

    async def fetch_ticker_price(self, symbol: str) -> float:
        """
        Fetch last traded price

        Args:
            symbol: Trading pair (e.g., "ETH/USDT")
        """
        try:
            ticker = await self.client.fetch_ticker(symbol)
        except ccxt.BaseError as e:
            logger.error(f"Failed to fetch ticker for {symbol}: {e}")
            raise self._translate(e, f"ticker {symbol}") from e

        price = ticker.get("last")
        if price is None:
            raise MalformedPayloadError(self.exchange_name, f"ticker {symbol} has no last price")
        return float(price)

    async def fetch_daily_closes(self, symbol: str, limit: int = 30) -> PriceSeries:
        """
        Fetch latest daily klines as a close-price series

        Args:
            symbol: Trading pair (e.g., "ETH/USDT")
            limit: Number of daily candles (default 30)

        Returns:
            PriceSeries of daily closes, oldest first
        """
        try:
            ohlcv = await self.client.fetch_ohlcv(symbol, "1d", limit=limit)
        except ccxt.BaseError as e:
            logger.error(f"Failed to fetch daily klines for {symbol}: {e}")
            raise self._translate(e, f"klines {symbol}") from e

        try:
            points = [
                PricePoint(
                    timestamp=datetime.fromtimestamp(row[0] / 1000, tz=UTC),
                    price=float(row[4]),
                )
                for row in ohlcv
            ]
        except (IndexError, TypeError, ValueError) as e:
            raise MalformedPayloadError(self.exchange_name, f"klines {symbol}: {e}") from e

        logger.debug(f"Fetched {len(points)} daily klines for {symbol}")
        return PriceSeries(coin_id=symbol, source=self.exchange_name, points=points)

    async def close(self) -> None:
        """Close ccxt client"""
        await self.client.close()
        logger.info("BinanceRestAPI closed")
