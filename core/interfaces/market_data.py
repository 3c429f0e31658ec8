"""
Abstract base classes for market data sources

- BaseMarketDataProvider: Ranked coin lists + price history (CoinGecko, CoinCap)
- BaseExchangeRestAPI: Spot ticker + daily klines from an exchange (Binance)
- BasePriceStream: Live trade price stream from an exchange WebSocket
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

from core.models.market_data import CoinSummary, NewsItem, PriceSeries

logger = logging.getLogger(__name__)


class BaseMarketDataProvider(ABC):
    """
    Abstract base class for market data providers

    Implementations:
    - CoinGeckoRestAPI (providers/coingecko/rest_api.py) - primary
    - CoinCapRestAPI (providers/coincap/rest_api.py) - secondary, no history

    Providers without history support return an empty PriceSeries instead of
    raising, so callers can treat "no data" as a normal outcome.

    Error contract:
    - RateLimitedError on HTTP 429
    - UpstreamError on any other failed request
    - MalformedPayloadError when the response cannot be parsed

    Example:
        >>> provider = CoinGeckoRestAPI()
        >>> coins = await provider.fetch_top_coins(limit=10)
        >>> series = await provider.fetch_price_history("bitcoin", days=30)
        >>> await provider.close()
    """

    # Largest page fetch_top_coins can return (None: no limit)
    max_page_size: int | None = None

    def __init__(self, name: str):
        self.name = name

    def page_limit(self, limit: int) -> int:
        """Clamp a requested row count to max_page_size"""
        if self.max_page_size is None:
            return limit
        return min(limit, self.max_page_size)

    @abstractmethod
    async def fetch_top_coins(self, limit: int) -> list[CoinSummary]:
        """
        Fetch coins ranked by market capitalization (descending)

        Args:
            limit: Number of rows to request

        Returns:
            Up to `limit` CoinSummary records, highest market cap first
        """

    @abstractmethod
    async def fetch_price_history(
        self, coin_id: str, days: int, resolution: str = "auto"
    ) -> PriceSeries:
        """
        Fetch price history for one coin

        Args:
            coin_id: Provider coin id (e.g., "bitcoin")
            days: Number of days back from now
            resolution: "auto" (provider granularity) or "daily"

        Returns:
            Chronological PriceSeries (possibly empty)
        """

    async def fetch_status_updates(self, coin_id: str) -> list[NewsItem]:
        """Fetch status updates / news for one coin (empty when unsupported)"""
        return []

    @abstractmethod
    async def close(self) -> None:
        """Release HTTP resources"""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class BaseExchangeRestAPI(ABC):
    """
    Abstract base class for exchange REST clients

    Implementations:
    - BinanceRestAPI (providers/binance/rest_api.py)
    """

    def __init__(self, exchange_name: str):
        self.exchange_name = exchange_name

    @abstractmethod
    async def fetch_ticker_price(self, symbol: str) -> float:
        """
        Fetch last traded price

        Args:
            symbol: Unified trading pair (e.g., "ETH/USDT")
        """

    @abstractmethod
    async def fetch_daily_closes(self, symbol: str, limit: int = 30) -> PriceSeries:
        """
        Fetch the latest daily candles as a close-price series

        Args:
            symbol: Unified trading pair (e.g., "ETH/USDT")
            limit: Number of daily candles
        """

    @abstractmethod
    async def close(self) -> None:
        """Close client"""


class BasePriceStream(ABC):
    """
    Abstract base class for live price streams

    Implementations:
    - BinancePriceStream (providers/binance/websocket.py)

    Example:
        >>> stream = BinancePriceStream("ethusdt")
        >>> async def handle_price(price: float):
        ...     print(f"ETH @ {price}")
        >>> stream.on_price(handle_price)
        >>> await stream.start()
    """

    def __init__(self, symbol: str):
        """
        Initialize price stream

        Args:
            symbol: Exchange-native stream symbol (e.g., "ethusdt")
        """
        self.symbol = symbol
        self.callbacks_price: list[Callable[[float], Awaitable[None]]] = []
        self.running = False

    @abstractmethod
    async def start(self) -> None:
        """
        Run the stream until stop() is called or retries are exhausted

        Long-running coroutine.
        """

    @abstractmethod
    async def stop(self) -> None:
        """Stop the stream and close the connection"""

    @abstractmethod
    def _parse_price(self, data: dict) -> float | None:
        """
        Extract the trade price from an exchange message

        Returns:
            Price, or None when the message is not a trade
        """

    def on_price(self, callback: Callable[[float], Awaitable[None]]) -> None:
        """Register price callback"""
        self.callbacks_price.append(callback)

    async def _notify_price(self, price: float) -> None:
        """Notify all price callbacks"""
        for callback in self.callbacks_price:
            try:
                await callback(price)
            except Exception as e:
                # Don't let callback errors crash the stream
                logger.error(f"Error in price callback: {e}")
