"""
Client factory - Auto-create clients based on configuration

Dependency injection pattern: services ask for interfaces, the factory
picks implementations from settings + YAML.
"""

import logging

from config.settings import get_settings
from core.interfaces.cache import BaseCacheClient
from core.interfaces.market_data import BaseExchangeRestAPI, BaseMarketDataProvider, BasePriceStream

logger = logging.getLogger(__name__)


def create_cache_client() -> BaseCacheClient:
    """
    Create cache client based on cache backend config

    Returns:
        BaseCacheClient: InMemoryCacheClient (memory) or RedisClient (redis)

    Examples:
        >>> # .env: CACHE_BACKEND=redis
        >>> cache = create_cache_client()  # Returns RedisClient
    """
    backend = get_settings().cache_backend

    if backend == "memory":
        from providers.opensource.memory_cache import InMemoryCacheClient

        logger.info("✓ Creating InMemoryCacheClient")
        return InMemoryCacheClient()

    elif backend == "redis":
        from providers.opensource.redis_client import RedisClient

        logger.info("✓ Creating RedisClient")
        return RedisClient()

    else:
        raise ValueError(f"Unsupported cache backend: {backend}. Supported: memory, redis")


def create_market_data_provider(provider_name: str) -> BaseMarketDataProvider:
    """
    Create a market data provider from config/providers/market_data.yaml

    Args:
        provider_name: Provider key ("coingecko", "coincap")

    Raises:
        KeyError: If provider is not configured
        ValueError: If no implementation exists for the provider
    """
    from config.loader import get_provider_config

    config = get_provider_config(provider_name)
    provider_lower = provider_name.lower()

    if provider_lower == "coingecko":
        from providers.coingecko.rest_api import CoinGeckoRestAPI

        logger.info(f"✓ Creating CoinGeckoRestAPI ({config.base_url})")
        return CoinGeckoRestAPI(base_url=config.base_url, vs_currency=config.vs_currency)

    elif provider_lower == "coincap":
        from providers.coincap.rest_api import CoinCapRestAPI

        logger.info(f"✓ Creating CoinCapRestAPI ({config.base_url})")
        return CoinCapRestAPI(base_url=config.base_url)

    else:
        raise ValueError(
            f"Unknown market data provider: {provider_name}. Supported: coingecko, coincap"
        )


def create_market_data_gateway(cache: BaseCacheClient | None = None):
    """
    Create the Market Data Gateway with primary/secondary providers from YAML

    Args:
        cache: Cache client (created from config when omitted)

    Returns:
        MarketDataGateway
    """
    from config.loader import get_gateway_providers
    from services.market_data_gateway import MarketDataGateway

    primary_name, secondary_name = get_gateway_providers()
    primary = create_market_data_provider(primary_name)
    secondary = create_market_data_provider(secondary_name)

    logger.info(
        f"✓ Creating MarketDataGateway (primary={primary.name}, secondary={secondary.name})"
    )
    return MarketDataGateway(primary, secondary, cache or create_cache_client())


def create_exchange_rest_api(exchange_name: str) -> BaseExchangeRestAPI:
    """
    Factory method for creating exchange REST API clients.

    Args:
        exchange_name: Exchange identifier ("binance")

    Examples:
        >>> api = create_exchange_rest_api("binance")
        >>> price = await api.fetch_ticker_price("ETH/USDT")
        >>> await api.close()

    Raises:
        ValueError: If exchange_name is not supported
    """
    exchange_lower = exchange_name.lower()

    if exchange_lower == "binance":
        from providers.binance.rest_api import BinanceRestAPI

        logger.info("✓ Creating BinanceRestAPI")
        return BinanceRestAPI()

    else:
        raise ValueError(f"Unknown exchange: {exchange_name}. Supported: binance")


def create_price_stream(exchange_name: str, symbol: str) -> BasePriceStream:
    """
    Create a live price stream for one symbol

    Args:
        exchange_name: Exchange identifier ("binance")
        symbol: Exchange-native stream symbol (e.g., "ethusdt")
    """
    settings = get_settings()
    exchange_lower = exchange_name.lower()

    if exchange_lower == "binance":
        from providers.binance.websocket import BinancePriceStream

        logger.info(f"✓ Creating BinancePriceStream ({symbol})")
        return BinancePriceStream(
            symbol,
            max_retries=settings.ETH_WEBSOCKET_MAX_RETRIES,
            reconnect_delay=settings.ETH_WEBSOCKET_RECONNECT_DELAY_SECONDS,
        )

    else:
        raise ValueError(f"Unknown exchange: {exchange_name}. Supported: binance")
