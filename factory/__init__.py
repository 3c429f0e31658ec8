"""Factory package - Dependency injection for provider-agnostic code"""

from .client_factory import (
    create_cache_client,
    create_exchange_rest_api,
    create_market_data_gateway,
    create_market_data_provider,
    create_price_stream,
)

__all__ = [
    "create_cache_client",
    "create_market_data_provider",
    "create_market_data_gateway",
    "create_exchange_rest_api",
    "create_price_stream",
]
