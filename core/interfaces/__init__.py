"""Interfaces module - Abstract base classes for providers and domain services"""

from .cache import BaseCacheClient
from .indicators import BaseIndicator
from .market_data import BaseExchangeRestAPI, BaseMarketDataProvider, BasePriceStream
from .simulation import BaseTradingSimulator

__all__ = [
    "BaseCacheClient",
    "BaseExchangeRestAPI",
    "BaseIndicator",
    "BaseMarketDataProvider",
    "BasePriceStream",
    "BaseTradingSimulator",
]
