"""Models module - Pydantic data models"""

from .cache import CacheKey
from .market_data import (
    CoinAnalysis,
    CoinSummary,
    IndicatorSnapshot,
    NewsItem,
    Prediction,
    PricePoint,
    PriceSeries,
    Sparkline,
)
from .trading import PaperTrade, Portfolio, SimulationResult

__all__ = [
    "CacheKey",
    "CoinAnalysis",
    "CoinSummary",
    "IndicatorSnapshot",
    "NewsItem",
    "PaperTrade",
    "Portfolio",
    "Prediction",
    "PricePoint",
    "PriceSeries",
    "SimulationResult",
    "Sparkline",
]
