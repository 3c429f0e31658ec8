"""
Indicator registry

Maps indicator kinds to classes and builds the dashboard indicator set
from (kind, params) pairs.
"""

from collections.abc import Iterable

from core.interfaces.indicators import BaseIndicator
from domain.indicators.momentum import MACD, RSI
from domain.indicators.moving_averages import EMA, SMA, BollingerBands

IndicatorSpec = tuple[str, dict]


class IndicatorRegistry:
    """Lookup of indicator kinds (case-insensitive)"""

    _indicators: dict[str, type[BaseIndicator]] = {
        "sma": SMA,
        "ema": EMA,
        "rsi": RSI,
        "macd": MACD,
        "bollinger": BollingerBands,
    }

    @classmethod
    def create(cls, kind: str, **params) -> BaseIndicator:
        """
        Create one indicator

        Args:
            kind: sma, ema, rsi, macd or bollinger
            **params: Constructor arguments, including an optional result 'name'

        Raises:
            ValueError: Unknown kind or invalid period

        Example:
            >>> IndicatorRegistry.create("sma", period=50, name="sma50")
            sma50(period=50)
        """
        indicator_class = cls._indicators.get(kind.lower())
        if indicator_class is None:
            available = ", ".join(cls.list_indicators())
            raise ValueError(f"Unknown indicator: {kind}. Available: {available}")

        return indicator_class(**params)

    @classmethod
    def create_many(cls, specs: Iterable[IndicatorSpec]) -> list[BaseIndicator]:
        """Create an indicator per (kind, params) pair, in order"""
        return [cls.create(kind, **params) for kind, params in specs]

    @classmethod
    def list_indicators(cls) -> list[str]:
        return sorted(cls._indicators)
