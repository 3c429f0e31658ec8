"""
Abstract interface for technical indicators

Indicators work on a plain price sequence (oldest first)
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Optional

import numpy as np


class BaseIndicator(ABC):
    """
    Indicator interface

    Design principle:
    - Pure calculation logic (no I/O, no mutable state)
    - Insufficient data yields None (or a documented neutral value), never raises
    - Testable with plain lists of floats

    Implementations:
    - SMA, EMA, BollingerBands (domain/indicators/moving_averages.py)
    - RSI, MACD (domain/indicators/momentum.py)
    """

    def __init__(self, period: int, name: str | None = None, **kwargs):
        """
        Initialize indicator

        Args:
            period: Look-back period for calculation
            name: Result key (e.g., "sma20"). If None, uses class name.
            **kwargs: Additional indicator-specific parameters
        """
        if period < 1:
            raise ValueError(f"{self.__class__.__name__}: period must be >= 1, got {period}")

        self.period = period
        self.name = name or self.__class__.__name__
        self.params = {"period": period, **kwargs}

    @abstractmethod
    def calculate(self, prices: Sequence[float]) -> Optional[float]:
        """
        Calculate indicator from a price sequence

        Args:
            prices: Prices ordered oldest first

        Returns:
            Most recent indicator value, or None if insufficient data

        Raises:
            ValueError: If prices contain NaN/inf
        """

    def get_results(self, prices: Sequence[float]) -> dict[str, float]:
        """
        Get indicator results as dict (for polymorphic calculation)

        Default implementation returns single value: {self.name: value}
        Override for multi-value indicators (MACD, Bollinger Bands)

        Returns:
            Dict of results, e.g. {"sma20": 45000.5}
            Empty dict if the value is unavailable

        Example:
            >>> SMA(period=20, name="sma20").get_results(prices)
            {"sma20": 45123.45}

            >>> MACD().get_results(prices)
            {"macd": 123.45, "signal": 100.0, "histogram": 23.45}
        """
        value = self.calculate(prices)
        if value is None:
            return {}
        return {self.name: value}

    def validate_input(self, prices: Sequence[float]) -> np.ndarray:
        """
        Validate prices and convert to a float64 array

        Raises:
            ValueError: If prices are not a flat sequence of finite numbers
        """
        closes = np.asarray(prices, dtype=np.float64)

        if closes.ndim != 1:
            raise ValueError(f"{self.name}: Expected a flat price sequence")

        if closes.size and not np.all(np.isfinite(closes)):
            raise ValueError(f"{self.name}: Prices must be finite numbers")

        return closes

    def __repr__(self) -> str:
        """String representation"""
        params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{self.name}({params_str})"
