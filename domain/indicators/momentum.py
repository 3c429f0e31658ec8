"""
Momentum indicators

Implementations:
- RSI: Relative Strength Index (Wilder smoothing)
- MACD: Moving Average Convergence Divergence (first-price seeded EMAs)
"""

from collections.abc import Sequence
from typing import Optional

import numpy as np

from core.interfaces.indicators import BaseIndicator
from domain.indicators.moving_averages import ema_series

RSI_NEUTRAL = 50.0


class RSI(BaseIndicator):
    """
    Relative Strength Index

    Formula:
        RS = Average Gain / Average Loss (Wilder smoothing over N periods)
        RSI = 100 - (100 / (1 + RS))

    Averages are seeded with the simple mean of the first N price changes
    (all available changes when the series holds exactly N prices), then
    smoothed: avg = (avg × (N-1) + current) / N.

    Edge cases:
        - Fewer than N prices: 50 (neutral)
        - Average loss of 0: 100

    Interpretation:
        - RSI > 70: Overbought
        - RSI < 30: Oversold
        - RSI = 50: Neutral

    Example:
        >>> rsi = RSI(period=14)
        >>> value = rsi.calculate(prices)
        >>> if value > 70:
        ...     print("Overbought")
    """

    def __init__(self, period: int = 14, name: str | None = None):
        """
        Initialize RSI

        Args:
            period: Look-back period (default: 14)
        """
        super().__init__(period=period, name=name)

    def calculate(self, prices: Sequence[float]) -> Optional[float]:
        """Calculate RSI"""
        closes = self.validate_input(prices)

        if closes.size < self.period:
            return RSI_NEUTRAL

        deltas = np.diff(closes)
        gains = np.where(deltas > 0, deltas, 0.0)
        losses = np.where(deltas < 0, -deltas, 0.0)

        seed = min(self.period, deltas.size)
        if seed == 0:
            return RSI_NEUTRAL

        avg_gain = float(gains[:seed].mean())
        avg_loss = float(losses[:seed].mean())

        for gain, loss in zip(gains[seed:], losses[seed:]):
            avg_gain = (avg_gain * (self.period - 1) + gain) / self.period
            avg_loss = (avg_loss * (self.period - 1) + loss) / self.period

        if avg_loss == 0:
            return 100.0

        rs = avg_gain / avg_loss
        return float(100 - (100 / (1 + rs)))


class MACD(BaseIndicator):
    """
    Moving Average Convergence Divergence

    Components:
        - MACD Line = EMA(12) - EMA(26)
        - Signal Line = EMA(9) of MACD Line
        - Histogram = MACD Line - Signal Line

    Every EMA is seeded with its first input value.

    Interpretation:
        - MACD crosses above Signal: Bullish
        - MACD crosses below Signal: Bearish
        - Histogram > 0: Upward momentum
        - Histogram < 0: Downward momentum

    Example:
        >>> macd = MACD()
        >>> result = macd.calculate_full(prices)  # None when len(prices) < 26
        >>> if result["macd"] > result["signal"]:
        ...     print("Bullish")
    """

    def __init__(
        self,
        fast_period: int = 12,
        slow_period: int = 26,
        signal_period: int = 9,
        name: str | None = None,
    ):
        """
        Initialize MACD

        Args:
            fast_period: Fast EMA period (default: 12)
            slow_period: Slow EMA period (default: 26)
            signal_period: Signal line EMA period (default: 9)
        """
        # Use slow_period as the main period for sufficiency checks
        super().__init__(
            period=slow_period, name=name or "macd", fast=fast_period, signal=signal_period
        )
        self.fast_period = fast_period
        self.slow_period = slow_period
        self.signal_period = signal_period

    def calculate(self, prices: Sequence[float]) -> Optional[float]:
        """
        Calculate MACD histogram value

        Returns:
            MACD histogram (MACD line - Signal line)
        """
        result = self.calculate_full(prices)
        return result["histogram"] if result else None

    def calculate_series(self, prices: Sequence[float]) -> Optional[dict[str, list[float]]]:
        """
        Calculate MACD components for every index

        Returns:
            Dict with keys: macd, signal, histogram (lists aligned with prices)
            Or None if insufficient data
        """
        closes = self.validate_input(prices)
        if closes.size < self.slow_period:
            return None

        macd_line = ema_series(closes, self.fast_period) - ema_series(closes, self.slow_period)
        signal_line = ema_series(macd_line, self.signal_period)
        histogram = macd_line - signal_line

        return {
            "macd": macd_line.tolist(),
            "signal": signal_line.tolist(),
            "histogram": histogram.tolist(),
        }

    def calculate_full(self, prices: Sequence[float]) -> Optional[dict]:
        """
        Calculate all MACD components at the latest index

        Returns:
            Dict with keys: macd, signal, histogram
            Or None if insufficient data
        """
        series = self.calculate_series(prices)
        if series is None:
            return None

        return {
            "macd": float(series["macd"][-1]),
            "signal": float(series["signal"][-1]),
            "histogram": float(series["histogram"][-1]),
        }

    def get_results(self, prices: Sequence[float]) -> dict[str, float]:
        """
        Override to return all MACD components

        Returns:
            Dict with macd, signal, histogram
        """
        result = self.calculate_full(prices)
        if not result:
            return {}

        return dict(result)
