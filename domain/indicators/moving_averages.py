"""
Moving average indicators

Implementations:
- SMA: Simple Moving Average
- EMA: Exponential Moving Average (seeded with the first price)
- BollingerBands: SMA ± k population standard deviations

SMA policy: series output has one entry per input index, None for the
leading indices whose window is not full. Scalar output is the last entry.
"""

import logging
from collections.abc import Sequence

import numpy as np
import talib

from core.interfaces.indicators import BaseIndicator

logger = logging.getLogger(__name__)


def to_optional_list(values: np.ndarray) -> list[float | None]:
    """Convert an indicator array to floats with NaN mapped to None"""
    return [None if np.isnan(v) else float(v) for v in values]


def ema_series(values: Sequence[float] | np.ndarray, period: int) -> np.ndarray:
    """
    Exponential moving average over the whole input

    Formula: EMA[i] = α × Price[i] + (1-α) × EMA[i-1], α = 2 / (period + 1)
    Seed: EMA[0] = Price[0] (first raw value, not an SMA of the first period)
    """
    data = np.asarray(values, dtype=np.float64)
    ema = np.empty_like(data)
    if data.size == 0:
        return ema

    alpha = 2.0 / (period + 1)
    ema[0] = data[0]
    for i in range(1, data.size):
        ema[i] = data[i] * alpha + ema[i - 1] * (1 - alpha)
    return ema


class SMA(BaseIndicator):
    """
    Simple Moving Average

    Formula: SMA = SUM(Close) / N

    Example:
        >>> sma = SMA(period=20)
        >>> value = sma.calculate(prices)  # None when len(prices) < 20
    """

    def __init__(self, period: int, name: str | None = None):
        """
        Initialize SMA

        Args:
            period: Look-back period
            name: Custom name for this indicator (e.g., "sma20"). If None, uses class name.
        """
        super().__init__(period=period, name=name)

    def calculate(self, prices: Sequence[float]) -> float | None:
        """Calculate latest SMA"""
        values = self.calculate_series(prices)
        return values[-1] if values else None

    def calculate_series(self, prices: Sequence[float]) -> list[float | None]:
        """SMA for every index, None where the window is not full"""
        closes = self.validate_input(prices)

        if closes.size < self.period:
            return [None] * int(closes.size)

        # TA-Lib SMA (NaN for leading indices)
        return to_optional_list(talib.SMA(closes, timeperiod=self.period))


class EMA(BaseIndicator):
    """
    Exponential Moving Average

    Formula: EMA = α × Price + (1-α) × EMA_prev
    where α = 2 / (period + 1)

    Note:
        Seeded with the first price rather than an SMA of the first period,
        so early values lean toward the oldest price. Load several periods of
        history for values close to the textbook definition.

    Example:
        >>> ema = EMA(period=12)
        >>> value = ema.calculate(prices)
    """

    def __init__(self, period: int, name: str | None = None):
        super().__init__(period=period, name=name)

    def calculate(self, prices: Sequence[float]) -> float | None:
        """Calculate latest EMA"""
        closes = self.validate_input(prices)

        if closes.size < self.period:
            return None

        if closes.size < self.period * 4:
            logger.debug(
                f"EMA({self.period}): Only {closes.size} prices, "
                f"recommend {self.period * 4} for convergence"
            )

        return float(ema_series(closes, self.period)[-1])

    def calculate_series(self, prices: Sequence[float]) -> list[float]:
        """EMA for every index (defined from the first price on)"""
        return [float(v) for v in ema_series(self.validate_input(prices), self.period)]


class BollingerBands(BaseIndicator):
    """
    Bollinger Bands

    Components:
        - Middle = SMA(period)
        - Upper = Middle + multiplier × σ
        - Lower = Middle - multiplier × σ
        σ = population standard deviation of the trailing window

    Interpretation:
        - Price near Upper: Stretched to the upside
        - Price near Lower: Stretched to the downside
        - Narrow bands: Low volatility

    Example:
        >>> bands = BollingerBands(period=20, multiplier=2)
        >>> result = bands.calculate_full(prices)
        >>> result["upper"] - result["lower"]
    """

    def __init__(self, period: int = 20, multiplier: float = 2.0, name: str | None = None):
        super().__init__(period=period, name=name or "bollinger", multiplier=multiplier)
        self.multiplier = float(multiplier)

    def _bands(self, closes: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        return talib.BBANDS(
            closes,
            timeperiod=self.period,
            nbdevup=self.multiplier,
            nbdevdn=self.multiplier,
            matype=0,
        )

    def calculate(self, prices: Sequence[float]) -> float | None:
        """Calculate latest middle band"""
        result = self.calculate_full(prices)
        return result["middle"] if result else None

    def calculate_full(self, prices: Sequence[float]) -> dict | None:
        """
        Calculate all band components

        Returns:
            Dict with keys: upper, middle, lower
            Or None if insufficient data
        """
        closes = self.validate_input(prices)
        if closes.size < self.period:
            return None

        upper, middle, lower = self._bands(closes)
        return {
            "upper": float(upper[-1]),
            "middle": float(middle[-1]),
            "lower": float(lower[-1]),
        }

    def calculate_series(self, prices: Sequence[float]) -> dict[str, list[float | None]]:
        """Band values for every index, None where the window is not full"""
        closes = self.validate_input(prices)
        if closes.size < self.period:
            empty = [None] * int(closes.size)
            return {"upper": list(empty), "middle": list(empty), "lower": list(empty)}

        upper, middle, lower = self._bands(closes)
        return {
            "upper": to_optional_list(upper),
            "middle": to_optional_list(middle),
            "lower": to_optional_list(lower),
        }

    def get_results(self, prices: Sequence[float]) -> dict[str, float]:
        """
        Override to return all three bands

        Returns:
            Dict with bollinger_upper, bollinger_middle, bollinger_lower
        """
        result = self.calculate_full(prices)
        if not result:
            return {}

        return {
            f"{self.name}_upper": result["upper"],
            f"{self.name}_middle": result["middle"],
            f"{self.name}_lower": result["lower"],
        }
