"""
Indicator snapshot - latest value of every dashboard indicator

Builds the fixed indicator set (MACD, RSI 14, SMA 20/50, Bollinger 20/2)
through the registry and merges their results into one IndicatorSnapshot.
"""

from collections.abc import Sequence

from core.models.market_data import IndicatorSnapshot
from domain.indicators.registry import IndicatorRegistry, IndicatorSpec

SNAPSHOT_INDICATORS: tuple[IndicatorSpec, ...] = (
    ("macd", {"fast_period": 12, "slow_period": 26, "signal_period": 9}),
    ("rsi", {"period": 14, "name": "rsi"}),
    ("sma", {"period": 20, "name": "sma20"}),
    ("sma", {"period": 50, "name": "sma50"}),
    ("bollinger", {"period": 20, "multiplier": 2.0, "name": "bollinger"}),
)

_INDICATORS = IndicatorRegistry.create_many(SNAPSHOT_INDICATORS)


def compute_snapshot(prices: Sequence[float]) -> IndicatorSnapshot:
    """
    Compute every snapshot indicator for a price sequence (oldest first)

    Indicators without enough data are left as None.

    Raises:
        ValueError: If prices contain NaN/inf
    """
    results: dict[str, float] = {}
    for indicator in _INDICATORS:
        results.update(indicator.get_results(prices))
    return IndicatorSnapshot(**results)
