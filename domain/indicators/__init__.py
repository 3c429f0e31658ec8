"""
Technical indicators module

Exports:
- BaseIndicator (core/interfaces/indicators.py)
- Moving averages: SMA, EMA, BollingerBands
- Momentum: RSI, MACD
- Registry: IndicatorRegistry
- Snapshot: compute_snapshot
"""

from core.interfaces.indicators import BaseIndicator
from domain.indicators.momentum import MACD, RSI
from domain.indicators.moving_averages import EMA, SMA, BollingerBands
from domain.indicators.registry import IndicatorRegistry
from domain.indicators.snapshot import compute_snapshot

__all__ = [
    "BaseIndicator",
    "SMA",
    "EMA",
    "BollingerBands",
    "RSI",
    "MACD",
    "IndicatorRegistry",
    "compute_snapshot",
]
