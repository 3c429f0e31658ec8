"""
Analysis Service - indicator snapshots and predictions for ranked coins
"""

from services.analysis_service.analyzer import CoinAnalyzer, evaluate

__all__ = ["CoinAnalyzer", "evaluate"]
