"""Trading module - simulations and paper trading"""

from domain.trading.paper_trading import PaperTradingService
from domain.trading.simulation import RandomWalkSimulator, ThresholdStrategySimulator

__all__ = ["PaperTradingService", "RandomWalkSimulator", "ThresholdStrategySimulator"]
