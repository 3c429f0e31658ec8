"""
Abstract interface for trading simulations

Simulations are illustrative only. They are not backtests of the
indicator engine and make no accuracy claims.
"""

from abc import ABC, abstractmethod

from core.models.trading import SimulationResult


class BaseTradingSimulator(ABC):
    """
    Trading simulation interface

    Implementations:
    - RandomWalkSimulator (domain/trading/simulation.py) - mock, true randomness
    - ThresholdStrategySimulator (domain/trading/simulation.py) - ±5% rule over history
    """

    @abstractmethod
    def simulate(self, initial_investment: float) -> SimulationResult:
        """
        Run the simulation

        Args:
            initial_investment: Starting cash (USD), must be > 0

        Returns:
            Final portfolio value and profit
        """

    @staticmethod
    def validate_investment(initial_investment: float) -> None:
        if not initial_investment > 0:
            raise ValueError(f"Initial investment must be > 0, got {initial_investment}")
