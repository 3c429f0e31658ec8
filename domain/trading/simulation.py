"""
Trading simulations

Implementations:
- RandomWalkSimulator: Mock portfolio driven by random daily returns
- ThresholdStrategySimulator: Buy after a large drop, sell after a large rise
"""

import logging
from collections.abc import Sequence

import numpy as np

from core.interfaces.simulation import BaseTradingSimulator
from core.models.trading import SimulationResult

logger = logging.getLogger(__name__)


class RandomWalkSimulator(BaseTradingSimulator):
    """
    Random-walk portfolio

    Each day the portfolio value is multiplied by (1 + r), r ~ N(drift, volatility).
    Uses an unseeded generator: results differ between runs.

    Example:
        >>> RandomWalkSimulator(days=30).simulate(10_000).to_dict()
        {'finalPortfolioValue': 10412.7, 'profit': 412.7}
    """

    def __init__(
        self,
        days: int = 30,
        drift: float = 0.0,
        volatility: float = 0.02,
        rng: np.random.Generator | None = None,
    ):
        self.days = days
        self.drift = drift
        self.volatility = volatility
        self.rng = rng or np.random.default_rng()

    def simulate(self, initial_investment: float) -> SimulationResult:
        self.validate_investment(initial_investment)

        returns = self.rng.normal(self.drift, self.volatility, size=self.days)
        # A day can lose at most the whole position
        growth = np.prod(np.clip(1 + returns, 0.0, None))
        final_value = float(initial_investment * growth)

        return SimulationResult(
            final_portfolio_value=final_value,
            profit=final_value - initial_investment,
        )


class ThresholdStrategySimulator(BaseTradingSimulator):
    """
    Threshold strategy over a price history

    Rules (day-over-day change):
        - change <= -threshold: buy with all cash
        - change >= +threshold: sell all holdings
    Open holdings are valued at the last price.

    Example:
        >>> sim = ThresholdStrategySimulator(closes, threshold=0.05)
        >>> sim.simulate(10_000).final_portfolio_value
    """

    def __init__(self, prices: Sequence[float], threshold: float = 0.05):
        self.prices = [float(p) for p in prices]
        self.threshold = threshold

    def simulate(self, initial_investment: float) -> SimulationResult:
        self.validate_investment(initial_investment)

        if len(self.prices) < 2:
            logger.warning(
                f"Threshold simulation needs 2+ prices, got {len(self.prices)}; "
                f"returning initial investment"
            )
            return SimulationResult(final_portfolio_value=initial_investment, profit=0.0)

        cash = initial_investment
        holdings = 0.0

        for prev_price, price in zip(self.prices, self.prices[1:]):
            change = (price - prev_price) / prev_price

            if change >= self.threshold and holdings > 0:
                cash += holdings * price
                holdings = 0.0
            elif change <= -self.threshold and cash > 0:
                holdings += cash / price
                cash = 0.0

        final_value = cash + holdings * self.prices[-1]
        return SimulationResult(
            final_portfolio_value=final_value,
            profit=final_value - initial_investment,
        )
