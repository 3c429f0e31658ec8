"""
Paper trading ledger

In-memory portfolios keyed by user id. Nothing is persisted.
"""

import logging
from typing import Literal

from core.exceptions import InsufficientFundsError, PortfolioNotFoundError
from core.models.trading import PaperTrade, Portfolio

logger = logging.getLogger(__name__)


class PaperTradingService:
    """
    Paper trading with virtual cash

    Example:
        >>> service = PaperTradingService()
        >>> service.create_portfolio("alice", 10_000)
        >>> service.execute_trade("alice", "bitcoin", amount=0.1, price=50_000, type="buy")
        >>> service.calculate_profit_loss("alice", {"bitcoin": 55_000})
        500.0
    """

    def __init__(self):
        self._portfolios: dict[str, Portfolio] = {}

    def create_portfolio(self, user_id: str, initial_balance: float) -> Portfolio:
        """Create (or reset) a portfolio with cash only"""
        if initial_balance < 0:
            raise ValueError(f"Initial balance must be >= 0, got {initial_balance}")

        portfolio = Portfolio(
            user_id=user_id,
            initial_balance=initial_balance,
            balance=initial_balance,
        )
        self._portfolios[user_id] = portfolio
        logger.info(f"✓ Created paper portfolio for {user_id} ({initial_balance:.2f} USD)")
        return portfolio

    def get_portfolio(self, user_id: str) -> Portfolio:
        portfolio = self._portfolios.get(user_id)
        if portfolio is None:
            raise PortfolioNotFoundError(user_id)
        return portfolio

    def execute_trade(
        self,
        user_id: str,
        coin_id: str,
        amount: float,
        price: float,
        type: Literal["buy", "sell"],
    ) -> Portfolio:
        """
        Execute a market trade at the given price

        Raises:
            PortfolioNotFoundError: Unknown user
            InsufficientFundsError: Buy exceeds cash, or sell exceeds holdings
            pydantic.ValidationError: Non-positive amount/price or unknown type
        """
        portfolio = self.get_portfolio(user_id)
        trade = PaperTrade(coin_id=coin_id, amount=amount, price=price, type=type)
        cost = trade.amount * trade.price

        if trade.type == "buy":
            if cost > portfolio.balance:
                raise InsufficientFundsError(
                    f"Buy of {trade.amount} {coin_id} costs {cost:.2f}, "
                    f"balance is {portfolio.balance:.2f}"
                )
            new_balance = portfolio.balance - cost
        else:
            held = portfolio.holdings.get(coin_id, 0.0)
            if trade.amount > held:
                raise InsufficientFundsError(
                    f"Sell of {trade.amount} {coin_id} exceeds holdings of {held}"
                )
            new_balance = portfolio.balance + cost

        updated = portfolio.model_copy(
            update={"balance": new_balance, "trades": [*portfolio.trades, trade]}
        )
        self._portfolios[user_id] = updated

        logger.info(
            f"Paper {trade.type} {trade.amount} {coin_id} @ {trade.price} for {user_id} "
            f"(balance {new_balance:.2f})"
        )
        return updated

    def calculate_profit_loss(self, user_id: str, current_prices: dict[str, float]) -> float:
        """
        Profit/loss against the initial balance

        Holdings without a price in `current_prices` are valued at their
        last trade price.
        """
        portfolio = self.get_portfolio(user_id)

        last_trade_price = {t.coin_id: t.price for t in portfolio.trades}
        holdings_value = sum(
            qty * current_prices.get(coin_id, last_trade_price[coin_id])
            for coin_id, qty in portfolio.holdings.items()
        )
        return portfolio.balance + holdings_value - portfolio.initial_balance
