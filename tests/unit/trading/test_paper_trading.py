"""
Unit tests for the paper trading ledger
"""

import pytest
from pydantic import ValidationError

from core.exceptions import InsufficientFundsError, PortfolioNotFoundError
from domain.trading.paper_trading import PaperTradingService


@pytest.fixture
def service():
    service = PaperTradingService()
    service.create_portfolio("alice", 10_000)
    return service


@pytest.mark.unit
class TestPaperTradingService:
    def test_create_portfolio(self, service):
        portfolio = service.get_portfolio("alice")

        assert portfolio.balance == 10_000
        assert portfolio.initial_balance == 10_000
        assert portfolio.trades == []

    def test_negative_initial_balance(self, service):
        with pytest.raises(ValueError):
            service.create_portfolio("bob", -1)

    def test_unknown_portfolio(self, service):
        with pytest.raises(PortfolioNotFoundError, match="bob"):
            service.get_portfolio("bob")

    def test_buy_debits_balance(self, service):
        portfolio = service.execute_trade("alice", "bitcoin", amount=0.1, price=50_000, type="buy")

        assert portfolio.balance == pytest.approx(5_000)
        assert portfolio.holdings == {"bitcoin": pytest.approx(0.1)}
        assert service.get_portfolio("alice") is portfolio

    def test_sell_credits_balance(self, service):
        service.execute_trade("alice", "bitcoin", amount=0.1, price=50_000, type="buy")

        portfolio = service.execute_trade(
            "alice", "bitcoin", amount=0.1, price=55_000, type="sell"
        )

        assert portfolio.balance == pytest.approx(10_500)
        assert portfolio.holdings == {}

    def test_buy_exceeding_balance_rejected(self, service):
        with pytest.raises(InsufficientFundsError):
            service.execute_trade("alice", "bitcoin", amount=1, price=50_000, type="buy")

        assert service.get_portfolio("alice").balance == 10_000

    def test_sell_exceeding_holdings_rejected(self, service):
        with pytest.raises(InsufficientFundsError):
            service.execute_trade("alice", "ethereum", amount=1, price=3000, type="sell")

    def test_invalid_trade_rejected(self, service):
        with pytest.raises(ValidationError):
            service.execute_trade("alice", "bitcoin", amount=-1, price=50_000, type="buy")

    def test_profit_loss_at_current_prices(self, service):
        service.execute_trade("alice", "bitcoin", amount=0.1, price=50_000, type="buy")

        assert service.calculate_profit_loss("alice", {"bitcoin": 55_000}) == pytest.approx(500)

    def test_profit_loss_uses_last_trade_price_when_unpriced(self, service):
        service.execute_trade("alice", "bitcoin", amount=0.1, price=50_000, type="buy")

        assert service.calculate_profit_loss("alice", {}) == pytest.approx(0)

    def test_profit_loss_cash_only(self, service):
        assert service.calculate_profit_loss("alice", {"bitcoin": 1}) == 0
