"""
Trading models

- PaperTrade / Portfolio: In-memory paper trading ledger
- SimulationResult: Outcome of a trading simulation
"""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PaperTrade(BaseModel):
    """Executed paper trade"""

    coin_id: str
    amount: float = Field(gt=0, description="Coin quantity")
    price: float = Field(gt=0, description="Execution price (USD)")
    type: Literal["buy", "sell"]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Portfolio(BaseModel):
    """Paper trading portfolio for one user"""

    user_id: str
    initial_balance: float
    balance: float
    trades: list[PaperTrade] = Field(default_factory=list)

    @property
    def holdings(self) -> dict[str, float]:
        """Net coin quantity per coin id"""
        positions: dict[str, float] = {}
        for trade in self.trades:
            sign = 1 if trade.type == "buy" else -1
            positions[trade.coin_id] = positions.get(trade.coin_id, 0.0) + sign * trade.amount
        return {coin: qty for coin, qty in positions.items() if qty != 0}

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data["holdings"] = self.holdings
        return data


class SimulationResult(BaseModel):
    """Final value and profit of a simulated trading run"""

    model_config = ConfigDict(populate_by_name=True)

    final_portfolio_value: float = Field(alias="finalPortfolioValue")
    profit: float

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
