"""
Request bodies for the HTTP API

JSON keys are camelCase (dashboard convention); snake_case is accepted too.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SimulationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    initial_investment: float = Field(alias="initialInvestment", gt=0)


class CreatePortfolioRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    initial_balance: float = Field(alias="initialBalance", ge=0)


class TradeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    coin_id: str = Field(alias="coinId", min_length=1)
    amount: float = Field(gt=0)
    price: float = Field(gt=0)
    type: Literal["buy", "sell"]
