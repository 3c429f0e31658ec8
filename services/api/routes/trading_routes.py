"""
Trading simulation + paper trading API Routes
"""

import logging

from fastapi import APIRouter, Depends

from config.settings import get_settings
from domain.trading.paper_trading import PaperTradingService
from domain.trading.simulation import RandomWalkSimulator
from services.api.dependencies import get_gateway, get_paper_trading, get_simulator
from services.api.schemas import CreatePortfolioRequest, SimulationRequest, TradeRequest
from services.market_data_gateway import MarketDataGateway

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/simulate-trading", summary="Mock trading simulation (random walk)")
async def simulate_trading(
    body: SimulationRequest,
    simulator: RandomWalkSimulator = Depends(get_simulator),
):
    return simulator.simulate(body.initial_investment).to_dict()


@router.post("/portfolios", status_code=201, summary="Create paper trading portfolio")
async def create_portfolio(
    body: CreatePortfolioRequest,
    paper_trading: PaperTradingService = Depends(get_paper_trading),
):
    portfolio = paper_trading.create_portfolio(body.user_id, body.initial_balance)
    return portfolio.to_dict()


@router.get("/portfolios/{user_id}", summary="Get paper trading portfolio")
async def get_portfolio(
    user_id: str,
    paper_trading: PaperTradingService = Depends(get_paper_trading),
):
    return paper_trading.get_portfolio(user_id).to_dict()


@router.post("/portfolios/{user_id}/trades", summary="Execute paper trade")
async def execute_trade(
    user_id: str,
    body: TradeRequest,
    paper_trading: PaperTradingService = Depends(get_paper_trading),
):
    portfolio = paper_trading.execute_trade(
        user_id, body.coin_id, amount=body.amount, price=body.price, type=body.type
    )
    return portfolio.to_dict()


@router.get("/portfolios/{user_id}/pnl", summary="Profit/loss at current prices")
async def get_profit_loss(
    user_id: str,
    paper_trading: PaperTradingService = Depends(get_paper_trading),
    gateway: MarketDataGateway = Depends(get_gateway),
):
    portfolio = paper_trading.get_portfolio(user_id)

    current_prices: dict[str, float] = {}
    if portfolio.holdings:
        coins = await gateway.get_top_coins(get_settings().TOP_COINS_LIMIT)
        current_prices = {
            coin.id: coin.current_price for coin in coins if coin.id in portfolio.holdings
        }

    return {
        "userId": user_id,
        "profitLoss": paper_trading.calculate_profit_loss(user_id, current_prices),
        "currentPrices": current_prices,
    }
