"""
Market data + analysis API Routes

Errors that survive gateway recovery surface as 500 via the
MarketDataError handler (services/api/errors.py).
"""

import logging

from fastapi import APIRouter, Depends, Query

from config.settings import get_settings
from services.analysis_service import CoinAnalyzer
from services.api.dependencies import get_analyzer, get_gateway, parse_window
from services.market_data_gateway import MarketDataGateway

logger = logging.getLogger(__name__)
router = APIRouter()


def _window(timeframe: str | None) -> str | int:
    return parse_window(timeframe or get_settings().DEFAULT_TIMEFRAME)


@router.get("/coins", summary="Top coins by market cap")
async def get_coins(
    limit: int = Query(30, ge=1, le=250, description="Number of coins"),
    gateway: MarketDataGateway = Depends(get_gateway),
):
    coins = await gateway.get_top_coins(limit)
    return [coin.model_dump(mode="json") for coin in coins]


@router.get("/analysis/{coin_id}", summary="Indicators + prediction for one coin")
async def get_analysis(
    coin_id: str,
    timeframe: str | None = Query(None, description="1M, 3M, 1Y or a day count"),
    analyzer: CoinAnalyzer = Depends(get_analyzer),
):
    return await analyzer.analyze_coin_id(coin_id, _window(timeframe))


@router.get("/indicators/{coin_id}", summary="Indicator snapshot for one coin")
async def get_indicators(
    coin_id: str,
    timeframe: str | None = Query(None, description="1M, 3M, 1Y or a day count"),
    analyzer: CoinAnalyzer = Depends(get_analyzer),
):
    snapshot = await analyzer.get_indicators(coin_id, _window(timeframe))
    return snapshot.model_dump()


@router.get("/coins-with-analysis", summary="Top coins with indicators and predictions")
async def get_coins_with_analysis(
    limit: int = Query(30, ge=1, le=250),
    timeframe: str | None = Query(None, description="1M, 3M, 1Y or a day count"),
    analyzer: CoinAnalyzer = Depends(get_analyzer),
):
    analyses = await analyzer.analyze_top_coins(limit, _window(timeframe))
    return {"coins": [analysis.to_dict() for analysis in analyses]}


@router.get("/recommendations", summary="Strongest buy and sell candidates")
async def get_recommendations(
    limit: int = Query(30, ge=1, le=250, description="Number of top coins to screen"),
    top: int = Query(5, ge=1, le=50, description="Candidates per side"),
    timeframe: str | None = Query(None),
    analyzer: CoinAnalyzer = Depends(get_analyzer),
):
    recommendations = await analyzer.get_recommendations(limit, _window(timeframe), top_n=top)
    return {side: [a.to_dict() for a in items] for side, items in recommendations.items()}


@router.get("/news/{coin_id}", summary="Status updates for one coin")
async def get_news(coin_id: str, gateway: MarketDataGateway = Depends(get_gateway)):
    news = await gateway.get_status_updates(coin_id)
    return [item.to_dict() for item in news]
