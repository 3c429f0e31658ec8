"""FastAPI dependencies - components live on app.state (set by create_app)"""

from fastapi import Request

from domain.trading.paper_trading import PaperTradingService
from domain.trading.simulation import RandomWalkSimulator
from services.analysis_service import CoinAnalyzer
from services.market_data_gateway import MarketDataGateway


def get_gateway(request: Request) -> MarketDataGateway:
    return request.app.state.gateway


def get_analyzer(request: Request) -> CoinAnalyzer:
    return request.app.state.analyzer


def get_paper_trading(request: Request) -> PaperTradingService:
    return request.app.state.paper_trading


def get_simulator(request: Request) -> RandomWalkSimulator:
    return request.app.state.simulator


def parse_window(timeframe: str) -> str | int:
    """Timeframe code ("1M", "3M", "1Y") or a plain day count ("7")"""
    return int(timeframe) if timeframe.isdigit() else timeframe
