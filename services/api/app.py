"""
Dashboard API Server

FastAPI application serving the multi-coin dashboard.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from domain.trading.paper_trading import PaperTradingService
from domain.trading.simulation import RandomWalkSimulator
from services.analysis_service import CoinAnalyzer
from services.api.errors import register_exception_handlers
from services.api.routes import health_routes, market_routes, trading_routes
from services.market_data_gateway import MarketDataGateway

logger = logging.getLogger(__name__)


def create_app(
    gateway: MarketDataGateway | None = None,
    paper_trading: PaperTradingService | None = None,
    simulator: RandomWalkSimulator | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        gateway: Market data gateway (built from config when omitted)
        paper_trading: Paper trading ledger (fresh in-memory one when omitted)
        simulator: Random-walk simulator for /api/simulate-trading
    """
    settings = get_settings()

    if gateway is None:
        from factory.client_factory import create_market_data_gateway

        gateway = create_market_data_gateway()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await app.state.gateway.cache.connect()
        logger.info(
            f"✅ Dashboard API ready (primary={app.state.gateway.primary.name}, "
            f"secondary={app.state.gateway.secondary.name})"
        )
        yield
        logger.info("Shutting down Dashboard API")
        await app.state.gateway.close()

    app = FastAPI(
        title="Crypto Signal Dashboard API",
        version="1.0.0",
        description="Market data, technical indicators and Buy/Sell predictions",
        lifespan=lifespan,
        # Interactive docs stay off in production
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.state.gateway = gateway
    app.state.analyzer = CoinAnalyzer(gateway, default_window=settings.DEFAULT_TIMEFRAME)
    app.state.paper_trading = paper_trading or PaperTradingService()
    app.state.simulator = simulator or RandomWalkSimulator()

    app.include_router(health_routes.router, tags=["health"])
    app.include_router(market_routes.router, prefix="/api", tags=["market"])
    app.include_router(trading_routes.router, prefix="/api", tags=["trading"])

    return app
