"""
ETH Price Service API

Endpoints:
- GET  /api/current-price
- GET  /api/historical-data
- POST /api/simulate-trading   (±5% threshold strategy)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from services.api.errors import register_exception_handlers
from services.api.schemas import SimulationRequest
from services.eth_price_service.service import EthPriceService

logger = logging.getLogger(__name__)
router = APIRouter()


def get_service(request: Request) -> EthPriceService:
    return request.app.state.eth_service


@router.get("/current-price", summary="Live ETH price")
async def current_price(service: EthPriceService = Depends(get_service)):
    return {"price": await service.get_current_price()}


@router.get("/historical-data", summary="Daily ETH closes")
async def historical_data(service: EthPriceService = Depends(get_service)):
    series = await service.get_historical_data()
    return [point.to_dict() for point in series.points]


@router.post("/simulate-trading", summary="Threshold strategy simulation")
async def simulate_trading(
    body: SimulationRequest, service: EthPriceService = Depends(get_service)
):
    result = await service.simulate_trading(body.initial_investment)
    return result.to_dict()


def create_app(service: EthPriceService | None = None, start_feed: bool = True) -> FastAPI:
    """
    Create the ETH price API

    Args:
        service: ETH price service (built from config when omitted)
        start_feed: Start the stream/poll feed on startup
    """
    settings = get_settings()

    if service is None:
        from factory.client_factory import create_exchange_rest_api, create_price_stream
        from providers.coingecko.rest_api import CoinGeckoRestAPI

        service = EthPriceService(
            exchange=create_exchange_rest_api("binance"),
            coingecko=CoinGeckoRestAPI(),
            stream=create_price_stream("binance", settings.ETH_STREAM_SYMBOL),
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if start_feed:
            await app.state.eth_service.start()
        yield
        await app.state.eth_service.stop()

    app = FastAPI(title="ETH Price Service", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.state.eth_service = service
    app.include_router(router, prefix="/api", tags=["eth"])
    return app
