"""
Health Check API Routes
"""

from fastapi import APIRouter, Depends

from services.api.dependencies import get_gateway
from services.market_data_gateway import MarketDataGateway

router = APIRouter()


@router.get("/health", summary="Health check")
async def health_check(gateway: MarketDataGateway = Depends(get_gateway)):
    """Liveness plus which market data provider is serving requests"""
    return {
        "status": "ok",
        "provider": gateway.active_provider.name,
        "mode": gateway.mode.value,
    }
