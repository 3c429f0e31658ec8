"""
Exception → HTTP response mapping

- MarketDataError (survived gateway recovery) → 500 {"error", "details"}
- PortfolioNotFoundError → 404
- InsufficientFundsError → 400
- ValueError (bad limit/timeframe) → 400
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.exceptions import InsufficientFundsError, MarketDataError, PortfolioNotFoundError

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, details: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "details": details})


async def market_data_error_handler(request: Request, exc: MarketDataError) -> JSONResponse:
    logger.error(f"✗ {request.method} {request.url.path} failed: {exc}")
    return error_response(500, "Failed to fetch market data", str(exc))


async def portfolio_not_found_handler(
    request: Request, exc: PortfolioNotFoundError
) -> JSONResponse:
    return error_response(404, "Portfolio not found", str(exc))


async def insufficient_funds_handler(
    request: Request, exc: InsufficientFundsError
) -> JSONResponse:
    return error_response(400, "Trade rejected", str(exc))


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return error_response(400, "Invalid request", str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MarketDataError, market_data_error_handler)
    app.add_exception_handler(PortfolioNotFoundError, portfolio_not_found_handler)
    app.add_exception_handler(InsufficientFundsError, insufficient_funds_handler)
    app.add_exception_handler(ValueError, value_error_handler)
