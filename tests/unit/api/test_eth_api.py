"""
Unit tests for the ETH price service HTTP API
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from core.exceptions import UpstreamError
from core.models.market_data import PricePoint, PriceSeries
from core.models.trading import SimulationResult
from services.eth_price_service.app import create_app


@pytest.fixture
def service():
    service = MagicMock()
    service.get_current_price = AsyncMock(return_value=3012.5)
    service.get_historical_data = AsyncMock(
        return_value=PriceSeries(
            coin_id="ETH/USDT",
            source="binance",
            points=[PricePoint(timestamp=datetime(2024, 1, 1, tzinfo=UTC), price=2300.0)],
        )
    )
    service.simulate_trading = AsyncMock(
        return_value=SimulationResult(final_portfolio_value=1100.0, profit=100.0)
    )
    service.start = AsyncMock()
    service.stop = AsyncMock()
    return service


@pytest.fixture
def client(service):
    with TestClient(create_app(service=service, start_feed=False)) as client:
        yield client


@pytest.mark.unit
class TestEthApi:
    def test_current_price(self, client):
        response = client.get("/api/current-price")

        assert response.status_code == 200
        assert response.json() == {"price": 3012.5}

    def test_historical_data(self, client):
        response = client.get("/api/historical-data")

        assert response.json() == [{"timestamp": 1704067200000, "price": 2300.0}]

    def test_simulate_trading(self, client, service):
        response = client.post("/api/simulate-trading", json={"initialInvestment": 1000})

        assert response.json() == {"finalPortfolioValue": 1100.0, "profit": 100.0}
        service.simulate_trading.assert_awaited_once_with(1000.0)

    def test_all_sources_down_is_500(self, client, service):
        service.get_current_price.side_effect = UpstreamError(
            "eth", "Failed to fetch price from all sources"
        )

        response = client.get("/api/current-price")

        assert response.status_code == 500
        assert response.json()["details"] == "eth: Failed to fetch price from all sources"

    def test_feed_not_started(self, client, service):
        service.start.assert_not_awaited()

    def test_lifespan_starts_and_stops_feed(self, service):
        with TestClient(create_app(service=service)):
            service.start.assert_awaited_once()

        service.stop.assert_awaited_once()
