"""
Pytest configuration for test suite

Markers:
- unit: Fast unit tests (no network, no infrastructure)
- integration: Integration tests (real upstream APIs / Redis), deselected by default
- external: Needs internet access
- slow: Slow-running tests (>10 seconds)
"""

from unittest.mock import AsyncMock

import pytest

from core.interfaces.market_data import BaseMarketDataProvider
from core.models.market_data import CoinSummary, PriceSeries


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Fast unit tests (no dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (requires internet or Redis)"
    )
    config.addinivalue_line("markers", "external: Requires internet connection")
    config.addinivalue_line("markers", "slow: Slow tests (>10 seconds)")


def make_coin(coin_id: str, price: float = 100.0, market_cap: float | None = None) -> CoinSummary:
    return CoinSummary(
        id=coin_id,
        name=coin_id.title(),
        symbol=coin_id[:3],
        current_price=price,
        price_change_percentage_24h=1.5,
        market_cap=market_cap,
    )


class FakeProvider(BaseMarketDataProvider):
    """Provider whose fetch methods are AsyncMocks (empty results by default)"""

    def __init__(self, name: str):
        super().__init__(name)
        self.fetch_top_coins = AsyncMock(return_value=[])
        self.fetch_price_history = AsyncMock(
            side_effect=lambda coin_id, days, resolution="auto": PriceSeries(
                coin_id=coin_id, source=name
            )
        )
        self.fetch_status_updates = AsyncMock(return_value=[])
        self.close = AsyncMock()

    # Replaced per instance in __init__
    async def fetch_top_coins(self, limit):
        raise NotImplementedError

    async def fetch_price_history(self, coin_id, days, resolution="auto"):
        raise NotImplementedError

    async def close(self):
        raise NotImplementedError


@pytest.fixture
def coin_factory():
    """Build CoinSummary rows: coin_factory("bitcoin", price=50_000)"""
    return make_coin
