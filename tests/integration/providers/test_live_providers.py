"""
Integration tests for upstream market data APIs

Tests actual network calls. These tests require internet connection and may
be flaky (public rate limits).

Use @pytest.mark.external to skip in CI:
pytest -m "integration and not external"
"""

import pytest

from factory.client_factory import (
    create_exchange_rest_api,
    create_market_data_gateway,
    create_market_data_provider,
)
from providers.opensource.memory_cache import InMemoryCacheClient


@pytest.mark.integration
@pytest.mark.external
@pytest.mark.asyncio
async def test_coingecko_top_coins_and_history():
    """Verify CoinGecko returns ranked coins and a 30-day series"""
    api = create_market_data_provider("coingecko")

    try:
        coins = await api.fetch_top_coins(limit=5)
        assert len(coins) > 0
        assert coins[0].id == "bitcoin"

        series = await api.fetch_price_history("bitcoin", days=30)
        assert len(series) > 25
        timestamps = [p.timestamp for p in series.points]
        assert timestamps == sorted(timestamps)

        print(f"\n✓ CoinGecko returned {len(coins)} coins, {len(series)} points")
    finally:
        await api.close()


@pytest.mark.integration
@pytest.mark.external
@pytest.mark.asyncio
async def test_coincap_top_coins():
    """Verify CoinCap returns coins ranked by market cap"""
    api = create_market_data_provider("coincap")

    try:
        coins = await api.fetch_top_coins(limit=5)
        caps = [c.market_cap for c in coins]
        assert caps == sorted(caps, reverse=True)
    finally:
        await api.close()


@pytest.mark.integration
@pytest.mark.external
@pytest.mark.asyncio
async def test_binance_eth_ticker():
    """Verify Binance returns a positive ETH/USDT price"""
    api = create_exchange_rest_api("binance")

    try:
        assert await api.fetch_ticker_price("ETH/USDT") > 0
    finally:
        await api.close()


@pytest.mark.integration
@pytest.mark.external
@pytest.mark.slow
@pytest.mark.asyncio
async def test_gateway_filters_stablecoins_and_caches():
    """Verify the configured gateway end to end"""
    cache = InMemoryCacheClient()
    gateway = create_market_data_gateway(cache=cache)

    try:
        coins = await gateway.get_top_coins(10)
        assert len(coins) == 10
        assert not {c.id for c in coins} & gateway.stablecoins

        last_request_at = gateway.state.last_request_at
        assert await gateway.get_top_coins(10) == coins
        assert gateway.state.last_request_at == last_request_at
    finally:
        await gateway.close()
