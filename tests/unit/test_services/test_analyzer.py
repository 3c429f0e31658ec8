"""
Unit tests for CoinAnalyzer

The gateway is mocked; indicator math runs for real.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest

from core.exceptions import UpstreamError
from core.models.market_data import Prediction, PricePoint, PriceSeries
from services.analysis_service import CoinAnalyzer, evaluate
from tests.conftest import make_coin


def series_of(prices, coin_id="bitcoin", source="coingecko"):
    start = datetime(2024, 1, 1, tzinfo=UTC)
    return PriceSeries(
        coin_id=coin_id,
        source=source,
        points=[
            PricePoint(timestamp=start + timedelta(days=i), price=float(p))
            for i, p in enumerate(prices)
        ],
    )


RISING = np.linspace(100, 200, 60).tolist()
# Flat, then five sharp daily moves
RALLY = [100.0] * 55 + [105.0, 110.0, 115.0, 120.0, 125.0]
CRASH = [100.0] * 55 + [95.0, 90.0, 85.0, 80.0, 75.0]


@pytest.fixture
def gateway():
    gateway = MagicMock()
    gateway.get_top_coins = AsyncMock()
    gateway.get_historical_series = AsyncMock()
    return gateway


@pytest.mark.unit
class TestEvaluate:
    def test_empty_prices_hold(self):
        snapshot, prediction, score = evaluate([])

        assert prediction == Prediction.HOLD
        assert score is None
        assert snapshot.macd is None

    def test_defaults_to_last_close(self):
        prices = np.linspace(100, 150, 30).tolist()

        _, prediction, score = evaluate(prices)

        assert score == -1
        assert prediction == Prediction.HOLD

    def test_explicit_current_price(self):
        _, _, with_last = evaluate(RISING)
        _, _, with_spot = evaluate(RISING, current_price=RISING[-1])

        assert with_last == with_spot


@pytest.mark.unit
class TestCoinAnalyzer:
    @pytest.mark.asyncio
    async def test_get_indicators_uses_default_window(self, gateway):
        gateway.get_historical_series.return_value = series_of(RISING)
        analyzer = CoinAnalyzer(gateway, default_window="3M")

        snapshot = await analyzer.get_indicators("bitcoin")

        gateway.get_historical_series.assert_awaited_once_with("bitcoin", "3M")
        assert snapshot.sma50 is not None

    @pytest.mark.asyncio
    async def test_analyze_coin_id(self, gateway):
        gateway.get_historical_series.return_value = series_of(RISING)

        result = await CoinAnalyzer(gateway).analyze_coin_id("bitcoin", "1M")

        assert result["id"] == "bitcoin"
        assert result["current_price"] == pytest.approx(200.0)
        assert result["prediction"] in {p.value for p in Prediction}
        assert {"macd", "signal", "histogram", "rsi", "sma20", "sma50"} <= set(result)

    @pytest.mark.asyncio
    async def test_empty_history_is_hold(self, gateway):
        gateway.get_historical_series.return_value = series_of([], source="coincap")

        analysis = await CoinAnalyzer(gateway).analyze_coin(make_coin("bitcoin"))

        assert analysis.prediction == Prediction.HOLD
        assert analysis.score is None
        assert analysis.error is None
        assert analysis.indicators.macd is None

    @pytest.mark.asyncio
    async def test_analyze_top_coins_preserves_order(self, gateway):
        gateway.get_top_coins.return_value = [make_coin("bitcoin"), make_coin("ethereum")]
        gateway.get_historical_series.return_value = series_of(RISING)

        analyses = await CoinAnalyzer(gateway).analyze_top_coins(limit=2, window="1M")

        assert [a.coin.id for a in analyses] == ["bitcoin", "ethereum"]
        gateway.get_top_coins.assert_awaited_once_with(2)

    @pytest.mark.asyncio
    async def test_per_coin_failure_is_annotated(self, gateway):
        gateway.get_top_coins.return_value = [make_coin("bitcoin"), make_coin("ethereum")]

        async def history(coin_id, window):
            if coin_id == "ethereum":
                raise UpstreamError("coincap", "HTTP 502", status=502)
            return series_of(RISING, coin_id=coin_id)

        gateway.get_historical_series.side_effect = history

        analyses = await CoinAnalyzer(gateway).analyze_top_coins(limit=2)

        by_id = {a.coin.id: a for a in analyses}
        assert by_id["bitcoin"].error is None
        assert by_id["ethereum"].error == "coincap: HTTP 502"
        assert by_id["ethereum"].prediction == Prediction.HOLD
        assert by_id["ethereum"].to_dict()["error"] == "coincap: HTTP 502"

    @pytest.mark.asyncio
    async def test_top_coins_failure_propagates(self, gateway):
        gateway.get_top_coins.side_effect = UpstreamError("coingecko", "down")

        with pytest.raises(UpstreamError):
            await CoinAnalyzer(gateway).analyze_top_coins(limit=5)

    @pytest.mark.asyncio
    async def test_recommendations_sorted_by_score(self, gateway):
        coins = [
            make_coin("up", price=125),
            make_coin("down", price=75),
            make_coin("steady", price=200),
        ]
        gateway.get_top_coins.return_value = coins
        histories = {"up": RALLY, "down": CRASH, "steady": RISING}

        async def history(coin_id, window):
            return series_of(histories[coin_id], coin_id=coin_id)

        gateway.get_historical_series.side_effect = history

        recommendations = await CoinAnalyzer(gateway).get_recommendations(limit=3)

        assert all(a.prediction.is_buy for a in recommendations["buy"])
        assert all(a.prediction.is_sell for a in recommendations["sell"])
        buy_scores = [a.score for a in recommendations["buy"]]
        sell_scores = [a.score for a in recommendations["sell"]]
        assert buy_scores == sorted(buy_scores, reverse=True)
        assert sell_scores == sorted(sell_scores)
        assert [a.coin.id for a in recommendations["buy"]] == ["up"]
        assert [a.coin.id for a in recommendations["sell"]] == ["down"]

    @pytest.mark.asyncio
    async def test_recommendations_top_n(self, gateway):
        gateway.get_top_coins.return_value = [make_coin(f"coin{i}", price=75) for i in range(8)]
        gateway.get_historical_series.return_value = series_of(CRASH)

        recommendations = await CoinAnalyzer(gateway).get_recommendations(limit=8, top_n=3)

        assert len(recommendations["sell"]) == 3
        assert recommendations["buy"] == []
