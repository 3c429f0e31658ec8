"""
Unit tests for DataValidator

Tests sample cleaning (invalid prices, future timestamps, ordering, duplicates)
and top-coin row checks
"""

from datetime import UTC, datetime, timedelta

import pytest

from core.models.market_data import CoinSummary, PricePoint, PriceSeries
from core.validators.market_data import DataValidator


def point(day: int, price: float) -> PricePoint:
    return PricePoint(timestamp=datetime(2024, 1, day, tzinfo=UTC), price=price)


@pytest.mark.unit
class TestValidatePoint:
    @pytest.mark.parametrize("price", [0.0, -1.0, float("nan"), float("inf")])
    def test_rejects_bad_prices(self, price):
        is_valid, error = DataValidator().validate_point(point(1, price))

        assert not is_valid
        assert "Invalid price" in error

    def test_rejects_future_timestamp(self):
        future = PricePoint(timestamp=datetime.now(UTC) + timedelta(hours=1), price=10.0)

        is_valid, error = DataValidator().validate_point(future)

        assert not is_valid
        assert "Future timestamp" in error

    def test_naive_timestamp_treated_as_utc(self):
        naive = PricePoint(timestamp=datetime(2024, 1, 1), price=10.0)

        assert DataValidator().validate_point(naive) == (True, None)


@pytest.mark.unit
class TestValidateSeries:
    def test_cleans_sorts_and_dedupes(self):
        series = PriceSeries(
            coin_id="bitcoin",
            source="coingecko",
            points=[point(3, 30.0), point(1, 10.0), point(2, -5.0), point(3, 31.0)],
        )
        validator = DataValidator()

        clean = validator.validate_series(series)

        assert clean.closes() == [10.0, 31.0]
        assert clean.coin_id == "bitcoin"
        assert clean.source == "coingecko"
        assert validator.get_stats() == {"invalid_count": 1, "duplicate_count": 1}

    def test_input_series_untouched(self):
        series = PriceSeries(
            coin_id="bitcoin", source="coingecko", points=[point(2, 2.0), point(1, 1.0)]
        )

        DataValidator().validate_series(series)

        assert series.closes() == [2.0, 1.0]

    def test_empty_series(self):
        series = PriceSeries(coin_id="bitcoin", source="coincap")

        assert DataValidator().validate_series(series).is_empty

    def test_reset_stats(self):
        validator = DataValidator()
        validator.validate_series(
            PriceSeries(coin_id="x", source="coingecko", points=[point(1, 0.0)])
        )

        validator.reset_stats()

        assert validator.get_stats() == {"invalid_count": 0, "duplicate_count": 0}


@pytest.mark.unit
class TestValidateCoin:
    def test_valid_row(self, coin_factory):
        assert DataValidator().validate_coin(coin_factory("bitcoin")) == (True, None)

    def test_missing_id(self):
        coin = CoinSummary(id="", name="Nameless", symbol="n", current_price=1.0)

        is_valid, error = DataValidator().validate_coin(coin)

        assert not is_valid
        assert error == "Missing coin id"

    def test_negative_price(self):
        coin = CoinSummary(id="bad", name="Bad", symbol="b", current_price=-1.0)
        validator = DataValidator()

        is_valid, _ = validator.validate_coin(coin)

        assert not is_valid
        assert validator.invalid_count == 1
