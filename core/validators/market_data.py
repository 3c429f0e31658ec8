"""
Data quality validator for provider market data

Validates:
- Price sanity checks (finite, > 0)
- Timestamp validation (not in future, chronological, no duplicates)
- Coin rows from top-coin lists
"""

import logging
import math
from datetime import UTC, datetime, timedelta

from core.models.market_data import CoinSummary, PricePoint, PriceSeries

logger = logging.getLogger(__name__)


class DataValidator:
    """
    Market data quality validation

    Invalid samples are dropped (and counted), never raised: a provider
    occasionally returns null prices and the series is still usable.
    """

    def __init__(self, max_clock_skew: timedelta = timedelta(minutes=5)):
        self.max_clock_skew = max_clock_skew
        self.invalid_count = 0
        self.duplicate_count = 0

    def validate_point(self, point: PricePoint) -> tuple[bool, str | None]:
        """
        Validate a single price sample

        Returns:
            (is_valid, error_message)
        """
        if not math.isfinite(point.price) or point.price <= 0:
            return False, f"Invalid price: {point.price} (must be finite and > 0)"

        now = datetime.now(UTC)
        timestamp = point.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        if timestamp > now + self.max_clock_skew:
            return False, f"Future timestamp: {point.timestamp} (now: {now})"

        return True, None

    def validate_series(self, series: PriceSeries) -> PriceSeries:
        """
        Return a cleaned copy of the series

        - Drops invalid samples
        - Sorts oldest first
        - Keeps the last sample for duplicate timestamps

        Example:
            >>> clean = DataValidator().validate_series(raw_series)
            >>> compute_snapshot(clean.closes())
        """
        by_timestamp: dict[datetime, PricePoint] = {}
        for point in series.points:
            is_valid, error = self.validate_point(point)
            if not is_valid:
                self.invalid_count += 1
                logger.debug(f"Dropping sample for {series.coin_id}: {error}")
                continue
            if point.timestamp in by_timestamp:
                self.duplicate_count += 1
            by_timestamp[point.timestamp] = point

        dropped = len(series.points) - len(by_timestamp)
        if dropped:
            logger.warning(
                f"⚠️ {series.source}/{series.coin_id}: dropped {dropped} of "
                f"{len(series.points)} samples"
            )

        points = [by_timestamp[ts] for ts in sorted(by_timestamp)]
        return series.model_copy(update={"points": points})

    def validate_coin(self, coin: CoinSummary) -> tuple[bool, str | None]:
        """
        Validate a top-coins row

        Returns:
            (is_valid, error_message)
        """
        if not coin.id:
            self.invalid_count += 1
            return False, "Missing coin id"
        if not math.isfinite(coin.current_price) or coin.current_price < 0:
            self.invalid_count += 1
            return False, f"Invalid price for {coin.id}: {coin.current_price}"
        return True, None

    def get_stats(self) -> dict[str, int]:
        """
        Get validation statistics

        Returns:
            Dictionary with invalid_count and duplicate_count
        """
        return {
            "invalid_count": self.invalid_count,
            "duplicate_count": self.duplicate_count,
        }

    def reset_stats(self) -> None:
        """Reset statistics counters"""
        self.invalid_count = 0
        self.duplicate_count = 0
