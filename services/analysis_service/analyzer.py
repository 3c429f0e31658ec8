"""
Coin analysis - gateway data → indicator snapshot → prediction

Flow per coin:
1. Fetch price history through the MarketDataGateway (cached, paced)
2. Compute the indicator snapshot on the closes
3. Score the prediction against the current price

Batch analysis never fails as a whole: a coin whose fetch or calculation
fails is returned with `error` set and a Hold prediction.
"""

import asyncio
import logging
from collections.abc import Sequence

from core.exceptions import MarketDataError
from core.models.market_data import CoinAnalysis, CoinSummary, IndicatorSnapshot, Prediction
from domain.indicators import compute_snapshot
from domain.signals import label_for_score, score_prediction
from services.market_data_gateway import MarketDataGateway

logger = logging.getLogger(__name__)


def evaluate(
    prices: Sequence[float], current_price: float | None = None
) -> tuple[IndicatorSnapshot, Prediction, int | None]:
    """
    Indicators + prediction for one price sequence

    Args:
        prices: Closes, oldest first (may be empty)
        current_price: Spot price; defaults to the last close

    Returns:
        (snapshot, prediction, score); score is None when MACD is unavailable
    """
    snapshot = compute_snapshot(prices)
    if current_price is None:
        current_price = prices[-1] if len(prices) else None
    if current_price is None:
        return snapshot, Prediction.HOLD, None

    score = score_prediction(snapshot, current_price)
    return snapshot, label_for_score(score), score


class CoinAnalyzer:
    """
    Analysis over the Market Data Gateway

    Example:
        >>> analyzer = CoinAnalyzer(gateway)
        >>> analyses = await analyzer.analyze_top_coins(limit=30, window="1M")
        >>> [a.to_dict() for a in analyses]
    """

    def __init__(self, gateway: MarketDataGateway, default_window: str | int = "1M"):
        self.gateway = gateway
        self.default_window = default_window

    async def get_indicators(
        self, coin_id: str, window: str | int | None = None
    ) -> IndicatorSnapshot:
        series = await self.gateway.get_historical_series(coin_id, window or self.default_window)
        return compute_snapshot(series.closes())

    async def analyze_coin_id(self, coin_id: str, window: str | int | None = None) -> dict:
        """
        Analysis for one coin id (no coin summary needed)

        Returns:
            {"id", "current_price", <indicator fields>, "prediction", "score"}
        """
        series = await self.gateway.get_historical_series(coin_id, window or self.default_window)
        snapshot, prediction, score = evaluate(series.closes())

        return {
            "id": coin_id,
            "current_price": series.latest_price,
            **snapshot.model_dump(),
            "prediction": prediction.value,
            "score": score,
        }

    async def analyze_coin(
        self, coin: CoinSummary, window: str | int | None = None
    ) -> CoinAnalysis:
        """
        Analysis for one ranked coin

        Raises:
            MarketDataError: If the history fetch fails after gateway recovery
        """
        series = await self.gateway.get_historical_series(coin.id, window or self.default_window)
        snapshot, prediction, score = evaluate(series.closes(), coin.current_price)

        if series.is_empty:
            logger.info(f"No history for {coin.id} from {series.source}; prediction is Hold")

        return CoinAnalysis(coin=coin, indicators=snapshot, prediction=prediction, score=score)

    async def _analyze_or_annotate(
        self, coin: CoinSummary, window: str | int | None
    ) -> CoinAnalysis:
        try:
            return await self.analyze_coin(coin, window)
        except (MarketDataError, ValueError) as e:
            logger.error(f"✗ Analysis failed for {coin.id}: {e}")
            return CoinAnalysis(coin=coin, error=str(e))

    async def analyze_top_coins(
        self, limit: int, window: str | int | None = None
    ) -> list[CoinAnalysis]:
        """
        Analysis for the top `limit` coins, in market cap order

        Raises:
            MarketDataError: Only if the top-coins list itself cannot be fetched
        """
        coins = await self.gateway.get_top_coins(limit)
        # Concurrent at this level; the gateway pacing serializes the outbound calls
        analyses = await asyncio.gather(
            *(self._analyze_or_annotate(coin, window) for coin in coins)
        )

        failed = sum(1 for a in analyses if a.error)
        logger.info(f"✅ Analyzed {len(analyses)} coins ({failed} failed)")
        return list(analyses)

    async def get_recommendations(
        self, limit: int, window: str | int | None = None, top_n: int = 5
    ) -> dict[str, list[CoinAnalysis]]:
        """
        Strongest buy and sell candidates among the top `limit` coins

        Returns:
            {"buy": highest scores first, "sell": lowest scores first}
        """
        analyses = await self.analyze_top_coins(limit, window)

        buys = sorted(
            (a for a in analyses if a.prediction.is_buy), key=lambda a: a.score, reverse=True
        )
        sells = sorted((a for a in analyses if a.prediction.is_sell), key=lambda a: a.score)

        return {"buy": buys[:top_n], "sell": sells[:top_n]}
