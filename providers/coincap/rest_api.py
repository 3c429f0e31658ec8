"""
CoinCap REST API client (secondary market data provider)

Reduced capability: ranked assets only. No price history, no news.
"""

import logging

import aiohttp

from core.exceptions import MalformedPayloadError
from core.models.market_data import CoinSummary, PriceSeries
from core.validators.market_data import DataValidator
from providers.base_http import AiohttpMarketDataProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coincap.io/v2"


def _to_float(value) -> float | None:
    """CoinCap sends numbers as strings (or null)"""
    if value is None:
        return None
    return float(value)


class CoinCapRestAPI(AiohttpMarketDataProvider):
    """
    CoinCap client

    Example:
        >>> api = CoinCapRestAPI()
        >>> coins = await api.fetch_top_coins(limit=10)
        >>> (await api.fetch_price_history("bitcoin", days=30)).is_empty
        True
    """

    max_page_size = 2000

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: aiohttp.ClientSession | None = None,
        timeout_ms: int | None = None,
    ):
        super().__init__("coincap", base_url, session=session, timeout_ms=timeout_ms)
        self.validator = DataValidator()

    def _parse_asset(self, row: dict) -> CoinSummary:
        return CoinSummary(
            id=row["id"],
            name=row["name"],
            symbol=row["symbol"].lower(),
            current_price=float(row["priceUsd"]),
            price_change_percentage_24h=_to_float(row.get("changePercent24Hr")),
            market_cap=_to_float(row.get("marketCapUsd")),
            total_volume=_to_float(row.get("volumeUsd24Hr")),
        )

    async def fetch_top_coins(self, limit: int) -> list[CoinSummary]:
        payload = await self._get_json("/assets", params={"limit": limit})

        try:
            rows = payload["data"]
            coins = [self._parse_asset(row) for row in rows]
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedPayloadError(self.name, f"bad /assets payload: {e}") from e

        coins = [c for c in coins if self.validator.validate_coin(c)[0]]
        # Ranked by market cap, descending
        coins.sort(key=lambda c: c.market_cap or 0.0, reverse=True)
        logger.debug(f"Fetched {len(coins)} top coins from CoinCap")
        return coins[:limit]

    async def fetch_price_history(
        self, coin_id: str, days: int, resolution: str = "auto"
    ) -> PriceSeries:
        """History is not offered by this provider: always an empty series"""
        logger.info(f"CoinCap has no history for {coin_id}; returning empty series")
        return PriceSeries(coin_id=coin_id, source=self.name, points=[])
