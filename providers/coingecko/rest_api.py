"""
CoinGecko REST API client (primary market data provider)

Endpoints:
- /coins/markets              top coins by market cap (+ 7d sparkline)
- /coins/{id}/market_chart    price history
- /coins/{id}                 status updates (news feed)
- /simple/price               spot price
"""

import logging
from datetime import UTC, datetime

import aiohttp
from pydantic import ValidationError

from config.settings import get_settings
from core.exceptions import MalformedPayloadError
from core.models.market_data import CoinSummary, NewsItem, PricePoint, PriceSeries
from core.validators.market_data import DataValidator
from providers.base_http import AiohttpMarketDataProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"


class CoinGeckoRestAPI(AiohttpMarketDataProvider):
    """
    CoinGecko client

    Supports history and news. An optional demo API key is sent as the
    x-cg-demo-api-key header.

    Example:
        >>> api = CoinGeckoRestAPI()
        >>> coins = await api.fetch_top_coins(limit=10)
        >>> series = await api.fetch_price_history("bitcoin", days=30)
    """

    max_page_size = 250

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        vs_currency: str = "usd",
        api_key: str | None = None,
        session: aiohttp.ClientSession | None = None,
        timeout_ms: int | None = None,
    ):
        super().__init__("coingecko", base_url, session=session, timeout_ms=timeout_ms)
        self.vs_currency = vs_currency
        self.api_key = api_key if api_key is not None else get_settings().COINGECKO_API_KEY
        self.validator = DataValidator()

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key
        return headers

    async def fetch_top_coins(self, limit: int) -> list[CoinSummary]:
        payload = await self._get_json(
            "/coins/markets",
            params={
                "vs_currency": self.vs_currency,
                "order": "market_cap_desc",
                "per_page": limit,
                "page": 1,
                "sparkline": "true",
                "price_change_percentage": "24h",
            },
        )
        if not isinstance(payload, list):
            raise MalformedPayloadError(
                self.name, f"expected list from /coins/markets, got {type(payload).__name__}"
            )

        coins = []
        for row in payload:
            try:
                coin = CoinSummary.model_validate(row)
            except ValidationError as e:
                # Unpriced/delisted rows come back with null current_price
                logger.warning(f"⚠️ Skipping malformed coin row: {e.error_count()} errors")
                continue
            is_valid, error = self.validator.validate_coin(coin)
            if is_valid:
                coins.append(coin)
            else:
                logger.warning(f"⚠️ Skipping coin row: {error}")

        logger.debug(f"Fetched {len(coins)} top coins from CoinGecko")
        return coins

    async def fetch_price_history(
        self, coin_id: str, days: int, resolution: str = "auto"
    ) -> PriceSeries:
        params = {"vs_currency": self.vs_currency, "days": days}
        if resolution == "daily":
            params["interval"] = "daily"

        payload = await self._get_json(f"/coins/{coin_id}/market_chart", params=params)
        try:
            rows = payload["prices"]
            points = [
                PricePoint(timestamp=datetime.fromtimestamp(ts / 1000, tz=UTC), price=price)
                for ts, price in rows
                if price is not None
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedPayloadError(
                self.name, f"bad market_chart payload for {coin_id}: {e}"
            ) from e

        series = PriceSeries(coin_id=coin_id, source=self.name, points=points)
        series = self.validator.validate_series(series)
        logger.debug(f"Fetched {len(series)} points for {coin_id} ({days}d, {resolution})")
        return series

    async def fetch_status_updates(self, coin_id: str) -> list[NewsItem]:
        payload = await self._get_json(
            f"/coins/{coin_id}",
            params={
                "localization": "false",
                "tickers": "false",
                "market_data": "false",
                "community_data": "false",
                "developer_data": "false",
            },
        )
        if not isinstance(payload, dict):
            raise MalformedPayloadError(self.name, f"expected object from /coins/{coin_id}")

        try:
            homepage = (payload.get("links") or {}).get("homepage") or [None]
            news = []
            for update in payload.get("status_updates") or []:
                description = (update.get("description") or "").strip()
                if not description:
                    continue
                created_at = update.get("created_at")
                source = (update.get("project") or {}).get("name") or update.get("user")
                news.append(
                    NewsItem(
                        title=description.splitlines()[0][:200],
                        url=homepage[0] or None,
                        source=source or self.name,
                        published_at=datetime.fromisoformat(created_at) if created_at else None,
                    )
                )
        except (AttributeError, IndexError, TypeError, ValueError) as e:
            raise MalformedPayloadError(
                self.name, f"bad status updates payload for {coin_id}: {e}"
            ) from e
        return news

    async def fetch_simple_price(self, coin_id: str) -> float:
        """
        Spot price in vs_currency

        Raises:
            MalformedPayloadError: Coin missing from the response
        """
        payload = await self._get_json(
            "/simple/price", params={"ids": coin_id, "vs_currencies": self.vs_currency}
        )
        try:
            return float(payload[coin_id][self.vs_currency])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedPayloadError(
                self.name, f"no {self.vs_currency} price for {coin_id}"
            ) from e
