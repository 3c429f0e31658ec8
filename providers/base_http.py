"""
Shared aiohttp plumbing for REST market data providers

Maps transport outcomes onto the market data exception hierarchy:
- HTTP 429 → RateLimitedError
- other HTTP errors, network errors, timeouts → UpstreamError
- unparseable JSON → MalformedPayloadError
"""

import asyncio
import logging
from typing import Any

import aiohttp

from config.settings import get_settings
from core.exceptions import MalformedPayloadError, RateLimitedError, UpstreamError
from core.interfaces.market_data import BaseMarketDataProvider

logger = logging.getLogger(__name__)


class AiohttpMarketDataProvider(BaseMarketDataProvider):
    """
    Base class for aiohttp-backed providers

    The session is created lazily on first request. An injected session
    is never closed by the provider.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        session: aiohttp.ClientSession | None = None,
        timeout_ms: int | None = None,
    ):
        super().__init__(name)
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None
        self.timeout_ms = timeout_ms or get_settings().REST_API_TIMEOUT_MS

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_ms / 1000)
            )
            self._owns_session = True
        return self._session

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET base_url + path and decode the JSON body

        Raises:
            RateLimitedError: HTTP 429
            UpstreamError: Other HTTP error, network error or timeout
            MalformedPayloadError: Body is not JSON
        """
        url = f"{self.base_url}{path}"
        session = await self._get_session()

        try:
            async with session.get(url, params=params, headers=self._headers()) as response:
                if response.status == 429:
                    logger.warning(f"⚠️ {self.name} rate limited on {path}")
                    raise RateLimitedError(self.name)

                if response.status >= 400:
                    body = await response.text()
                    raise UpstreamError(
                        self.name,
                        f"HTTP {response.status} on {path}: {body[:200]}",
                        status=response.status,
                    )

                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedPayloadError(self.name, f"invalid JSON on {path}: {e}") from e

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"✗ {self.name} request failed on {path}: {e}")
            raise UpstreamError(self.name, f"{path}: {str(e) or type(e).__name__}") from e

    async def close(self) -> None:
        """Close the HTTP session if this provider created it"""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            logger.info(f"✓ {self.name} session closed")
