"""
Binance WebSocket client for the live trade price of one symbol

Handles:
- Trade stream ({symbol}@trade)
- Reconnect on disconnect
- Giving up after a number of failed connections, so callers can poll instead
"""

import asyncio
import json
import logging

from websockets import connect

from core.interfaces.market_data import BasePriceStream

logger = logging.getLogger(__name__)


class BinancePriceStream(BasePriceStream):
    """
    Binance trade-price stream

    Clean disconnects reconnect after `reconnect_delay` seconds. Failed
    connections (errors) are counted; once `max_retries` is reached, start()
    returns with `exhausted` set.

    WebSocket Documentation:
    https://binance-docs.github.io/apidocs/spot/en/#trade-streams
    """

    BASE_URL = "wss://stream.binance.com:9443/ws"

    def __init__(self, symbol: str, max_retries: int = 3, reconnect_delay: float = 5.0):
        """
        Args:
            symbol: Binance stream symbol (e.g., "ethusdt")
            max_retries: Failed connections tolerated before giving up
            reconnect_delay: Seconds between connection attempts
        """
        super().__init__(symbol.lower())
        self.max_retries = max_retries
        self.reconnect_delay = reconnect_delay
        self.url = f"{self.BASE_URL}/{self.symbol}@trade"
        self.websocket = None
        self.failures = 0
        self.exhausted = False

    async def start(self) -> None:
        """
        Stream trades until stop() is called or retries are exhausted
        """
        self.running = True

        while self.running:
            if self.failures >= self.max_retries:
                logger.warning(
                    f"Max WebSocket retry attempts reached ({self.max_retries}) "
                    f"for {self.symbol}. Giving up."
                )
                self.exhausted = True
                self.running = False
                return

            try:
                async with connect(self.url) as websocket:
                    self.websocket = websocket
                    logger.info(f"✓ Connected to Binance trade stream: {self.symbol}")

                    async for message in websocket:
                        if not self.running:
                            break

                        try:
                            price = self._parse_price(json.loads(message))
                        except (KeyError, ValueError, TypeError) as e:
                            logger.error(f"Error processing Binance message: {e}")
                            continue

                        if price is not None:
                            await self._notify_price(price)

                logger.info("WebSocket disconnected")

            except Exception as e:
                self.failures += 1
                logger.error(
                    f"✗ Binance WebSocket error ({self.failures}/{self.max_retries}): {e}"
                )

            finally:
                self.websocket = None

            if self.running:
                logger.info(f"Reconnecting in {self.reconnect_delay:g} seconds...")
                await asyncio.sleep(self.reconnect_delay)

    def _parse_price(self, data: dict) -> float | None:
        """
        Extract the price from a Binance trade message

        Binance trade format:
        {
            "e": "trade",              // Event type
            "s": "ETHUSDT",            // Symbol
            "p": "3000.00",            // Price
            "q": "0.1",                // Quantity
            "T": 1234567890000,        // Trade time
        }
        """
        if data.get("e") != "trade":
            logger.debug(f"Ignoring Binance event type: {data.get('e')}")
            return None
        return float(data["p"])

    async def stop(self) -> None:
        """Stop WebSocket connection and cleanup"""
        self.running = False
        if self.websocket:
            await self.websocket.close()
        logger.info("✓ Binance price stream stopped")
