"""
Unit tests for BinancePriceStream

Connection attempts are mocked; asyncio.sleep is patched so reconnects are instant.
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from providers.binance.websocket import BinancePriceStream


class FakeWebSocket:
    """Async-iterable stand-in for a websockets connection"""

    def __init__(self, messages):
        self.messages = list(messages)
        self.close = AsyncMock()

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self.messages:
            raise StopAsyncIteration
        return self.messages.pop(0)


def connection(websocket):
    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=websocket)
    cm.__aexit__ = AsyncMock(return_value=False)
    return cm


def trade(price: str) -> str:
    return json.dumps({"e": "trade", "s": "ETHUSDT", "p": price, "q": "0.1", "T": 1})


@pytest.mark.unit
class TestBinancePriceStream:
    """Test trade stream parsing and retry policy"""

    def test_url(self):
        stream = BinancePriceStream("ETHUSDT")

        assert stream.url == "wss://stream.binance.com:9443/ws/ethusdt@trade"

    def test_parse_trade(self):
        stream = BinancePriceStream("ethusdt")

        assert stream._parse_price({"e": "trade", "p": "3000.50"}) == 3000.50
        assert stream._parse_price({"e": "aggTrade", "p": "3000.50"}) is None

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        stream = BinancePriceStream("ethusdt", max_retries=3, reconnect_delay=5)

        with patch(
            "providers.binance.websocket.connect", side_effect=OSError("refused")
        ) as mock_connect, patch(
            "providers.binance.websocket.asyncio.sleep", new_callable=AsyncMock
        ) as mock_sleep:
            await stream.start()

        assert mock_connect.call_count == 3
        assert stream.failures == 3
        assert stream.exhausted is True
        assert stream.running is False
        mock_sleep.assert_awaited_with(5)

    @pytest.mark.asyncio
    async def test_delivers_prices_and_skips_bad_messages(self):
        stream = BinancePriceStream("ethusdt", max_retries=1)
        received = []

        async def on_price(price):
            received.append(price)

        stream.on_price(on_price)
        websocket = FakeWebSocket(
            [trade("3000.10"), "not json", json.dumps({"e": "trade"}), trade("3001.00")]
        )

        with patch(
            "providers.binance.websocket.connect",
            side_effect=[connection(websocket), OSError("closed")],
        ), patch("providers.binance.websocket.asyncio.sleep", new_callable=AsyncMock):
            await stream.start()

        assert received == [3000.10, 3001.00]
        assert stream.exhausted is True

    @pytest.mark.asyncio
    async def test_callback_error_does_not_stop_stream(self):
        stream = BinancePriceStream("ethusdt", max_retries=1)
        good = AsyncMock()
        stream.on_price(AsyncMock(side_effect=RuntimeError("boom")))
        stream.on_price(good)

        with patch(
            "providers.binance.websocket.connect",
            side_effect=[connection(FakeWebSocket([trade("2999")])), OSError("closed")],
        ), patch("providers.binance.websocket.asyncio.sleep", new_callable=AsyncMock):
            await stream.start()

        good.assert_awaited_once_with(2999.0)

    @pytest.mark.asyncio
    async def test_stop_closes_connection(self):
        stream = BinancePriceStream("ethusdt")
        stream.running = True
        stream.websocket = FakeWebSocket([])

        await stream.stop()

        assert stream.running is False
        stream.websocket.close.assert_awaited_once()
