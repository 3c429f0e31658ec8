"""
Market data models

Pydantic models for market data structures:
- PricePoint / PriceSeries: Chronological price history for one coin
- CoinSummary: Ranked coin row from a top-coins endpoint
- IndicatorSnapshot: Latest value of every technical indicator
- Prediction: Discrete Buy/Sell recommendation
- CoinAnalysis: Coin summary + indicators + prediction (unit returned to callers)
- NewsItem: Status update / news entry for a coin
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PricePoint(BaseModel):
    """Single (timestamp, price) sample"""

    timestamp: datetime = Field(description="Sample timestamp (UTC)")
    price: float = Field(description="Price in quote currency (USD)")

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses (timestamp in epoch ms)"""
        return {
            "timestamp": int(self.timestamp.timestamp() * 1000),
            "price": self.price,
        }


class PriceSeries(BaseModel):
    """
    Chronological price history for one coin

    An empty series is a valid result: providers without history support
    return one instead of failing.
    """

    coin_id: str = Field(description="Provider coin id (bitcoin, ethereum)")
    source: str = Field(description="Provider that produced the series")
    points: list[PricePoint] = Field(default_factory=list, description="Oldest first")

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def latest_price(self) -> float | None:
        return self.points[-1].price if self.points else None

    def closes(self) -> list[float]:
        """Prices only, oldest first"""
        return [p.price for p in self.points]

    def __len__(self) -> int:
        return len(self.points)


class Sparkline(BaseModel):
    """Short embedded price history (7 days)"""

    price: list[float] = Field(default_factory=list)


class CoinSummary(BaseModel):
    """
    Ranked coin row

    Field names follow the markets endpoint shape consumed by the dashboard.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Provider coin id")
    name: str = Field(description="Display name")
    symbol: str = Field(description="Ticker symbol (btc, eth)")
    current_price: float = Field(description="Current price (USD)")
    price_change_percentage_24h: float | None = Field(
        default=None, description="24h price change in percent"
    )
    market_cap: float | None = None
    total_volume: float | None = None
    image: str | None = None
    sparkline_in_7d: Sparkline | None = None


class IndicatorSnapshot(BaseModel):
    """
    Latest value of every indicator for one price series

    A field is None when the series is shorter than the indicator's window.
    """

    model_config = ConfigDict(frozen=True)

    macd: float | None = None
    signal: float | None = None
    histogram: float | None = None
    rsi: float | None = None
    sma20: float | None = None
    sma50: float | None = None
    bollinger_upper: float | None = None
    bollinger_middle: float | None = None
    bollinger_lower: float | None = None

    @property
    def has_macd(self) -> bool:
        return self.histogram is not None and self.signal is not None


class Prediction(str, Enum):
    """Discrete recommendation, values are the dashboard labels"""

    STRONG_BUY = "Strong Buy"
    BUY = "Buy"
    HOLD = "Hold"
    SELL = "Sell"
    STRONG_SELL = "Strong Sell"

    @property
    def is_buy(self) -> bool:
        return self in (Prediction.STRONG_BUY, Prediction.BUY)

    @property
    def is_sell(self) -> bool:
        return self in (Prediction.STRONG_SELL, Prediction.SELL)


class CoinAnalysis(BaseModel):
    """
    Coin summary combined with its indicators and prediction

    When the per-coin fetch or calculation failed, `error` carries the reason,
    `indicators` is None and the prediction degrades to Hold.
    """

    coin: CoinSummary
    indicators: IndicatorSnapshot | None = None
    prediction: Prediction = Prediction.HOLD
    score: int | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        """Flatten coin + indicator fields into one record for JSON responses"""
        data = self.coin.model_dump(mode="json")
        data.update((self.indicators or IndicatorSnapshot()).model_dump(mode="json"))
        data["prediction"] = self.prediction.value
        data["score"] = self.score
        if self.error is not None:
            data["error"] = self.error
        return data


class NewsItem(BaseModel):
    """Status update / news entry"""

    title: str
    url: str | None = None
    source: str
    published_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "source": self.source,
            "publishedAt": self.published_at.isoformat() if self.published_at else None,
        }
