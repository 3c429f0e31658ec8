"""
Prediction scoring

Turns an IndicatorSnapshot plus the current price into a Buy/Sell label.

Score = MACD component + trend component + RSI component

    MACD   +2  histogram > 0 and histogram > signal
           +1  histogram > 0
           -2  histogram < 0 and histogram < signal
           -1  histogram < 0
    Trend  +2  price > SMA20 > SMA50
           -2  price < SMA20 < SMA50
    RSI    +2  RSI < 30      -2  RSI > 70
           +1  RSI < 45      -1  RSI > 55

    score >= 4  Strong Buy       score <= -4  Strong Sell
    score >= 2  Buy              score <= -2  Sell
    otherwise   Hold
"""

from core.models.market_data import IndicatorSnapshot, Prediction

STRONG_THRESHOLD = 4
THRESHOLD = 2


def _macd_score(snapshot: IndicatorSnapshot) -> int:
    histogram, signal = snapshot.histogram, snapshot.signal
    if histogram > 0:
        return 2 if histogram > signal else 1
    if histogram < 0:
        return -2 if histogram < signal else -1
    return 0


def _trend_score(snapshot: IndicatorSnapshot, current_price: float) -> int:
    sma20, sma50 = snapshot.sma20, snapshot.sma50
    if sma20 is None or sma50 is None:
        return 0
    if current_price > sma20 > sma50:
        return 2
    if current_price < sma20 < sma50:
        return -2
    return 0


def _rsi_score(snapshot: IndicatorSnapshot) -> int:
    rsi = snapshot.rsi
    if rsi is None:
        return 0
    if rsi < 30:
        return 2
    if rsi < 45:
        return 1
    if rsi > 70:
        return -2
    if rsi > 55:
        return -1
    return 0


def score_prediction(snapshot: IndicatorSnapshot, current_price: float) -> int | None:
    """
    Raw score behind the prediction

    Returns:
        Integer score, or None when MACD is unavailable
    """
    if not snapshot.has_macd:
        return None
    return _macd_score(snapshot) + _trend_score(snapshot, current_price) + _rsi_score(snapshot)


def label_for_score(score: int | None) -> Prediction:
    if score is None:
        return Prediction.HOLD
    if score >= STRONG_THRESHOLD:
        return Prediction.STRONG_BUY
    if score >= THRESHOLD:
        return Prediction.BUY
    if score <= -STRONG_THRESHOLD:
        return Prediction.STRONG_SELL
    if score <= -THRESHOLD:
        return Prediction.SELL
    return Prediction.HOLD


def get_prediction(snapshot: IndicatorSnapshot, current_price: float) -> Prediction:
    """
    Prediction for one coin

    Hold when MACD is unavailable (series shorter than 26 prices).

    Example:
        >>> snapshot = compute_snapshot(prices)
        >>> get_prediction(snapshot, prices[-1])
        <Prediction.BUY: 'Buy'>
    """
    return label_for_score(score_prediction(snapshot, current_price))
