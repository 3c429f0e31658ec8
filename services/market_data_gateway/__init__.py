"""Market Data Gateway - cached, paced, fail-over access to market data providers"""

from services.market_data_gateway.gateway import MarketDataGateway
from services.market_data_gateway.state import GatewayState, ProviderMode
from services.market_data_gateway.timeframes import timeframe_to_days

__all__ = ["GatewayState", "MarketDataGateway", "ProviderMode", "timeframe_to_days"]
