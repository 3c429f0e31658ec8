"""
ETH Price Service - live ETH/USDT price, daily history and threshold simulation
"""

from services.eth_price_service.service import EthPriceService

__all__ = ["EthPriceService"]
