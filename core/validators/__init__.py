"""
Validators module

Data quality validators for provider market data
"""

from core.validators.market_data import DataValidator

__all__ = ["DataValidator"]
