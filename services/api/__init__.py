"""
Dashboard API - HTTP layer over the gateway, analysis service and paper trading
"""

from services.api.app import create_app

__all__ = ["create_app"]
