"""
ETH Price Service - entrypoint

Run:
    python -m services.eth_price_service.main
"""

import logging

import uvicorn

from config.settings import get_settings
from core.utils.logging import configure_logging
from services.eth_price_service.app import create_app

logger = logging.getLogger(__name__)


def main():
    """Main entry point"""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    logger.info(f"🚀 Starting ETH Price Service on {settings.API_HOST}:{settings.ETH_API_PORT}")
    uvicorn.run(
        create_app(),
        host=settings.API_HOST,
        port=settings.ETH_API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
