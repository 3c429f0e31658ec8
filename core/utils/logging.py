"""
Logging setup shared by the service entrypoints

Console handler at the configured level, plus a rotating error log
when a log file is given.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """
    Configure root logging

    Args:
        level: Console log level name (DEBUG, INFO, ...)
        log_file: Optional path for an ERROR-level rotating log (5MB x 3)
    """
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(getattr(logging, level.upper(), logging.INFO))
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    handlers: list[logging.Handler] = [console]

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=console.level, handlers=handlers, force=True)

    # websockets is noisy at DEBUG
    logging.getLogger("websockets").setLevel(logging.WARNING)
