"""Logging setup: one stdout handler, JSON by default."""

import logging
import sys

from pythonjsonlogger import jsonlogger

from estatemls.core.settings import settings

NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "urllib3", "uvicorn.access")


def setup_logging() -> None:
    """Configure the root logger from ``LOG_LEVEL`` / ``LOG_FORMAT``."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if settings.LOG_FORMAT.lower() == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
