"""Log setup shared by the API, the engine and the record loader."""

import logging
import os
import sys

from pydantic import BaseModel


class LogConfig(BaseModel):
    """Root log level and line layout for the clinic service."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"


def setup_logging(config: LogConfig | None = None) -> None:
    """Send clinic logs to stdout at the configured level.

    Replaces any handlers already on the root logger, so calling it again
    (one call per created app) just reapplies the level and layout.
    """
    if config is None:
        config = LogConfig(level=os.getenv("LOG_LEVEL", "INFO"))

    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
        datefmt=config.date_format,
        stream=sys.stdout,
        force=True,
    )

    # Per-request access lines and client chatter stay at WARNING
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Module logger for the clinic package.

    Args:
        name: Module name, usually __name__
        level: Level for this logger; LOG_LEVEL (default INFO) when omitted

    Returns:
        The named logger with its level applied
    """
    logger = logging.getLogger(name)
    logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    return logger
