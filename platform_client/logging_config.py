"""Logging setup for applications embedding the client."""

import logging
from typing import Optional

from platform_client.config.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the `platform_client` logger at `level` (default from settings)."""
    level = (level or get_settings().log_level).upper()
    logger = logging.getLogger("platform_client")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
