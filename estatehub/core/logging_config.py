import logging
import sys

from estatehub.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Install a single stream handler on the estatehub logger"""
    logger = logging.getLogger("estatehub")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(getattr(h, "_estatehub", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._estatehub = True
        logger.addHandler(handler)
