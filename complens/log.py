"""
Logging setup

Every module logs through loguru's shared `logger`; this only decides
where records go and from which level.
"""

import sys

from loguru import logger

from complens.config import settings


def setup_logging(level: str | None = None) -> None:
    """Route loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.LOG_LEVEL).upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {extra} {message}",
    )
