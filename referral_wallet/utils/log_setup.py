"""
Logging configuration.

Configures the loguru logger for the wallet engine and its scripts.
"""

import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from referral_wallet.config.settings import Settings


def setup_logging(settings: "Settings") -> None:
    """Configure logger sinks from settings."""
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)

    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="1 day",
            retention="7 days",
            level=settings.log_level,
            encoding="utf-8",
        )

    logger.info(
        "Logging configured",
        extra={"environment": settings.environment, "level": settings.log_level},
    )
