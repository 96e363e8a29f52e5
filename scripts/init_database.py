#!/usr/bin/env python3
"""Initialize referral wallet tables."""

import asyncio
import sys

from loguru import logger

from referral_wallet.config.settings import settings
from referral_wallet.database import create_engine_from_settings
from referral_wallet.models import Base
from referral_wallet.utils.log_setup import setup_logging


async def init_database() -> None:
    """Create all database tables."""
    logger.info("Connecting to database...")
    engine = create_engine_from_settings(settings)

    try:
        async with engine.begin() as conn:
            logger.info("Creating tables (checkfirst=True)...")
            await conn.run_sync(
                Base.metadata.create_all,
                checkfirst=True
            )
    finally:
        await engine.dispose()

    logger.success(
        f"Created tables: {', '.join(sorted(Base.metadata.tables))}"
    )


if __name__ == "__main__":
    setup_logging(settings)
    try:
        asyncio.run(init_database())
    except Exception as e:
        logger.exception(f"Database initialization failed: {e}")
        sys.exit(1)
