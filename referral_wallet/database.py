"""
Database engine and session factory.

Every engine operation opens its own session from the factory built
here; there is no module-level engine.
"""

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

if TYPE_CHECKING:
    from referral_wallet.config.settings import Settings


def create_engine_from_settings(settings: "Settings") -> AsyncEngine:
    """
    Create async engine for the configured database.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine
    """
    options: dict = {"echo": settings.database_echo}
    if settings.database_url.startswith("postgresql"):
        options.update(pool_size=10, max_overflow=20, pool_pre_ping=True)
    return create_async_engine(settings.database_url, **options)


def create_session_maker(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """
    Create session factory bound to an engine.

    Args:
        engine: Async engine

    Returns:
        Session factory producing AsyncSession objects
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
