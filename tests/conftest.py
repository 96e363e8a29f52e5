"""Pytest configuration and shared fixtures for all tests."""

import os

# Minimal environment for Settings; the engine under test never reads it
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import itertools
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.database import create_session_maker
from referral_wallet.models import Base
from referral_wallet.services.wallet_engine import WalletEngine


@pytest.fixture
def mock_session():
    """Mock AsyncSession for tests without a database."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.flush = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.refresh = AsyncMock()
    return session


@pytest.fixture
def policy():
    """Default reward parameters without retry delay."""
    return RedemptionPolicy(retry_delay=0)


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory bound to the test engine."""
    return create_session_maker(db_engine)


@pytest.fixture
def wallet(session_factory, policy):
    """Wallet engine over the test database."""
    return WalletEngine(session_factory, policy)


@pytest_asyncio.fixture
async def file_db_engine(tmp_path):
    """
    File-backed SQLite engine with one connection per session.

    Transactions start with BEGIN IMMEDIATE, so concurrent writers
    queue on the database lock the way row locks queue them on
    PostgreSQL.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'wallet.db'}",
        poolclass=NullPool,
        connect_args={"timeout": 30},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_implicit_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def concurrent_wallet(file_db_engine):
    """Wallet engine whose calls may run at the same time."""
    return WalletEngine(
        create_session_maker(file_db_engine),
        RedemptionPolicy(max_attempts=5, retry_delay=0.05),
    )


@pytest.fixture
def bank_details():
    """Valid bank fields."""
    return {
        "account_number": "123456789012",
        "ifsc_code": "SBIN0001234",
        "bank_name": "State Bank of India",
        "account_holder_name": "Asha Rao",
    }


@pytest.fixture
def other_bank_details():
    """A second, different set of valid bank fields."""
    return {
        "account_number": "987654321098",
        "ifsc_code": "HDFC0004321",
        "bank_name": "HDFC Bank",
        "account_holder_name": "Asha Rao",
    }


@pytest.fixture
def make_user(wallet):
    """
    Factory registering users with unique email and mobile number.

    Returns:
        Async callable (referral_code=None) -> UserSummary
    """
    counter = itertools.count(1)

    async def _make(referral_code: str | None = None):
        n = next(counter)
        return await wallet.register_user(
            {
                "name": f"User {n}",
                "email": f"user{n}@example.com",
                "mobile_number": f"98{n:08d}",
                "referral_code": referral_code,
            }
        )

    return _make


@pytest.fixture
def make_referrer(make_user):
    """
    Factory creating a user with a given number of referrals.

    Returns:
        Async callable (referrals) -> UserSummary of the referrer
    """

    async def _make(referrals: int):
        referrer = await make_user()
        for _ in range(referrals):
            await make_user(referral_code=referrer.referral_code)
        return referrer

    return _make
