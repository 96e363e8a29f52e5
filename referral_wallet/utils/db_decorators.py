"""
Database decorators for lock conflict handling.

Provides helpers that recognise row-lock and serialization conflicts and
retry the wrapped service method after a rollback.
"""

import asyncio
import functools
import random
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger
from sqlalchemy.exc import DBAPIError

T = TypeVar("T")

# Driver messages that mean "another transaction holds what we need"
LOCK_CONFLICT_MARKERS = (
    "could not obtain lock",
    "lock_not_available",
    "could not serialize access",
    "serialization_failure",
    "deadlock detected",
    "database is locked",
)


def is_lock_conflict(exc: BaseException) -> bool:
    """
    Check if a database error is a lock or serialization conflict.

    Args:
        exc: Exception raised by SQLAlchemy

    Returns:
        True if retrying the transaction may succeed
    """
    if not isinstance(exc, DBAPIError):
        return False
    error_str = str(exc).lower()
    return any(marker in error_str for marker in LOCK_CONFLICT_MARKERS)


def retry_on_conflict(
    func: Callable[..., Awaitable[T]]
) -> Callable[..., Awaitable[T]]:
    """
    Decorator that retries a service method on lock conflicts.

    The wrapped method belongs to a service exposing `session`, `policy`
    and `conflict_result()`. Each failed attempt is rolled back before
    the next one; when the attempts are exhausted the service's conflict
    result is returned instead of raising.

    Usage:
        @retry_on_conflict
        @transaction
        async def request_redemption(self, ...):
            ...
    """
    @functools.wraps(func)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
        max_attempts = self.policy.max_attempts
        for attempt in range(max_attempts):
            try:
                return await func(self, *args, **kwargs)
            except DBAPIError as e:
                if not is_lock_conflict(e):
                    raise
                await self.session.rollback()
                if attempt < max_attempts - 1:
                    delay = self.policy.retry_delay * (2 ** attempt) + random.uniform(0, 0.05)
                    logger.warning(
                        f"Lock conflict in {func.__name__}, retrying",
                        extra={"attempt": attempt + 1, "delay": round(delay, 3)},
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error(
                    f"Lock conflict in {func.__name__}, retries exhausted",
                    extra={"attempts": max_attempts},
                )
        return self.conflict_result()

    return wrapper
