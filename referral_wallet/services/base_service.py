"""
Base service class.

Provides common functionality for all service classes including session
management, logging, the result container and transaction decorators.
"""

import functools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.utils.db_decorators import is_lock_conflict
from referral_wallet.utils.exceptions import ErrorKind, WalletError, error_for


# Type variable for generic result payloads
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard service result container.

    Used to return structured results from service methods. A failed
    result carries the error kind and any figures the caller needs to
    explain the failure.
    """
    success: bool
    data: T | None = None
    error: str | None = None
    error_code: ErrorKind | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: T | None = None) -> "ServiceResult[T]":
        """Successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        error_code: ErrorKind,
        error: str,
        **details: Any,
    ) -> "ServiceResult[T]":
        """Failed result."""
        return cls(
            success=False, error=error, error_code=error_code, details=details
        )

    def to_exception(self) -> WalletError:
        """Exception matching this failed result."""
        return error_for(
            self.error_code or ErrorKind.INTERNAL,
            self.error or "Unknown error",
            self.details,
        )

    def unwrap(self) -> T:
        """
        Return the payload or raise the mapped exception.

        Raises:
            WalletError: If the result is a failure
        """
        if not self.success:
            raise self.to_exception()
        return self.data  # type: ignore[return-value]


class BaseService:
    """
    Base service class.

    Provides common functionality for all service classes:
    - Session management
    - Logging with bound service context
    - Transaction helpers
    """

    def __init__(
        self,
        session: AsyncSession,
        policy: RedemptionPolicy | None = None,
    ) -> None:
        """
        Initialize base service.

        Args:
            session: Async database session
            policy: Reward and redemption parameters
        """
        self.session = session
        self.policy = policy or RedemptionPolicy()
        self.logger = logger.bind(service=self.__class__.__name__)

    async def commit(self) -> None:
        """Commit current transaction."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Rollback current transaction."""
        await self.session.rollback()

    def conflict_result(self) -> ServiceResult:
        """Result returned when lock conflicts outlast the retries."""
        return ServiceResult.fail(
            ErrorKind.CONFLICT,
            "Another request for this account is in progress. Please retry.",
        )


def transaction(
    func: Callable[..., Awaitable[ServiceResult]]
) -> Callable[..., Awaitable[ServiceResult]]:
    """
    Decorator to wrap method in transaction with automatic commit/rollback.

    Commits when the method returns a successful result and rolls back a
    failed one, so a rejected request never leaves partial writes. Lock
    conflicts are re-raised for retry_on_conflict; other storage errors
    become an INTERNAL result.

    Usage:
        @transaction
        async def my_service_method(self, ...) -> ServiceResult:
            ...

    Args:
        func: Async method to wrap

    Returns:
        Wrapped async method
    """
    @functools.wraps(func)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> ServiceResult:
        try:
            result = await func(self, *args, **kwargs)
            if result.success:
                await self.commit()
            else:
                await self.rollback()
            return result
        except SQLAlchemyError as e:
            await self.rollback()
            if is_lock_conflict(e):
                raise
            self.logger.error(
                f"Transaction failed in {func.__name__}",
                extra={
                    "error": str(e),
                    "function": func.__name__,
                },
                exc_info=True,
            )
            return ServiceResult.fail(
                ErrorKind.INTERNAL, f"Storage failure in {func.__name__}"
            )
        except Exception:
            await self.rollback()
            raise

    return wrapper
