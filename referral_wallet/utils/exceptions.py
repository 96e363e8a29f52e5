"""
Exception handling utilities.

Defines the error taxonomy of the wallet engine. Internal components
report failures as ErrorKind values; the engine facade turns them into
the exceptions below.
"""

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Categories of engine failures."""

    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class WalletError(Exception):
    """Base class for all wallet engine errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self, message: str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Error payload for the API layer."""
        return {
            "error": self.kind.value,
            "message": self.message,
            **self.details,
        }


class NotFoundError(WalletError):
    """Referenced user, referral code or bank profile does not exist."""

    kind = ErrorKind.NOT_FOUND


class BadRequestError(WalletError):
    """Input failed validation or a business rule."""

    kind = ErrorKind.BAD_REQUEST


class EligibilityExceededError(BadRequestError):
    """Requested amount is above the user's eligibility ceiling."""

    def __init__(
        self,
        message: str,
        total_earned: int,
        total_already_redeemed: int,
        max_redeemable: int,
    ) -> None:
        super().__init__(
            message,
            details={
                "total_earned": total_earned,
                "total_already_redeemed": total_already_redeemed,
                "max_redeemable": max_redeemable,
            },
        )
        self.total_earned = total_earned
        self.total_already_redeemed = total_already_redeemed
        self.max_redeemable = max_redeemable


class ConflictError(WalletError):
    """Concurrent modification could not be resolved by retrying."""

    kind = ErrorKind.CONFLICT


class InternalError(WalletError):
    """Storage failure or corrupt stored data."""

    kind = ErrorKind.INTERNAL


ERRORS_BY_KIND: dict[ErrorKind, type[WalletError]] = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.BAD_REQUEST: BadRequestError,
    ErrorKind.CONFLICT: ConflictError,
    ErrorKind.INTERNAL: InternalError,
}


def error_for(
    kind: ErrorKind, message: str, details: dict[str, Any] | None = None
) -> WalletError:
    """
    Build the exception matching an error kind.

    Eligibility failures carry the three ceiling figures so the caller
    can explain the rejection without another round trip.

    Args:
        kind: Error category
        message: Human-readable message
        details: Extra payload

    Returns:
        Exception instance (not raised)
    """
    details = details or {}
    if kind == ErrorKind.BAD_REQUEST and "max_redeemable" in details:
        return EligibilityExceededError(
            message,
            total_earned=details["total_earned"],
            total_already_redeemed=details["total_already_redeemed"],
            max_redeemable=details["max_redeemable"],
        )
    return ERRORS_BY_KIND[kind](message, details=details)
