"""
Enumerations shared by models and services.

Values are stored as plain strings in the database.
"""

from enum import StrEnum


class RedeemStatus(StrEnum):
    """Progress of a redemption request."""

    PROCESSING = "processing"
    DEPOSITED = "deposited"
    FAILED = "failed"


class PayoutStatus(StrEnum):
    """Status of a payout record."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    PROCESSING = "processing"


class PaymentStatus(StrEnum):
    """Membership payment status of a user."""

    PENDING = "PENDING"
    PAID = "PAID"


class RewardStatus(StrEnum):
    """Admin-driven lifecycle of a user's reward label."""

    APPROVED = "approved"
    DELIVERED = "delivered"


# Statuses whose amount is committed against the eligibility ceiling
COMMITTED_REDEEM_STATUSES = (
    RedeemStatus.PROCESSING.value,
    RedeemStatus.DEPOSITED.value,
)
