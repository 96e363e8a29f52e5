"""
Payout model.

Record of a completed money movement for a deposited redemption.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from referral_wallet.models.base import Base
from referral_wallet.models.enums import PayoutStatus
from referral_wallet.utils.datetime_utils import utc_now


class Payout(Base):
    """Payout entity, keyed externally by the generated payout_id."""

    __tablename__ = "payouts"

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    payout_id: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    method: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=PayoutStatus.PENDING.value, nullable=False
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    bank_details: Mapped[str] = mapped_column(Text, nullable=False)
    transaction_id: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )

    # Timestamps
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Payout(payout_id={self.payout_id}, user_id={self.user_id}, "
            f"amount={self.amount}, status={self.status})>"
        )
