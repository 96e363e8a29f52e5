"""
RedeemHistory model.

Append-only audit ledger of redemption requests.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from referral_wallet.models.base import Base
from referral_wallet.models.enums import RedeemStatus
from referral_wallet.utils.datetime_utils import utc_now


class RedeemHistory(Base):
    """
    RedeemHistory entity.

    Rows are never deleted. The only mutation is the single status
    transition out of processing, which also stamps deposited_at when
    the money was sent. There is no foreign key to users so the ledger
    survives user deletion.

    Attributes:
        id: Primary key
        user_id: User who requested the redemption
        redeem_amount: Amount requested
        status: processing, deposited or failed
        bank_details: JSON snapshot of the bank fields at request time
        redeemed_at: When the request was made
        deposited_at: When the money was marked as deposited
    """

    __tablename__ = "redeem_history"
    __table_args__ = (
        Index("idx_redeem_history_user_status", "user_id", "status"),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    redeem_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=RedeemStatus.PROCESSING.value, nullable=False
    )
    bank_details: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )

    # Timestamps
    redeemed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    deposited_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<RedeemHistory(id={self.id}, user_id={self.user_id}, "
            f"amount={self.redeem_amount}, status={self.status})>"
        )
