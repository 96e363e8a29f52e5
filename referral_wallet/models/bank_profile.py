"""
BankProfile model.

One bank-details record per user, with the progress of the user's
latest redemption.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from referral_wallet.models.base import Base
from referral_wallet.models.enums import RedeemStatus
from referral_wallet.utils.datetime_utils import utc_now

if TYPE_CHECKING:
    from referral_wallet.models.user import User


class BankProfile(Base):
    """
    BankProfile entity.

    Attributes:
        id: Primary key
        user_id: Owning user (unique)
        account_number: Bank account number (9-18 digits)
        ifsc_code: IFSC code of the branch
        bank_name: Bank name
        account_holder_name: Name on the account
        redeem_amount: Amount of the latest redemption request
        redeem_status: Progress of the latest redemption only
    """

    __tablename__ = "user_bank_details"

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    # Bank account
    account_number: Mapped[str] = mapped_column(String(50), nullable=False)
    ifsc_code: Mapped[str] = mapped_column(String(20), nullable=False)
    bank_name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_holder_name: Mapped[str] = mapped_column(
        String(255), nullable=False
    )

    # Latest redemption
    redeem_amount: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )
    redeem_status: Mapped[str] = mapped_column(
        String(20), default=RedeemStatus.PROCESSING.value, nullable=False
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )

    user: Mapped["User"] = relationship(
        "User", back_populates="bank_profile"
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<BankProfile(id={self.id}, user_id={self.user_id}, "
            f"redeem_amount={self.redeem_amount}, "
            f"redeem_status={self.redeem_status})>"
        )
