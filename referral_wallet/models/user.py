"""
User model.

Represents a registered member with referral counters and wallet balance.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from referral_wallet.models.base import Base
from referral_wallet.models.enums import PaymentStatus
from referral_wallet.utils.datetime_utils import utc_now

if TYPE_CHECKING:
    from referral_wallet.models.bank_profile import BankProfile


class User(Base):
    """User model - registered members."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            'wallet_balance >= 0', name='check_user_wallet_balance_non_negative'
        ),
        CheckConstraint(
            'referral_count >= 0', name='check_user_referral_count_non_negative'
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Profile
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True
    )
    mobile_number: Mapped[str] = mapped_column(
        String(15), nullable=False, unique=True
    )

    # Referral
    referral_code: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True, index=True
    )
    # Code of the referrer, resolved by lookup rather than foreign key
    referred_by_code: Mapped[str | None] = mapped_column(
        String(50), nullable=True, index=True
    )
    referral_count: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )
    referral_count_at_last_redeem: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        comment="Snapshot of referral_count at the latest redemption",
    )

    # Wallet
    wallet_balance: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )

    # Reward tier label granted by an admin
    reward: Mapped[str | None] = mapped_column(String(255), nullable=True)

    payment_status: Mapped[str] = mapped_column(
        String(20), default=PaymentStatus.PENDING.value, nullable=False
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

    # Bank profile is owned by the user and removed with it
    bank_profile: Mapped["BankProfile | None"] = relationship(
        "BankProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<User(id={self.id}, referral_code={self.referral_code}, "
            f"referral_count={self.referral_count}, "
            f"wallet_balance={self.wallet_balance})>"
        )
