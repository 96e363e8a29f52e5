"""
RewardTarget model.

Admin-managed reward tiers unlocked by referral count.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from referral_wallet.models.base import Base
from referral_wallet.utils.datetime_utils import utc_now


class RewardTarget(Base):
    """Reward tier: `reward` is unlocked at `referral_count` referrals."""

    __tablename__ = "reward_targets"
    __table_args__ = (
        CheckConstraint(
            'referral_count > 0', name='check_reward_target_count_positive'
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    referral_count: Mapped[int] = mapped_column(Integer, nullable=False)
    reward: Mapped[str] = mapped_column(String(255), nullable=False)
    # Free-form description of what the tier is for
    target: Mapped[str | None] = mapped_column(String(255), nullable=True)

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
            f"<RewardTarget(id={self.id}, referral_count={self.referral_count}, "
            f"reward={self.reward})>"
        )
