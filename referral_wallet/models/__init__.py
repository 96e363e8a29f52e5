"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from referral_wallet.models.bank_profile import BankProfile
from referral_wallet.models.base import Base
from referral_wallet.models.enums import (
    COMMITTED_REDEEM_STATUSES,
    PaymentStatus,
    PayoutStatus,
    RedeemStatus,
    RewardStatus,
)
from referral_wallet.models.payout import Payout
from referral_wallet.models.redeem_history import RedeemHistory
from referral_wallet.models.reward_target import RewardTarget
from referral_wallet.models.user import User


__all__ = [
    "Base",
    "BankProfile",
    "COMMITTED_REDEEM_STATUSES",
    "PaymentStatus",
    "Payout",
    "PayoutStatus",
    "RedeemHistory",
    "RedeemStatus",
    "RewardStatus",
    "RewardTarget",
    "User",
]
