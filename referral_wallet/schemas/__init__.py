"""
Typed payloads.

Inbound models forbid unknown fields; outbound views are built from ORM
entities with from_attributes.
"""

from referral_wallet.schemas.bank import (
    BankDetailsInput,
    BankProfileUpdate,
    BankProfileWithUser,
    BankSnapshot,
    UserSummary,
)
from referral_wallet.schemas.payout import PayoutStats, PayoutView
from referral_wallet.schemas.redemption import (
    Eligibility,
    RedeemAmount,
    RedeemHistoryItem,
)
from referral_wallet.schemas.reward import (
    RewardApproval,
    RewardProgress,
    RewardTargetCreate,
    RewardTargetUpdate,
    RewardTargetView,
)
from referral_wallet.schemas.user import UserRegistration


__all__ = [
    "BankDetailsInput",
    "BankProfileUpdate",
    "BankProfileWithUser",
    "BankSnapshot",
    "Eligibility",
    "PayoutStats",
    "PayoutView",
    "RedeemAmount",
    "RedeemHistoryItem",
    "RewardApproval",
    "RewardProgress",
    "RewardTargetCreate",
    "RewardTargetUpdate",
    "RewardTargetView",
    "UserRegistration",
    "UserSummary",
]
