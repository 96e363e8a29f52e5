"""
Repositories.

Data access layer: one repository per model, all sharing the caller's
AsyncSession so a service controls the transaction boundary.
"""

from referral_wallet.repositories.bank_profile_repository import (
    BankProfileRepository,
)
from referral_wallet.repositories.payout_repository import PayoutRepository
from referral_wallet.repositories.redeem_history_repository import (
    RedeemHistoryRepository,
)
from referral_wallet.repositories.reward_target_repository import (
    RewardTargetRepository,
)
from referral_wallet.repositories.user_repository import UserRepository


__all__ = [
    "BankProfileRepository",
    "PayoutRepository",
    "RedeemHistoryRepository",
    "RewardTargetRepository",
    "UserRepository",
]
