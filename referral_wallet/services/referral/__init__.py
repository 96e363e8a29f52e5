"""
Referral services package.

- accrual: credits referrers when a referred user registers
- rewards: admin-managed reward tiers and user progress
"""

from referral_wallet.services.referral.accrual import ReferralAccrualService
from referral_wallet.services.referral.rewards import RewardTargetService


__all__ = [
    "ReferralAccrualService",
    "RewardTargetService",
]
