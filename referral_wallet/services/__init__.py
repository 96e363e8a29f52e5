"""
Services.

Business logic layer. WalletEngine is the public facade; the other
services each run inside one caller-provided session.
"""

from referral_wallet.services.bank_profile_service import BankProfileService
from referral_wallet.services.base_service import BaseService, ServiceResult
from referral_wallet.services.payout_service import PayoutService
from referral_wallet.services.user_service import UserService
from referral_wallet.services.wallet_engine import WalletEngine


__all__ = [
    "BankProfileService",
    "BaseService",
    "PayoutService",
    "ServiceResult",
    "UserService",
    "WalletEngine",
]
