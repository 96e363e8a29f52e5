"""
Business logic constants for the referral wallet.

Central location for business rules and defaults. Settings override
these through the environment.
"""

# Wallet credit granted to a referrer for every referred registration
PER_REFERRAL_REWARD = 250

# Smallest amount a user may redeem in one request
MIN_REDEEM_AMOUNT = 250

# First attempt plus one transparent retry on a lock conflict
REDEMPTION_MAX_ATTEMPTS = 2
LOCK_RETRY_DELAY_SECONDS = 0.2

# Referral code generation
REFERRAL_CODE_LENGTH = 8
REFERRAL_CODE_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
)

# Payout record defaults for completed redemptions
PAYOUT_METHOD_BANK_TRANSFER = "Bank Transfer"
PAYOUT_DESCRIPTION_REDEMPTION = "Wallet Redemption Payout"
NOT_AVAILABLE = "N/A"

# Bank profile field bounds
MAX_BANK_NAME_LENGTH = 255
MIN_ACCOUNT_HOLDER_NAME_LENGTH = 2
MAX_ACCOUNT_HOLDER_NAME_LENGTH = 255
