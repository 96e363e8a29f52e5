"""
Redemption helpers.

Id generation for payout records.
"""

from datetime import datetime

from referral_wallet.utils.datetime_utils import epoch_millis


def generate_payout_id(user_id: int, moment: datetime | None = None) -> str:
    """
    Payout id in the PAY-<millis>-<user id> format.

    Args:
        user_id: Payout owner
        moment: Creation time (defaults to now)

    Returns:
        Payout id
    """
    return f"PAY-{epoch_millis(moment)}-{user_id}"


def generate_transaction_id(moment: datetime | None = None) -> str:
    """Transaction reference in the TXN-<millis> format."""
    return f"TXN-{epoch_millis(moment)}"
