#!/usr/bin/env python3
"""
Settle a user's latest processing redemption.

Usage:
    python scripts/settle_redemption.py --user-id 42 --deposited
    python scripts/settle_redemption.py --user-id 42 --failed --reason "Account closed"
"""

import argparse
import asyncio
import sys

from loguru import logger

from referral_wallet.config.settings import settings
from referral_wallet.services.wallet_engine import WalletEngine
from referral_wallet.utils.exceptions import WalletError
from referral_wallet.utils.log_setup import setup_logging


async def settle(user_id: int, deposited: bool, reason: str | None) -> int:
    """
    Mark the redemption deposited or failed.

    Returns:
        Process exit code
    """
    engine = WalletEngine.from_settings(settings)
    try:
        if deposited:
            profile = await engine.mark_deposited(user_id)
        else:
            profile = await engine.mark_failed(user_id, reason)
        payouts = await engine.get_payouts(user_id)
    except WalletError as e:
        logger.error(f"Settlement failed: {e.message}", extra=e.to_dict())
        return 1
    finally:
        await engine.close()

    logger.success(
        f"User {user_id}: redemption {profile.redeem_status}, "
        f"wallet balance {profile.user.wallet_balance}"
    )
    if deposited and payouts:
        logger.info(f"Latest payout: {payouts[0].payout_id}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Settle a user's latest processing redemption"
    )
    parser.add_argument("--user-id", type=int, required=True, help="User ID")
    outcome = parser.add_mutually_exclusive_group(required=True)
    outcome.add_argument(
        "--deposited",
        action="store_true",
        help="Money was sent: mark deposited and record the payout"
    )
    outcome.add_argument(
        "--failed",
        action="store_true",
        help="Payout impossible: mark failed and credit the wallet back"
    )
    parser.add_argument("--reason", help="Failure reason for the log")

    args = parser.parse_args()

    setup_logging(settings)
    sys.exit(asyncio.run(settle(args.user_id, args.deposited, args.reason)))


if __name__ == "__main__":
    main()
