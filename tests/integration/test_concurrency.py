"""
Integration tests for calls that run at the same time.

Each call gets its own connection to a file-backed SQLite database, so
the calls really interleave instead of sharing one connection.
"""

import asyncio

import pytest

from referral_wallet.utils.exceptions import EligibilityExceededError


async def register(wallet, n: int, referral_code: str | None = None):
    """Register a user with unique contact fields."""
    return await wallet.register_user(
        {
            "name": f"Racer {n}",
            "email": f"racer{n}@example.com",
            "mobile_number": f"97{n:08d}",
            "referral_code": referral_code,
        }
    )


@pytest.mark.slow
class TestConcurrentCalls:
    """Wallet invariants hold when calls overlap."""

    @pytest.mark.asyncio
    async def test_concurrent_accruals_all_counted(self, concurrent_wallet):
        """N simultaneous referrals give count N and N * 250."""
        referrer = await register(concurrent_wallet, 1)

        await asyncio.gather(
            *(
                concurrent_wallet.accrue_referral(referrer.referral_code)
                for _ in range(10)
            )
        )

        user = await concurrent_wallet.get_user(referrer.id)
        assert user.referral_count == 10
        assert user.wallet_balance == 10 * 250

    @pytest.mark.asyncio
    async def test_concurrent_registrations_all_counted(self, concurrent_wallet):
        """Referred registrations landing together each credit the referrer."""
        referrer = await register(concurrent_wallet, 1)

        await asyncio.gather(
            *(
                register(concurrent_wallet, n, referrer.referral_code)
                for n in range(2, 8)
            )
        )

        user = await concurrent_wallet.get_user(referrer.id)
        assert user.referral_count == 6
        assert user.wallet_balance == 6 * 250

    @pytest.mark.asyncio
    async def test_concurrent_redemptions_respect_ceiling(
        self, concurrent_wallet, bank_details
    ):
        """Two 500 requests against a 500 ceiling: exactly one is accepted."""
        user = await register(concurrent_wallet, 1)
        for n in (2, 3):
            await register(concurrent_wallet, n, user.referral_code)
        assert (await concurrent_wallet.get_eligibility(user.id)).max_redeemable == 500

        results = await asyncio.gather(
            concurrent_wallet.request_redemption(user.id, bank_details, 500),
            concurrent_wallet.request_redemption(user.id, bank_details, 500),
            return_exceptions=True,
        )

        rejected = [r for r in results if isinstance(r, Exception)]
        assert len(rejected) == 1
        assert isinstance(rejected[0], EligibilityExceededError)

        history = await concurrent_wallet.get_redeem_history(user.id)
        assert sum(entry.redeem_amount for entry in history) == 500
        assert (await concurrent_wallet.get_user(user.id)).wallet_balance == 0
        eligibility = await concurrent_wallet.get_eligibility(user.id)
        assert eligibility.max_redeemable == 0
