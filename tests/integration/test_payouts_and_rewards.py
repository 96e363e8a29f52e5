"""Integration tests for payout records and reward targets."""

import pytest

from referral_wallet.utils.exceptions import BadRequestError, NotFoundError


class TestPayouts:
    """Payout records created by deposits."""

    @pytest.mark.asyncio
    async def test_payout_fields(self, wallet, make_referrer, bank_details):
        """Payout mirrors the deposited entry and its snapshot."""
        user = await make_referrer(4)
        await wallet.request_redemption(user.id, bank_details, 500)
        await wallet.mark_deposited(user.id)

        [payout] = await wallet.get_payouts(user.id)

        assert payout.user_id == user.id
        assert payout.amount == 500
        assert payout.method == "Bank Transfer"
        assert payout.status == "completed"
        assert payout.description == "Wallet Redemption Payout"
        assert payout.bank_details == (
            "State Bank of India - A/C: 123456789012 - IFSC: SBIN0001234"
        )
        assert payout.payout_id.startswith("PAY-")
        assert payout.payout_id.endswith(f"-{user.id}")
        assert payout.transaction_id.startswith("TXN-")

        assert await wallet.get_payout(payout.payout_id) == payout
        assert await wallet.get_payout("PAY-0-0") is None

    @pytest.mark.asyncio
    async def test_payout_ids_unique(self, wallet, make_referrer, bank_details):
        """Back-to-back deposits never reuse a payout id."""
        user = await make_referrer(8)
        for _ in range(3):
            await wallet.request_redemption(user.id, bank_details, 250)
            await wallet.mark_deposited(user.id)

        payouts = await wallet.get_payouts(user.id)
        assert len({p.payout_id for p in payouts}) == 3

    @pytest.mark.asyncio
    async def test_newest_first(self, wallet, make_referrer, bank_details):
        """Payout listing is newest first."""
        user = await make_referrer(8)
        await wallet.request_redemption(user.id, bank_details, 250)
        await wallet.mark_deposited(user.id)
        await wallet.request_redemption(user.id, bank_details, 500)
        await wallet.mark_deposited(user.id)

        payouts = await wallet.get_payouts(user.id)
        assert [p.amount for p in payouts] == [500, 250]

    @pytest.mark.asyncio
    async def test_stats(self, wallet, make_referrer, bank_details):
        """Stats add up completed payouts."""
        user = await make_referrer(8)
        await wallet.request_redemption(user.id, bank_details, 250)
        await wallet.mark_deposited(user.id)
        await wallet.request_redemption(user.id, bank_details, 500)
        await wallet.mark_deposited(user.id)

        stats = await wallet.get_payout_stats(user.id)

        assert stats.total_payouts == 2
        assert stats.total_amount == 750
        assert stats.completed_amount == 750
        assert stats.pending_amount == 0
        assert stats.failed_amount == 0

    @pytest.mark.asyncio
    async def test_stats_empty(self, wallet, make_user):
        """No payouts gives zeros."""
        user = await make_user()
        stats = await wallet.get_payout_stats(user.id)
        assert stats.total_payouts == 0
        assert stats.total_amount == 0


class TestRewardTargets:
    """Admin reward tiers."""

    @pytest.mark.asyncio
    async def test_crud(self, wallet):
        """Create, list, update and delete a tier."""
        gold = await wallet.add_reward_target({"referral_count": 10, "reward": "Gold"})
        await wallet.add_reward_target({"referral_count": 5, "reward": "Silver"})

        tiers = await wallet.list_reward_targets()
        assert [t.reward for t in tiers] == ["Silver", "Gold"]

        updated = await wallet.update_reward_target(gold.id, {"reward": "Gold Coin"})
        assert updated.reward == "Gold Coin"
        assert updated.referral_count == 10

        await wallet.delete_reward_target(gold.id)
        assert [t.reward for t in await wallet.list_reward_targets()] == ["Silver"]

    @pytest.mark.asyncio
    async def test_invalid_tier(self, wallet):
        """Zero threshold and unknown fields are rejected."""
        with pytest.raises(BadRequestError):
            await wallet.add_reward_target({"referral_count": 0, "reward": "Free"})
        with pytest.raises(BadRequestError):
            await wallet.add_reward_target(
                {"referral_count": 3, "reward": "Mug", "cost": 10}
            )

    @pytest.mark.asyncio
    async def test_update_errors(self, wallet):
        """Empty update is bad; unknown tier is not found."""
        tier = await wallet.add_reward_target({"referral_count": 3, "reward": "Mug"})
        with pytest.raises(BadRequestError, match="No fields to update"):
            await wallet.update_reward_target(tier.id, {})
        with pytest.raises(NotFoundError):
            await wallet.update_reward_target(9999, {"reward": "Pen"})
        with pytest.raises(NotFoundError):
            await wallet.delete_reward_target(9999)

    @pytest.mark.asyncio
    async def test_progress(self, wallet, make_referrer):
        """Unlocked tiers and distance to the next one."""
        await wallet.add_reward_target({"referral_count": 2, "reward": "Mug"})
        await wallet.add_reward_target({"referral_count": 5, "reward": "Bag"})
        await wallet.add_reward_target({"referral_count": 10, "reward": "Phone"})
        user = await make_referrer(3)

        progress = await wallet.get_reward_progress(user.id)

        assert progress.referral_count == 3
        assert [t.reward for t in progress.unlocked] == ["Mug"]
        assert progress.next_target.reward == "Bag"
        assert progress.referrals_needed == 2

    @pytest.mark.asyncio
    async def test_progress_all_unlocked(self, wallet, make_referrer):
        """No next tier once every tier is reached."""
        await wallet.add_reward_target({"referral_count": 1, "reward": "Mug"})
        user = await make_referrer(1)

        progress = await wallet.get_reward_progress(user.id)

        assert progress.next_target is None
        assert progress.referrals_needed == 0

    @pytest.mark.asyncio
    async def test_progress_unknown_user(self, wallet):
        """Progress of a missing user is NOT_FOUND."""
        with pytest.raises(NotFoundError):
            await wallet.get_reward_progress(31337)

    @pytest.mark.asyncio
    async def test_target_description(self, wallet):
        """Tier target is optional, stored and updatable."""
        plain = await wallet.add_reward_target({"referral_count": 2, "reward": "Mug"})
        assert plain.target is None

        tier = await wallet.add_reward_target(
            {"referral_count": 5, "reward": "Bag", "target": "Campus drive"}
        )
        assert tier.target == "Campus drive"

        updated = await wallet.update_reward_target(tier.id, {"target": "Festival"})
        assert updated.target == "Festival"
        assert updated.reward == "Bag"


class TestUserRewardApproval:
    """Admin moves a user's reward label through approved and delivered."""

    @pytest.mark.asyncio
    async def test_approved_then_delivered(self, wallet, make_user):
        """Approved reward becomes delivered, ignoring the label given."""
        user = await make_user()
        assert user.reward is None

        approved = await wallet.approve_user_reward(
            user.id, {"reward": "Mug", "status": "APPROVED"}
        )
        assert approved.reward == "approved"

        delivered = await wallet.approve_user_reward(
            user.id, {"reward": "Mug", "status": "delivered"}
        )
        assert delivered.reward == "delivered"
        assert (await wallet.get_user(user.id)).reward == "delivered"

    @pytest.mark.asyncio
    async def test_delivered_without_approval(self, wallet, make_user):
        """Delivering an unapproved reward stores the label, or "delivered"."""
        user = await make_user()
        other = await make_user()

        with_label = await wallet.approve_user_reward(
            user.id, {"reward": "Bag", "status": "Delivered"}
        )
        without_label = await wallet.approve_user_reward(
            other.id, {"status": "delivered"}
        )

        assert with_label.reward == "Bag"
        assert without_label.reward == "delivered"

    @pytest.mark.asyncio
    async def test_other_status_stores_reward(self, wallet, make_user):
        """Any other status stores the reward label as given."""
        user = await make_user()
        await wallet.approve_user_reward(user.id, {"status": "approved"})

        result = await wallet.approve_user_reward(
            user.id, {"reward": "Phone", "status": "pending"}
        )
        assert result.reward == "Phone"

    @pytest.mark.asyncio
    async def test_missing_reward(self, wallet, make_user):
        """Nothing to store is a bad request and leaves the label alone."""
        user = await make_user()
        await wallet.approve_user_reward(user.id, {"status": "approved"})

        with pytest.raises(BadRequestError, match="Reward is required"):
            await wallet.approve_user_reward(user.id, {"status": "pending"})
        assert (await wallet.get_user(user.id)).reward == "approved"

    @pytest.mark.asyncio
    async def test_errors(self, wallet, make_user):
        """Unknown user is not found; unknown fields are rejected."""
        with pytest.raises(NotFoundError, match="User not found"):
            await wallet.approve_user_reward(9999, {"status": "approved"})

        user = await make_user()
        with pytest.raises(BadRequestError):
            await wallet.approve_user_reward(
                user.id, {"status": "approved", "note": "x"}
            )
