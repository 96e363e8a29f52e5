"""Integration tests for the bank profile store."""

import pytest

from referral_wallet.services.wallet_engine import WalletEngine
from referral_wallet.utils.exceptions import BadRequestError, NotFoundError


class TestBankProfileStore:
    """get / exists / upsert / delete / list."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, wallet, make_user, bank_details):
        """Saved details come back with the user summary."""
        user = await make_user()

        saved = await wallet.save_bank_details(user.id, bank_details)
        fetched = await wallet.get_bank_profile(user.id)

        assert saved.id == fetched.id
        assert fetched.account_holder_name == "Asha Rao"
        assert fetched.user.email == user.email
        assert await wallet.bank_profile_exists(user.id) is True

    @pytest.mark.asyncio
    async def test_missing_profile(self, wallet, make_user):
        """No profile reads as None / False."""
        user = await make_user()
        assert await wallet.get_bank_profile(user.id) is None
        assert await wallet.bank_profile_exists(user.id) is False

    @pytest.mark.asyncio
    async def test_save_overwrites(
        self, wallet, make_user, bank_details, other_bank_details
    ):
        """Second save updates the single profile in place."""
        user = await make_user()
        first = await wallet.save_bank_details(user.id, bank_details)
        second = await wallet.save_bank_details(user.id, other_bank_details)

        assert second.id == first.id
        assert second.bank_name == "HDFC Bank"
        assert len(await wallet.list_bank_profiles()) == 1

    @pytest.mark.asyncio
    async def test_save_keeps_redemption_fields(
        self, wallet, make_referrer, bank_details, other_bank_details
    ):
        """Editing bank fields leaves the latest redemption untouched."""
        user = await make_referrer(2)
        await wallet.request_redemption(user.id, bank_details, 250)

        profile = await wallet.save_bank_details(user.id, other_bank_details)

        assert profile.redeem_amount == 250
        assert profile.redeem_status == "processing"

    @pytest.mark.asyncio
    async def test_save_for_unknown_user(self, wallet, bank_details):
        """Saving for a missing user is NOT_FOUND."""
        with pytest.raises(NotFoundError):
            await wallet.save_bank_details(777, bank_details)

    @pytest.mark.asyncio
    async def test_save_invalid(self, wallet, make_user, bank_details):
        """Invalid fields are rejected with every error listed."""
        user = await make_user()
        bank_details.update(account_number="12", ifsc_code="BAD")

        with pytest.raises(BadRequestError) as exc_info:
            await wallet.save_bank_details(user.id, bank_details)

        assert len(exc_info.value.details["errors"]) == 2

    @pytest.mark.asyncio
    async def test_delete(self, wallet, make_user, bank_details):
        """Delete removes the profile; deleting again is NOT_FOUND."""
        user = await make_user()
        await wallet.save_bank_details(user.id, bank_details)

        await wallet.delete_bank_profile(user.id)

        assert await wallet.bank_profile_exists(user.id) is False
        assert await wallet.get_user(user.id) is not None
        with pytest.raises(NotFoundError):
            await wallet.delete_bank_profile(user.id)

    @pytest.mark.asyncio
    async def test_list_oldest_first(
        self, wallet, make_user, bank_details, other_bank_details
    ):
        """Listing joins users and keeps creation order."""
        first = await make_user()
        second = await make_user()
        await wallet.save_bank_details(first.id, bank_details)
        await wallet.save_bank_details(second.id, other_bank_details)

        profiles = await wallet.list_bank_profiles()

        assert [p.user.id for p in profiles] == [first.id, second.id]


class TestValidateBankDetails:
    """Format check without storage."""

    def test_valid(self, bank_details):
        """Well-formed details pass."""
        result = WalletEngine.validate_bank_details(bank_details)
        assert result.is_valid is True

    def test_invalid(self, bank_details):
        """Bad IFSC is reported."""
        bank_details["ifsc_code"] = "ABCD1234567"
        result = WalletEngine.validate_bank_details(bank_details)
        assert result.is_valid is False
        assert len(result.errors) == 1

    def test_missing_field(self, bank_details):
        """Missing field is a bad request."""
        del bank_details["bank_name"]
        with pytest.raises(BadRequestError):
            WalletEngine.validate_bank_details(bank_details)
