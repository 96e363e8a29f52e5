"""
Unit tests for redemption request rules with a mocked session.

Tests cover:
- Minimum amount enforced before any storage access
- Bank format checked before the user lookup
- Unknown referral codes
- Payout and transaction id formats
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.schemas.bank import BankDetailsInput
from referral_wallet.services.redemption.redemption_helpers import (
    generate_payout_id,
    generate_transaction_id,
)
from referral_wallet.services.redemption.request_handler import (
    RedemptionRequestHandler,
)
from referral_wallet.services.referral.accrual import ReferralAccrualService
from referral_wallet.utils.exceptions import ErrorKind


@pytest.fixture
def details():
    return BankDetailsInput(
        account_number="123456789012",
        ifsc_code="SBIN0001234",
        bank_name="State Bank of India",
        account_holder_name="Asha Rao",
    )


class TestRequestValidationOrder:
    """Test fail-fast checks of a redemption request."""

    @pytest.mark.asyncio
    async def test_below_minimum_rejected_without_storage(
        self, mock_session, details
    ):
        """Test 100 is rejected before the database is touched."""
        handler = RedemptionRequestHandler(mock_session, RedemptionPolicy())
        result = await handler.request_redemption(1, details, 100)

        assert result.success is False
        assert result.error_code == ErrorKind.BAD_REQUEST
        assert result.error == "Minimum redeem amount is ₹250"
        mock_session.execute.assert_not_awaited()
        mock_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_minimum_follows_policy(self, mock_session, details):
        """Test minimum comes from the policy."""
        handler = RedemptionRequestHandler(
            mock_session, RedemptionPolicy(min_redeem_amount=500)
        )
        result = await handler.request_redemption(1, details, 400)
        assert result.error == "Minimum redeem amount is ₹500"

    @pytest.mark.asyncio
    async def test_negative_amount_rejected(self, mock_session, details):
        """Test negative amounts are a bad request."""
        handler = RedemptionRequestHandler(mock_session)
        result = await handler.request_redemption(1, details, -250)
        assert result.error_code == ErrorKind.BAD_REQUEST
        mock_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_format_rejected_before_user_lookup(self, mock_session):
        """Test invalid bank fields fail before the user row is read."""
        bad = BankDetailsInput(
            account_number="12",
            ifsc_code="SBIN0001234",
            bank_name="State Bank",
            account_holder_name="Asha Rao",
        )
        handler = RedemptionRequestHandler(mock_session)
        result = await handler.request_redemption(1, bad, 250)

        assert result.error_code == ErrorKind.BAD_REQUEST
        assert result.details["errors"] == ["Invalid account number format"]
        mock_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_session, details):
        """Test missing user is NOT_FOUND."""
        lookup = MagicMock()
        lookup.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = lookup

        handler = RedemptionRequestHandler(mock_session)
        result = await handler.request_redemption(99, details, 250)

        assert result.error_code == ErrorKind.NOT_FOUND
        assert result.error == "User not found"
        mock_session.rollback.assert_awaited_once()


class TestReferralAccrual:
    """Test referral accrual against a mocked UPDATE."""

    @pytest.mark.asyncio
    async def test_unknown_code(self, mock_session):
        """Test a code matching no user is NOT_FOUND."""
        mock_session.execute.return_value = MagicMock(rowcount=0)
        service = ReferralAccrualService(mock_session)

        result = await service.accrue_referral("NOPE1234")

        assert result.error_code == ErrorKind.NOT_FOUND
        assert result.error == "Invalid referral code: NOPE1234"
        mock_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_known_code_commits(self, mock_session):
        """Test a matching code is committed."""
        mock_session.execute.return_value = MagicMock(rowcount=1)
        service = ReferralAccrualService(mock_session)

        result = await service.accrue_referral("ABCD1234")

        assert result.success is True
        mock_session.execute.assert_awaited_once()
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_code_not_credited(self, mock_session):
        """Test blank code never reaches the database."""
        service = ReferralAccrualService(mock_session)
        assert await service.credit_referrer("") is False
        mock_session.execute.assert_not_awaited()


class TestGeneratedIds:
    """Test payout id formats."""

    def test_payout_id(self):
        """Test PAY-<millis>-<user id>."""
        moment = datetime(2024, 1, 1, tzinfo=UTC)
        assert generate_payout_id(7, moment) == "PAY-1704067200000-7"

    def test_transaction_id(self):
        """Test TXN-<millis>."""
        moment = datetime(2024, 1, 1, 0, 0, 1, tzinfo=UTC)
        assert generate_transaction_id(moment) == "TXN-1704067201000"
