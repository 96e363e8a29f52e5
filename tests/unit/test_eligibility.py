"""
Unit tests for the redemption ceiling and its parameters.

Tests cover:
- Lifetime earned minus lifetime redeemed
- Clamp at zero
- Rejection message figures
- Policy and settings validation
"""

import pytest
from pydantic import ValidationError

from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.config.settings import Settings
from referral_wallet.schemas.redemption import Eligibility


class TestEligibilityCompute:
    """Test ceiling arithmetic."""

    def test_no_redemptions(self):
        """Test ceiling equals lifetime earnings."""
        eligibility = Eligibility.compute(10, 250, 0)
        assert eligibility.total_earned == 2500
        assert eligibility.total_already_redeemed == 0
        assert eligibility.max_redeemable == 2500

    def test_after_redemptions(self):
        """Test redeemed amounts reduce the ceiling."""
        eligibility = Eligibility.compute(10, 250, 2000)
        assert eligibility.max_redeemable == 500

    def test_clamped_at_zero(self):
        """Test over-redeemed history never yields a negative ceiling."""
        eligibility = Eligibility.compute(1, 250, 1000)
        assert eligibility.max_redeemable == 0
        assert eligibility.total_already_redeemed == 1000

    def test_reward_is_a_parameter(self):
        """Test per-referral reward comes from the caller."""
        assert Eligibility.compute(4, 100, 0).total_earned == 400

    def test_rejection_message(self):
        """Test message reports all three figures."""
        message = Eligibility.compute(10, 250, 2000).rejection_message()
        assert message == (
            "You can only redeem up to ₹500. You have earned ₹2500 total "
            "and already redeemed ₹2000."
        )


class TestRedemptionPolicy:
    """Test policy construction."""

    def test_defaults(self):
        """Test default business values."""
        policy = RedemptionPolicy()
        assert policy.per_referral_reward == 250
        assert policy.min_redeem_amount == 250
        assert policy.max_attempts == 2

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"per_referral_reward": 0},
            {"min_redeem_amount": -5},
            {"max_attempts": 0},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test nonsensical parameters are rejected."""
        with pytest.raises(ValueError):
            RedemptionPolicy(**kwargs)

    def test_from_settings(self):
        """Test settings feed the policy."""
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            environment="test",
            per_referral_reward=100,
            min_redeem_amount=300,
            redemption_max_attempts=3,
            lock_retry_delay=0.5,
        )
        policy = RedemptionPolicy.from_settings(settings)
        assert policy == RedemptionPolicy(
            per_referral_reward=100,
            min_redeem_amount=300,
            max_attempts=3,
            retry_delay=0.5,
        )


class TestSettings:
    """Test settings validation."""

    def test_log_level_normalized(self):
        """Test log level is upper-cased."""
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            environment="test",
            log_level="debug",
        )
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test unknown log level is rejected."""
        with pytest.raises(ValidationError):
            Settings(
                database_url="sqlite+aiosqlite:///:memory:",
                environment="test",
                log_level="LOUD",
            )

    def test_production_rejects_sqlite(self):
        """Test production requires a real database."""
        with pytest.raises(ValidationError):
            Settings(
                database_url="sqlite+aiosqlite:///:memory:",
                environment="production",
            )

    def test_production_rejects_debug(self):
        """Test DEBUG is not allowed in production."""
        with pytest.raises(ValidationError):
            Settings(
                database_url="postgresql+asyncpg://u:p@localhost/wallet",
                environment="production",
                debug=True,
            )

    def test_reward_must_be_positive(self):
        """Test zero reward is rejected."""
        with pytest.raises(ValidationError):
            Settings(
                database_url="sqlite+aiosqlite:///:memory:",
                environment="test",
                per_referral_reward=0,
            )
