"""Redemption payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictInt

from referral_wallet.models.enums import RedeemStatus
from referral_wallet.schemas.bank import BankSnapshot


class RedeemAmount(BaseModel):
    """
    Amount a user asks to redeem.

    Whole rupees only: floats and numeric strings are rejected rather
    than truncated. Sign and minimum are checked by the request handler.
    """

    redeem_amount: StrictInt | None = None

    model_config = ConfigDict(extra="forbid")


class Eligibility(BaseModel):
    """Redemption ceiling of a user at one moment."""

    total_earned: int
    total_already_redeemed: int
    max_redeemable: int

    @classmethod
    def compute(
        cls, referral_count: int, per_referral_reward: int, total_redeemed: int
    ) -> "Eligibility":
        """
        Lifetime earnings minus lifetime redemptions, clamped at zero.

        Args:
            referral_count: Lifetime referral count
            per_referral_reward: Credit per referral
            total_redeemed: Sum of committed redemptions

        Returns:
            Eligibility figures
        """
        total_earned = referral_count * per_referral_reward
        return cls(
            total_earned=total_earned,
            total_already_redeemed=total_redeemed,
            max_redeemable=max(0, total_earned - total_redeemed),
        )

    def rejection_message(self) -> str:
        """User-facing explanation of an over-limit request."""
        return (
            f"You can only redeem up to ₹{self.max_redeemable}. "
            f"You have earned ₹{self.total_earned} total and already "
            f"redeemed ₹{self.total_already_redeemed}."
        )


class RedeemHistoryItem(BaseModel):
    """Redeem history entry with its bank snapshot parsed back."""

    id: int
    user_id: int
    redeem_amount: int
    status: RedeemStatus
    bank_details: BankSnapshot | None = None
    redeemed_at: datetime
    deposited_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
