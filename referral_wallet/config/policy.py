"""
Redemption policy.

Business parameters handed to engine components at construction time.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from referral_wallet.config.business_constants import (
    LOCK_RETRY_DELAY_SECONDS,
    MIN_REDEEM_AMOUNT,
    PER_REFERRAL_REWARD,
    REDEMPTION_MAX_ATTEMPTS,
)

if TYPE_CHECKING:
    from referral_wallet.config.settings import Settings


@dataclass(frozen=True)
class RedemptionPolicy:
    """
    Reward and redemption parameters.

    Attributes:
        per_referral_reward: Wallet credit per successful referral
        min_redeem_amount: Smallest amount accepted per redemption
        max_attempts: Attempts before a lock conflict is surfaced
        retry_delay: Base backoff delay in seconds
    """

    per_referral_reward: int = PER_REFERRAL_REWARD
    min_redeem_amount: int = MIN_REDEEM_AMOUNT
    max_attempts: int = REDEMPTION_MAX_ATTEMPTS
    retry_delay: float = LOCK_RETRY_DELAY_SECONDS

    def __post_init__(self) -> None:
        if self.per_referral_reward <= 0:
            raise ValueError("per_referral_reward must be positive")
        if self.min_redeem_amount <= 0:
            raise ValueError("min_redeem_amount must be positive")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RedemptionPolicy":
        """Build policy from application settings."""
        return cls(
            per_referral_reward=settings.per_referral_reward,
            min_redeem_amount=settings.min_redeem_amount,
            max_attempts=settings.redemption_max_attempts,
            retry_delay=settings.lock_retry_delay,
        )
