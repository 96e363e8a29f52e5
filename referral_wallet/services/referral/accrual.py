"""
Referral accrual.

Credits a referrer's counters when a referred user registers.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.repositories.user_repository import UserRepository
from referral_wallet.services.base_service import (
    BaseService,
    ServiceResult,
    transaction,
)
from referral_wallet.utils.db_decorators import retry_on_conflict
from referral_wallet.utils.exceptions import ErrorKind


class ReferralAccrualService(BaseService):
    """Converts referral events into wallet balance."""

    def __init__(
        self, session: AsyncSession, policy: RedemptionPolicy | None = None
    ) -> None:
        """
        Initialize referral accrual service.

        Args:
            session: Async database session
            policy: Reward parameters
        """
        super().__init__(session, policy)
        self.user_repo = UserRepository(session)

    async def credit_referrer(self, referrer_code: str) -> bool:
        """
        Increment referral count and wallet of the code's owner.

        Runs inside the caller's transaction; does not commit.

        Args:
            referrer_code: Referral code of the referrer

        Returns:
            True if the code belongs to a user
        """
        if not referrer_code:
            return False

        reward = self.policy.per_referral_reward
        credited = await self.user_repo.increment_referral(
            referrer_code, reward
        )
        if credited:
            self.logger.info(
                "Referral accrued",
                extra={"referrer_code": referrer_code, "reward": reward},
            )
        else:
            self.logger.warning(
                "Referral code not found",
                extra={"referrer_code": referrer_code},
            )
        return credited

    @retry_on_conflict
    @transaction
    async def accrue_referral(self, referrer_code: str) -> ServiceResult[None]:
        """
        Record one successful referral for a referrer.

        Args:
            referrer_code: Referral code of the referrer

        Returns:
            ServiceResult; NOT_FOUND if the code is unknown
        """
        if not await self.credit_referrer(referrer_code):
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND, f"Invalid referral code: {referrer_code}"
            )
        return ServiceResult.ok()
