"""
Redemption eligibility.

Computes the lifetime redemption ceiling of a user from the referral
counter and the redeem history.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.models.user import User
from referral_wallet.repositories.redeem_history_repository import (
    RedeemHistoryRepository,
)
from referral_wallet.repositories.user_repository import UserRepository
from referral_wallet.schemas.redemption import Eligibility
from referral_wallet.services.base_service import BaseService, ServiceResult
from referral_wallet.utils.exceptions import ErrorKind


class RedemptionEligibilityCalculator(BaseService):
    """
    Lifetime-ledger eligibility.

    total_earned is referral_count * per_referral_reward; the wallet
    balance plays no part in the ceiling.
    """

    def __init__(
        self, session: AsyncSession, policy: RedemptionPolicy | None = None
    ) -> None:
        """
        Initialize calculator.

        Args:
            session: Async database session
            policy: Supplies the per-referral reward
        """
        super().__init__(session, policy)
        self.user_repo = UserRepository(session)
        self.history_repo = RedeemHistoryRepository(session)

    async def compute(self, user: User) -> Eligibility:
        """
        Eligibility of an already loaded user.

        Call with the user row locked so the history sum cannot move
        underneath the caller.

        Args:
            user: User entity

        Returns:
            Eligibility figures
        """
        total_redeemed = await self.history_repo.get_total_redeemed(user.id)
        return Eligibility.compute(
            referral_count=user.referral_count,
            per_referral_reward=self.policy.per_referral_reward,
            total_redeemed=total_redeemed,
        )

    async def get_eligibility(self, user_id: int) -> ServiceResult[Eligibility]:
        """
        Eligibility of a user by id.

        Takes a shared lock on the user row so the counter and the
        history sum are read against the same state.

        Args:
            user_id: User ID

        Returns:
            ServiceResult with Eligibility; NOT_FOUND if user is unknown
        """
        user = await self.user_repo.get_for_update(user_id, read=True)
        if not user:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "User not found")
        return ServiceResult.ok(await self.compute(user))
