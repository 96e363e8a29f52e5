"""
Payout service.

Read access to payout records created by deposited redemptions.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.models.enums import PayoutStatus
from referral_wallet.repositories.payout_repository import PayoutRepository
from referral_wallet.schemas.payout import PayoutStats, PayoutView
from referral_wallet.services.base_service import BaseService


class PayoutService(BaseService):
    """Payout queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize payout service."""
        super().__init__(session)
        self.payout_repo = PayoutRepository(session)

    async def get_payouts(self, user_id: int) -> list[PayoutView]:
        """Payouts of a user, newest first."""
        payouts = await self.payout_repo.get_by_user(user_id)
        return [PayoutView.model_validate(p) for p in payouts]

    async def get_payout(self, payout_id: str) -> PayoutView | None:
        """Payout by its generated id."""
        payout = await self.payout_repo.get_by_payout_id(payout_id)
        return PayoutView.model_validate(payout) if payout else None

    async def get_payout_stats(self, user_id: int) -> PayoutStats:
        """
        Payout totals of a user.

        Args:
            user_id: User ID

        Returns:
            Count and amount overall, and amount per status
        """
        by_status = await self.payout_repo.get_amounts_by_status(user_id)

        def amount(status: PayoutStatus) -> int:
            return by_status.get(status.value, (0, 0))[1]

        return PayoutStats(
            total_payouts=sum(count for count, _ in by_status.values()),
            total_amount=sum(total for _, total in by_status.values()),
            pending_amount=amount(PayoutStatus.PENDING),
            completed_amount=amount(PayoutStatus.COMPLETED),
            processing_amount=amount(PayoutStatus.PROCESSING),
            failed_amount=amount(PayoutStatus.FAILED),
        )
