"""
RedeemHistory repository.

Data access layer for the redemption audit ledger.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.models.enums import COMMITTED_REDEEM_STATUSES, RedeemStatus
from referral_wallet.models.redeem_history import RedeemHistory
from referral_wallet.repositories.base import BaseRepository


class RedeemHistoryRepository(BaseRepository[RedeemHistory]):
    """Repository for redeem history entries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(RedeemHistory, session)

    async def get_total_redeemed(self, user_id: int) -> int:
        """
        Sum of amounts committed against the user's ceiling.

        Processing and deposited entries count; failed entries were
        credited back and do not.

        Args:
            user_id: User ID

        Returns:
            Total already redeemed
        """
        stmt = select(
            func.coalesce(func.sum(RedeemHistory.redeem_amount), 0)
        ).where(
            RedeemHistory.user_id == user_id,
            RedeemHistory.status.in_(COMMITTED_REDEEM_STATUSES),
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def get_latest_processing(
        self, user_id: int
    ) -> RedeemHistory | None:
        """
        Get the newest processing entry of a user, locked for update.

        Ties on redeemed_at are broken by id.

        Args:
            user_id: User ID

        Returns:
            Latest processing entry or None
        """
        stmt = (
            select(RedeemHistory)
            .where(
                RedeemHistory.user_id == user_id,
                RedeemHistory.status == RedeemStatus.PROCESSING.value,
            )
            .order_by(
                RedeemHistory.redeemed_at.desc(), RedeemHistory.id.desc()
            )
            .limit(1)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user(self, user_id: int) -> list[RedeemHistory]:
        """
        Get a user's full history, oldest first.

        Args:
            user_id: User ID

        Returns:
            List of history entries
        """
        stmt = (
            select(RedeemHistory)
            .where(RedeemHistory.user_id == user_id)
            .order_by(
                RedeemHistory.redeemed_at.asc(), RedeemHistory.id.asc()
            )
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
