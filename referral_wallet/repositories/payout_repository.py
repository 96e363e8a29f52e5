"""
Payout repository.

Data access layer for Payout model.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.models.payout import Payout
from referral_wallet.repositories.base import BaseRepository


class PayoutRepository(BaseRepository[Payout]):
    """Repository for payout records."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(Payout, session)

    async def get_by_payout_id(self, payout_id: str) -> Payout | None:
        """
        Get payout by its external id.

        Args:
            payout_id: Generated payout id (PAY-...)

        Returns:
            Payout or None
        """
        return await self.get_by(payout_id=payout_id)

    async def get_by_user(self, user_id: int) -> list[Payout]:
        """
        Get a user's payouts, newest first.

        Args:
            user_id: User ID

        Returns:
            List of payouts
        """
        stmt = (
            select(Payout)
            .where(Payout.user_id == user_id)
            .order_by(Payout.created_at.desc(), Payout.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_amounts_by_status(self, user_id: int) -> dict[str, tuple[int, int]]:
        """
        Get payout count and amount per status in a single query.

        Args:
            user_id: User ID

        Returns:
            Dict mapping status to (count, total amount)
        """
        stmt = (
            select(
                Payout.status,
                func.count(Payout.id).label("count"),
                func.coalesce(func.sum(Payout.amount), 0).label("amount"),
            )
            .where(Payout.user_id == user_id)
            .group_by(Payout.status)
        )
        result = await self.session.execute(stmt)
        return {
            row.status: (int(row.count), int(row.amount))
            for row in result.all()
        }
