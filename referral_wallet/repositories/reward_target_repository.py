"""
RewardTarget repository.

Data access layer for RewardTarget model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.models.reward_target import RewardTarget
from referral_wallet.repositories.base import BaseRepository


class RewardTargetRepository(BaseRepository[RewardTarget]):
    """Repository for reward tiers."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(RewardTarget, session)

    async def get_all_ordered(self) -> list[RewardTarget]:
        """
        Get all reward tiers ordered by threshold.

        Returns:
            List of reward targets, lowest threshold first
        """
        stmt = select(RewardTarget).order_by(
            RewardTarget.referral_count.asc(), RewardTarget.id.asc()
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
