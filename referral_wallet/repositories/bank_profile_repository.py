"""
BankProfile repository.

Data access layer for BankProfile model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from referral_wallet.models.bank_profile import BankProfile
from referral_wallet.repositories.base import BaseRepository


class BankProfileRepository(BaseRepository[BankProfile]):
    """Repository for bank profile operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(BankProfile, session)

    async def get_by_user(
        self, user_id: int, for_update: bool = False
    ) -> BankProfile | None:
        """
        Get a user's bank profile.

        Args:
            user_id: User ID
            for_update: Lock the row until the transaction ends

        Returns:
            BankProfile or None
        """
        stmt = select(BankProfile).where(BankProfile.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(
            stmt.execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_with_user(self, user_id: int) -> BankProfile | None:
        """
        Get a user's bank profile with the user eager loaded.

        Args:
            user_id: User ID

        Returns:
            BankProfile with user or None
        """
        stmt = (
            select(BankProfile)
            .options(selectinload(BankProfile.user))
            .where(BankProfile.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all_with_users(self) -> list[BankProfile]:
        """
        Get all bank profiles with their users, oldest first.

        Returns:
            List of bank profiles
        """
        stmt = (
            select(BankProfile)
            .options(selectinload(BankProfile.user))
            .order_by(BankProfile.created_at.asc(), BankProfile.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_user(self, user_id: int) -> bool:
        """
        Delete a user's bank profile.

        Args:
            user_id: User ID

        Returns:
            True if a profile was deleted
        """
        profile = await self.get_by_user(user_id)
        if not profile:
            return False
        await self.session.delete(profile)
        await self.session.flush()
        return True
