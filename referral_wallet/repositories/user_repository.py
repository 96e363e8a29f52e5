"""
User repository.

Data access layer for User model.
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.models.user import User
from referral_wallet.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def get_by_referral_code(
        self, referral_code: str
    ) -> User | None:
        """
        Get user by referral code.

        Args:
            referral_code: Referral code

        Returns:
            User or None
        """
        return await self.get_by(referral_code=referral_code)

    async def get_for_update(
        self, user_id: int, read: bool = False
    ) -> User | None:
        """
        Get user with a row lock held until the transaction ends.

        Serializes wallet operations of one user: a second transaction
        asking for the same row waits for the first to commit.

        Args:
            user_id: User ID
            read: Take a shared lock (FOR SHARE) for consistent reads

        Returns:
            Locked user or None
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .with_for_update(read=read)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def increment_referral(
        self, referral_code: str, reward: int
    ) -> bool:
        """
        Credit one referral to the owner of a referral code.

        Issued as a single UPDATE so concurrent referrals to the same
        referrer never lose an increment.

        Args:
            referral_code: Referrer's code
            reward: Wallet credit for this referral

        Returns:
            True if a user with that code was credited
        """
        stmt = (
            update(User)
            .where(User.referral_code == referral_code)
            .values(
                referral_count=User.referral_count + 1,
                wallet_balance=User.wallet_balance + reward,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def delete_user(self, user: User) -> None:
        """
        Delete a user through the ORM so the bank profile cascade runs.

        Args:
            user: User to delete
        """
        await self.session.delete(user)
        await self.session.flush()
