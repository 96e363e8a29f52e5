"""
Reward targets.

Admin-managed reward tiers unlocked by a user's lifetime referral count.
Also carries the admin approval of the reward a user was granted.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.models.enums import RewardStatus
from referral_wallet.repositories.reward_target_repository import (
    RewardTargetRepository,
)
from referral_wallet.repositories.user_repository import UserRepository
from referral_wallet.schemas.bank import UserSummary
from referral_wallet.schemas.reward import (
    RewardApproval,
    RewardProgress,
    RewardTargetCreate,
    RewardTargetUpdate,
    RewardTargetView,
)
from referral_wallet.services.base_service import (
    BaseService,
    ServiceResult,
    transaction,
)
from referral_wallet.utils.exceptions import ErrorKind


class RewardTargetService(BaseService):
    """CRUD for reward tiers and per-user progress."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize reward target service."""
        super().__init__(session)
        self.target_repo = RewardTargetRepository(session)
        self.user_repo = UserRepository(session)

    async def list_targets(self) -> list[RewardTargetView]:
        """All tiers, lowest threshold first."""
        targets = await self.target_repo.get_all_ordered()
        return [RewardTargetView.model_validate(t) for t in targets]

    @transaction
    async def add_target(
        self, data: RewardTargetCreate
    ) -> ServiceResult[RewardTargetView]:
        """
        Create a reward tier.

        Args:
            data: Threshold and reward label

        Returns:
            ServiceResult with the created tier
        """
        target = await self.target_repo.create(**data.model_dump())
        self.logger.info(
            "Reward target added",
            extra={"target_id": target.id, "referral_count": target.referral_count},
        )
        return ServiceResult.ok(RewardTargetView.model_validate(target))

    @transaction
    async def update_target(
        self, target_id: int, data: RewardTargetUpdate
    ) -> ServiceResult[RewardTargetView]:
        """
        Update a reward tier.

        Args:
            target_id: Tier ID
            data: Fields to change

        Returns:
            ServiceResult with the updated tier
        """
        changes = data.model_dump(exclude_none=True)
        if not changes:
            return ServiceResult.fail(
                ErrorKind.BAD_REQUEST, "No fields to update"
            )

        target = await self.target_repo.update(target_id, **changes)
        if not target:
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND, "Reward target not found"
            )
        self.logger.info(
            "Reward target updated",
            extra={"target_id": target_id, "fields": sorted(changes)},
        )
        return ServiceResult.ok(RewardTargetView.model_validate(target))

    @transaction
    async def delete_target(self, target_id: int) -> ServiceResult[None]:
        """Delete a reward tier."""
        if not await self.target_repo.delete(target_id):
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND, "Reward target not found"
            )
        self.logger.info("Reward target deleted", extra={"target_id": target_id})
        return ServiceResult.ok()

    async def get_progress(self, user_id: int) -> ServiceResult[RewardProgress]:
        """
        Tiers a user has unlocked and the distance to the next one.

        Args:
            user_id: User ID

        Returns:
            ServiceResult with RewardProgress; NOT_FOUND for unknown user
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "User not found")

        targets = await self.list_targets()
        unlocked = [
            t for t in targets if t.referral_count <= user.referral_count
        ]
        upcoming = [
            t for t in targets if t.referral_count > user.referral_count
        ]
        next_target = upcoming[0] if upcoming else None

        return ServiceResult.ok(
            RewardProgress(
                user_id=user.id,
                referral_count=user.referral_count,
                unlocked=unlocked,
                next_target=next_target,
                referrals_needed=(
                    next_target.referral_count - user.referral_count
                    if next_target
                    else 0
                ),
            )
        )

    @transaction
    async def approve_user_reward(
        self, user_id: int, data: RewardApproval
    ) -> ServiceResult[UserSummary]:
        """
        Record an admin decision on a user's reward.

        "approved" stores the approved marker. "delivered" turns an
        approved reward into "delivered"; without a prior approval the
        given reward (or "delivered") is stored. Any other status stores
        the reward as given.

        Args:
            user_id: User ID
            data: Reward label and status

        Returns:
            ServiceResult with the updated user summary
        """
        user = await self.user_repo.get_for_update(user_id)
        if not user:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "User not found")

        status = (data.status or "").lower()
        if status == RewardStatus.APPROVED:
            value = RewardStatus.APPROVED.value
        elif status == RewardStatus.DELIVERED:
            if user.reward == RewardStatus.APPROVED:
                value = RewardStatus.DELIVERED.value
            else:
                value = data.reward or RewardStatus.DELIVERED.value
        else:
            value = data.reward

        if not value:
            return ServiceResult.fail(
                ErrorKind.BAD_REQUEST, "Reward is required"
            )

        previous = user.reward
        user.reward = value
        await self.session.flush()
        self.logger.info(
            "Reward status updated for user",
            extra={"user_id": user_id, "from": previous, "to": value},
        )
        return ServiceResult.ok(UserSummary.model_validate(user))
