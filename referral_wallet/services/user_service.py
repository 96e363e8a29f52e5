"""
User service.

Registration and removal of members. Registration with a referrer code
runs referral accrual in the same transaction.
"""

import secrets

from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.config.business_constants import (
    REFERRAL_CODE_ALPHABET,
    REFERRAL_CODE_LENGTH,
)
from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.repositories.user_repository import UserRepository
from referral_wallet.schemas.bank import UserSummary
from referral_wallet.schemas.user import UserRegistration
from referral_wallet.services.base_service import (
    BaseService,
    ServiceResult,
    transaction,
)
from referral_wallet.services.referral.accrual import ReferralAccrualService
from referral_wallet.utils.db_decorators import retry_on_conflict
from referral_wallet.utils.exceptions import ErrorKind


def generate_referral_code() -> str:
    """Random alphanumeric referral code."""
    return "".join(
        secrets.choice(REFERRAL_CODE_ALPHABET)
        for _ in range(REFERRAL_CODE_LENGTH)
    )


class UserService(BaseService):
    """User registration and lookup."""

    def __init__(
        self, session: AsyncSession, policy: RedemptionPolicy | None = None
    ) -> None:
        """
        Initialize user service.

        Args:
            session: Async database session
            policy: Reward parameters for referral accrual
        """
        super().__init__(session, policy)
        self.user_repo = UserRepository(session)
        self.accrual = ReferralAccrualService(session, self.policy)

    async def _unique_referral_code(self) -> str:
        """Referral code not held by any user."""
        code = generate_referral_code()
        while await self.user_repo.exists(referral_code=code):
            code = generate_referral_code()
        return code

    async def get_user(self, user_id: int) -> UserSummary | None:
        """Get user summary by ID."""
        user = await self.user_repo.get_by_id(user_id)
        return UserSummary.model_validate(user) if user else None

    @retry_on_conflict
    @transaction
    async def register_user(
        self, data: UserRegistration
    ) -> ServiceResult[UserSummary]:
        """
        Register a user and credit the referrer, if any.

        Args:
            data: Registration fields

        Returns:
            ServiceResult with the new user; NOT_FOUND for an unknown
            referral code, BAD_REQUEST if email or mobile is taken
        """
        if await self.user_repo.exists(
            email=data.email
        ) or await self.user_repo.exists(mobile_number=data.mobile_number):
            return ServiceResult.fail(
                ErrorKind.BAD_REQUEST,
                "User already registered with this email or mobile number",
            )

        referrer_code = data.referral_code or None
        if referrer_code and not await self.accrual.credit_referrer(
            referrer_code
        ):
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND, f"Invalid referral code: {referrer_code}"
            )

        user = await self.user_repo.create(
            name=data.name,
            email=data.email,
            mobile_number=data.mobile_number,
            referral_code=await self._unique_referral_code(),
            referred_by_code=referrer_code,
        )

        self.logger.info(
            "User registered",
            extra={"user_id": user.id, "referred_by": referrer_code},
        )
        return ServiceResult.ok(UserSummary.model_validate(user))

    @transaction
    async def delete_user(self, user_id: int) -> ServiceResult[None]:
        """
        Delete a user and their bank profile.

        Redeem history and payouts are kept.

        Args:
            user_id: User ID

        Returns:
            ServiceResult; NOT_FOUND for an unknown user
        """
        user = await self.user_repo.get_for_update(user_id)
        if not user:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "User not found")

        await self.user_repo.delete_user(user)
        self.logger.info("User deleted", extra={"user_id": user_id})
        return ServiceResult.ok()
