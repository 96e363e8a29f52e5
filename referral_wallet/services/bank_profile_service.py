"""
Bank profile service.

Stores one set of bank details per user and exposes the pure format
check reused by the redemption flow.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.models.bank_profile import BankProfile
from referral_wallet.repositories.bank_profile_repository import (
    BankProfileRepository,
)
from referral_wallet.repositories.user_repository import UserRepository
from referral_wallet.schemas.bank import (
    BankDetailsInput,
    BankProfileUpdate,
    BankProfileWithUser,
)
from referral_wallet.services.base_service import (
    BaseService,
    ServiceResult,
    transaction,
)
from referral_wallet.utils.db_decorators import retry_on_conflict
from referral_wallet.utils.exceptions import ErrorKind
from referral_wallet.validators.bank_details import (
    ValidationResult,
    validate_bank_details,
)


class BankProfileService(BaseService):
    """Bank profile store."""

    def __init__(
        self, session: AsyncSession, policy: RedemptionPolicy | None = None
    ) -> None:
        """
        Initialize bank profile service.

        Args:
            session: Async database session
            policy: Redemption parameters
        """
        super().__init__(session, policy)
        self.bank_repo = BankProfileRepository(session)
        self.user_repo = UserRepository(session)

    @staticmethod
    def validate_format(details: BankDetailsInput) -> ValidationResult:
        """Check bank field formats without touching storage."""
        return validate_bank_details(details)

    async def apply_upsert(
        self, user_id: int, update: BankProfileUpdate
    ) -> BankProfile:
        """
        Create or overwrite the user's bank profile.

        Runs inside the caller's transaction; does not commit. The
        caller must already hold the user row lock.

        Args:
            user_id: Owner
            update: Fields to write

        Returns:
            Stored bank profile
        """
        columns = update.to_columns()
        profile = await self.bank_repo.get_by_user(user_id, for_update=True)
        if profile:
            profile = await self.bank_repo.update(profile.id, **columns)
            self.logger.debug(
                "Bank profile updated", extra={"user_id": user_id}
            )
        else:
            profile = await self.bank_repo.create(user_id=user_id, **columns)
            self.logger.info(
                "Bank profile created", extra={"user_id": user_id}
            )
        return profile

    async def load_view(self, user_id: int) -> BankProfileWithUser | None:
        """
        Read the profile joined with its owner.

        Args:
            user_id: Owner

        Returns:
            Profile view or None
        """
        profile = await self.bank_repo.get_with_user(user_id)
        if not profile:
            return None
        return BankProfileWithUser.model_validate(profile)

    async def get(self, user_id: int) -> BankProfileWithUser | None:
        """Get a user's bank profile with user summary."""
        return await self.load_view(user_id)

    async def exists(self, user_id: int) -> bool:
        """Check whether a user has saved bank details."""
        return await self.bank_repo.exists(user_id=user_id)

    async def list_all(self) -> list[BankProfileWithUser]:
        """All bank profiles with their users, oldest first."""
        profiles = await self.bank_repo.get_all_with_users()
        return [BankProfileWithUser.model_validate(p) for p in profiles]

    @retry_on_conflict
    @transaction
    async def upsert(
        self, user_id: int, details: BankDetailsInput
    ) -> ServiceResult[BankProfileWithUser]:
        """
        Save bank details without redeeming anything.

        Args:
            user_id: Owner
            details: Bank fields

        Returns:
            ServiceResult with the stored profile view
        """
        validation = self.validate_format(details)
        if not validation.is_valid:
            return ServiceResult.fail(
                ErrorKind.BAD_REQUEST,
                validation.error_message,
                errors=validation.errors,
            )

        user = await self.user_repo.get_for_update(user_id)
        if not user:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "User not found")

        await self.apply_upsert(
            user_id, BankProfileUpdate(**details.model_dump())
        )
        return ServiceResult.ok(await self.load_view(user_id))

    @transaction
    async def delete(self, user_id: int) -> ServiceResult[None]:
        """
        Delete a user's bank profile.

        Args:
            user_id: Owner

        Returns:
            ServiceResult; NOT_FOUND if no profile exists
        """
        if not await self.bank_repo.delete_by_user(user_id):
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND, "Bank details not found for this user"
            )
        self.logger.info("Bank profile deleted", extra={"user_id": user_id})
        return ServiceResult.ok()
