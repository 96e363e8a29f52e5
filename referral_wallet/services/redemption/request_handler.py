"""
Redemption request handling module.

Handles redemption requests: validation, eligibility check against the
lifetime ledger, bank profile upsert, history entry and wallet debit,
all in one transaction scoped to the user's row lock.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.models.enums import RedeemStatus
from referral_wallet.models.user import User
from referral_wallet.repositories.bank_profile_repository import (
    BankProfileRepository,
)
from referral_wallet.repositories.redeem_history_repository import (
    RedeemHistoryRepository,
)
from referral_wallet.repositories.user_repository import UserRepository
from referral_wallet.schemas.bank import (
    BankDetailsInput,
    BankProfileUpdate,
    BankProfileWithUser,
    BankSnapshot,
)
from referral_wallet.services.bank_profile_service import BankProfileService
from referral_wallet.services.base_service import (
    BaseService,
    ServiceResult,
    transaction,
)
from referral_wallet.services.redemption.eligibility import (
    RedemptionEligibilityCalculator,
)
from referral_wallet.utils.db_decorators import retry_on_conflict
from referral_wallet.utils.exceptions import ErrorKind


class RedemptionRequestHandler(BaseService):
    """Handles redemption request creation and validation."""

    def __init__(
        self, session: AsyncSession, policy: RedemptionPolicy | None = None
    ) -> None:
        """
        Initialize redemption request handler.

        Args:
            session: Database session
            policy: Minimum amount and reward parameters
        """
        super().__init__(session, policy)
        self.user_repo = UserRepository(session)
        self.bank_repo = BankProfileRepository(session)
        self.history_repo = RedeemHistoryRepository(session)
        self.bank_profiles = BankProfileService(session, self.policy)
        self.eligibility = RedemptionEligibilityCalculator(
            session, self.policy
        )

    def _check_amount(self, amount: int) -> ServiceResult | None:
        """Reject amounts below the minimum."""
        if amount < self.policy.min_redeem_amount:
            return ServiceResult.fail(
                ErrorKind.BAD_REQUEST,
                f"Minimum redeem amount is ₹{self.policy.min_redeem_amount}",
                min_redeem_amount=self.policy.min_redeem_amount,
            )
        return None

    async def _check_ceiling(self, user: User, amount: int) -> ServiceResult | None:
        """Reject amounts above the user's eligibility ceiling."""
        eligibility = await self.eligibility.compute(user)
        if amount > eligibility.max_redeemable:
            self.logger.info(
                "Redemption above ceiling rejected",
                extra={
                    "user_id": user.id,
                    "amount": amount,
                    "max_redeemable": eligibility.max_redeemable,
                },
            )
            return ServiceResult.fail(
                ErrorKind.BAD_REQUEST,
                eligibility.rejection_message(),
                **eligibility.model_dump(),
            )
        return None

    async def _record_redemption(
        self, user: User, amount: int, snapshot: BankSnapshot
    ) -> None:
        """
        Append the history entry and debit the wallet.

        Args:
            user: Locked user
            amount: Redeemed amount
            snapshot: Bank fields to freeze into the entry
        """
        entry = await self.history_repo.create(
            user_id=user.id,
            redeem_amount=amount,
            status=RedeemStatus.PROCESSING.value,
            bank_details=snapshot.to_json(),
        )

        balance_before = user.wallet_balance
        user.wallet_balance = max(0, user.wallet_balance - amount)
        user.referral_count_at_last_redeem = user.referral_count
        await self.session.flush()

        self.logger.info(
            "Redemption recorded",
            extra={
                "user_id": user.id,
                "history_id": entry.id,
                "amount": amount,
                "balance_before": balance_before,
                "balance_after": user.wallet_balance,
            },
        )

    @retry_on_conflict
    @transaction
    async def request_redemption(
        self,
        user_id: int,
        details: BankDetailsInput,
        redeem_amount: int | None = None,
    ) -> ServiceResult[BankProfileWithUser]:
        """
        Save bank details and optionally redeem wallet credit.

        Without a positive redeem_amount only the bank fields are saved:
        no history entry and no wallet debit.

        Args:
            user_id: User ID
            details: Bank fields submitted with this request
            redeem_amount: Amount to redeem

        Returns:
            ServiceResult with the refreshed profile view
        """
        if redeem_amount is not None and redeem_amount < 0:
            return ServiceResult.fail(
                ErrorKind.BAD_REQUEST, "Redeem amount cannot be negative"
            )
        redeeming = bool(redeem_amount)

        if redeeming:
            rejected = self._check_amount(redeem_amount)
            if rejected:
                return rejected

        validation = self.bank_profiles.validate_format(details)
        if not validation.is_valid:
            return ServiceResult.fail(
                ErrorKind.BAD_REQUEST,
                validation.error_message,
                errors=validation.errors,
            )

        # Row lock serializes concurrent requests of the same user
        user = await self.user_repo.get_for_update(user_id)
        if not user:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "User not found")

        if redeeming:
            rejected = await self._check_ceiling(user, redeem_amount)
            if rejected:
                return rejected

        update = BankProfileUpdate(
            **details.model_dump(),
            redeem_amount=redeem_amount if redeeming else None,
            redeem_status=RedeemStatus.PROCESSING if redeeming else None,
        )
        await self.bank_profiles.apply_upsert(user_id, update)

        if redeeming:
            await self._record_redemption(
                user, redeem_amount, details.snapshot()
            )

        return ServiceResult.ok(await self.bank_profiles.load_view(user_id))

    @retry_on_conflict
    @transaction
    async def redeem_from_saved_profile(
        self, user_id: int, redeem_amount: int
    ) -> ServiceResult[BankProfileWithUser]:
        """
        Redeem using the bank details already on file.

        The stored profile is the snapshot source for the history entry.

        Args:
            user_id: User ID
            redeem_amount: Amount to redeem

        Returns:
            ServiceResult with the refreshed profile view
        """
        rejected = self._check_amount(redeem_amount)
        if rejected:
            return rejected

        user = await self.user_repo.get_for_update(user_id)
        if not user:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "User not found")

        profile = await self.bank_repo.get_by_user(user_id, for_update=True)
        if not profile:
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND, "Bank details not found for this user"
            )

        rejected = await self._check_ceiling(user, redeem_amount)
        if rejected:
            return rejected

        await self.bank_repo.update(
            profile.id,
            redeem_amount=redeem_amount,
            redeem_status=RedeemStatus.PROCESSING.value,
        )
        snapshot = BankSnapshot(
            bank_name=profile.bank_name,
            account_number=profile.account_number,
            ifsc_code=profile.ifsc_code,
            account_holder_name=profile.account_holder_name,
        )
        await self._record_redemption(user, redeem_amount, snapshot)

        return ServiceResult.ok(await self.bank_profiles.load_view(user_id))
