"""
Redemption lifecycle handling module.

Moves the latest processing redemption of a user forward: to deposited
(with a payout record) or to failed (with the amount credited back).
"""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.config.business_constants import (
    PAYOUT_DESCRIPTION_REDEMPTION,
    PAYOUT_METHOD_BANK_TRANSFER,
)
from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.models.bank_profile import BankProfile
from referral_wallet.models.enums import PayoutStatus, RedeemStatus
from referral_wallet.models.payout import Payout
from referral_wallet.models.redeem_history import RedeemHistory
from referral_wallet.models.user import User
from referral_wallet.repositories.bank_profile_repository import (
    BankProfileRepository,
)
from referral_wallet.repositories.payout_repository import PayoutRepository
from referral_wallet.repositories.redeem_history_repository import (
    RedeemHistoryRepository,
)
from referral_wallet.repositories.user_repository import UserRepository
from referral_wallet.schemas.bank import BankProfileWithUser, BankSnapshot
from referral_wallet.services.bank_profile_service import BankProfileService
from referral_wallet.services.base_service import (
    BaseService,
    ServiceResult,
    transaction,
)
from referral_wallet.services.redemption.redemption_helpers import (
    generate_payout_id,
    generate_transaction_id,
)
from referral_wallet.utils.datetime_utils import utc_now
from referral_wallet.utils.db_decorators import retry_on_conflict
from referral_wallet.utils.exceptions import ErrorKind


class RedemptionLifecycleHandler(BaseService):
    """Handles status transitions of processing redemptions."""

    def __init__(
        self, session: AsyncSession, policy: RedemptionPolicy | None = None
    ) -> None:
        """
        Initialize lifecycle handler.

        Args:
            session: Database session
            policy: Retry parameters
        """
        super().__init__(session, policy)
        self.user_repo = UserRepository(session)
        self.bank_repo = BankProfileRepository(session)
        self.history_repo = RedeemHistoryRepository(session)
        self.payout_repo = PayoutRepository(session)
        self.bank_profiles = BankProfileService(session, self.policy)

    async def _lock(
        self, user_id: int
    ) -> tuple[User | None, BankProfile | None]:
        """Lock user then bank profile, in that order."""
        user = await self.user_repo.get_for_update(user_id)
        profile = await self.bank_repo.get_by_user(user_id, for_update=True)
        return user, profile

    async def _next_payout_id(self, user_id: int) -> str:
        """Payout id not used by any existing payout."""
        moment = utc_now()
        payout_id = generate_payout_id(user_id, moment)
        while await self.payout_repo.exists(payout_id=payout_id):
            moment += timedelta(milliseconds=1)
            payout_id = generate_payout_id(user_id, moment)
        return payout_id

    async def _create_payout(
        self, entry: RedeemHistory, snapshot: BankSnapshot | None
    ) -> Payout:
        """Insert the completed payout for a deposited entry."""
        snapshot = snapshot or BankSnapshot()
        now = utc_now()
        payout = await self.payout_repo.create(
            user_id=entry.user_id,
            payout_id=await self._next_payout_id(entry.user_id),
            amount=entry.redeem_amount,
            method=PAYOUT_METHOD_BANK_TRANSFER,
            status=PayoutStatus.COMPLETED.value,
            description=PAYOUT_DESCRIPTION_REDEMPTION,
            bank_details=snapshot.render(),
            transaction_id=generate_transaction_id(now),
            date=now,
        )
        self.logger.info(
            "Payout created",
            extra={
                "user_id": entry.user_id,
                "payout_id": payout.payout_id,
                "amount": payout.amount,
            },
        )
        return payout

    @retry_on_conflict
    @transaction
    async def mark_deposited(
        self, user_id: int
    ) -> ServiceResult[BankProfileWithUser]:
        """
        Mark the latest processing redemption as deposited.

        When no processing entry exists only the profile status changes
        and no payout is created.

        Args:
            user_id: User ID

        Returns:
            ServiceResult with the refreshed profile view
        """
        _, profile = await self._lock(user_id)
        if not profile:
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND, "Bank details not found for this user"
            )

        profile.redeem_status = RedeemStatus.DEPOSITED.value

        entry = await self.history_repo.get_latest_processing(user_id)
        if not entry:
            await self.session.flush()
            self.logger.info(
                "No processing redemption to deposit",
                extra={"user_id": user_id},
            )
            return ServiceResult.ok(await self.bank_profiles.load_view(user_id))

        try:
            snapshot = BankSnapshot.from_json(entry.bank_details)
        except ValueError as e:
            self.logger.error(
                "Corrupt bank snapshot in redeem history",
                extra={"user_id": user_id, "history_id": entry.id, "error": str(e)},
            )
            return ServiceResult.fail(
                ErrorKind.INTERNAL,
                f"Stored bank details of redemption {entry.id} are unreadable",
            )

        entry.status = RedeemStatus.DEPOSITED.value
        entry.deposited_at = utc_now()
        await self.session.flush()

        await self._create_payout(entry, snapshot)

        self.logger.info(
            "Redemption deposited",
            extra={
                "user_id": user_id,
                "history_id": entry.id,
                "amount": entry.redeem_amount,
            },
        )
        return ServiceResult.ok(await self.bank_profiles.load_view(user_id))

    @retry_on_conflict
    @transaction
    async def mark_failed(
        self, user_id: int, reason: str | None = None
    ) -> ServiceResult[BankProfileWithUser]:
        """
        Fail the latest processing redemption and credit the wallet back.

        Args:
            user_id: User ID
            reason: Why the payout could not be made, for the log

        Returns:
            ServiceResult with the refreshed profile view
        """
        user, profile = await self._lock(user_id)
        if not profile:
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND, "Bank details not found for this user"
            )

        entry = await self.history_repo.get_latest_processing(user_id)
        if not entry:
            return ServiceResult.fail(
                ErrorKind.BAD_REQUEST, "No processing redemption to fail"
            )

        entry.status = RedeemStatus.FAILED.value
        profile.redeem_status = RedeemStatus.FAILED.value
        user.wallet_balance += entry.redeem_amount
        await self.session.flush()

        self.logger.warning(
            "Redemption failed, amount credited back",
            extra={
                "user_id": user_id,
                "history_id": entry.id,
                "amount": entry.redeem_amount,
                "reason": reason,
            },
        )
        return ServiceResult.ok(await self.bank_profiles.load_view(user_id))
