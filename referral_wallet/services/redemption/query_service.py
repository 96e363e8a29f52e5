"""
Redemption query service.

Read side of the redeem history ledger.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.repositories.redeem_history_repository import (
    RedeemHistoryRepository,
)
from referral_wallet.schemas.bank import BankSnapshot
from referral_wallet.schemas.redemption import RedeemHistoryItem
from referral_wallet.services.base_service import BaseService, ServiceResult
from referral_wallet.utils.exceptions import ErrorKind


class RedemptionQueryService(BaseService):
    """Handles redeem history queries."""

    def __init__(
        self, session: AsyncSession, policy: RedemptionPolicy | None = None
    ) -> None:
        """
        Initialize query service.

        Args:
            session: Database session
            policy: Redemption parameters
        """
        super().__init__(session, policy)
        self.history_repo = RedeemHistoryRepository(session)

    async def get_redeem_history(
        self, user_id: int
    ) -> ServiceResult[list[RedeemHistoryItem]]:
        """
        Get a user's redeem history, oldest first.

        Each entry's bank snapshot is parsed back into an object, so the
        caller sees the bank fields as they were at request time.

        Args:
            user_id: User ID

        Returns:
            ServiceResult with history items; INTERNAL if a stored
            snapshot cannot be parsed
        """
        entries = await self.history_repo.get_by_user(user_id)
        items: list[RedeemHistoryItem] = []
        for entry in entries:
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
            items.append(
                RedeemHistoryItem(
                    id=entry.id,
                    user_id=entry.user_id,
                    redeem_amount=entry.redeem_amount,
                    status=entry.status,
                    bank_details=snapshot,
                    redeemed_at=entry.redeemed_at,
                    deposited_at=entry.deposited_at,
                )
            )
        return ServiceResult.ok(items)
