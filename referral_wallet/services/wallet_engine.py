"""
Wallet engine.

Public entry point of the referral wallet. Each operation opens its own
session, runs one service call and converts a failed ServiceResult into
the matching WalletError.
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from referral_wallet.config.policy import RedemptionPolicy
from referral_wallet.database import create_engine_from_settings, create_session_maker
from referral_wallet.schemas.bank import BankDetailsInput, BankProfileWithUser, UserSummary
from referral_wallet.schemas.payout import PayoutStats, PayoutView
from referral_wallet.schemas.redemption import (
    Eligibility,
    RedeemAmount,
    RedeemHistoryItem,
)
from referral_wallet.schemas.reward import (
    RewardApproval,
    RewardProgress,
    RewardTargetCreate,
    RewardTargetUpdate,
    RewardTargetView,
)
from referral_wallet.schemas.user import UserRegistration
from referral_wallet.services.bank_profile_service import BankProfileService
from referral_wallet.services.base_service import ServiceResult
from referral_wallet.services.payout_service import PayoutService
from referral_wallet.services.redemption import (
    RedemptionEligibilityCalculator,
    RedemptionLifecycleHandler,
    RedemptionQueryService,
    RedemptionRequestHandler,
)
from referral_wallet.services.referral import (
    ReferralAccrualService,
    RewardTargetService,
)
from referral_wallet.services.user_service import UserService
from referral_wallet.utils.exceptions import BadRequestError, InternalError
from referral_wallet.validators.bank_details import ValidationResult

if TYPE_CHECKING:
    from referral_wallet.config.settings import Settings


T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def _parse(model: type[M], data: M | dict[str, Any]) -> M:
    """
    Coerce an inbound payload into its model.

    Raises:
        BadRequestError: If the payload has unknown or invalid fields
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise BadRequestError(
            "Invalid request payload",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


class WalletEngine:
    """
    Referral wallet engine.

    Holds only the session factory and the policy; every call re-reads
    state from the database.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        policy: RedemptionPolicy | None = None,
        engine: AsyncEngine | None = None,
    ) -> None:
        """
        Initialize wallet engine.

        Args:
            session_factory: Factory for per-operation sessions
            policy: Reward and redemption parameters
            engine: Engine to dispose on close, when owned
        """
        self.session_factory = session_factory
        self.policy = policy or RedemptionPolicy()
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: "Settings") -> "WalletEngine":
        """Build engine, session factory and policy from settings."""
        engine = create_engine_from_settings(settings)
        return cls(
            create_session_maker(engine),
            RedemptionPolicy.from_settings(settings),
            engine=engine,
        )

    async def close(self) -> None:
        """Dispose the owned database engine."""
        if self._engine is not None:
            await self._engine.dispose()

    async def _run(
        self, operation: str, call: Callable[[AsyncSession], Awaitable[Any]]
    ) -> Any:
        """
        Run one operation in its own session.

        ServiceResult values are unwrapped; storage errors that escaped
        the services become InternalError.
        """
        async with self.session_factory() as session:
            try:
                result = await call(session)
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    f"Storage failure in {operation}",
                    extra={"operation": operation, "error": str(e)},
                    exc_info=True,
                )
                raise InternalError(f"Storage failure in {operation}") from e

        if isinstance(result, ServiceResult):
            return result.unwrap()
        return result

    # Referral accrual

    async def accrue_referral(self, referrer_code: str) -> None:
        """
        Credit one referral to the owner of a referral code.

        Raises:
            NotFoundError: Unknown referral code
        """
        await self._run(
            "accrue_referral",
            lambda s: ReferralAccrualService(s, self.policy).accrue_referral(
                referrer_code
            ),
        )

    # Users

    async def register_user(
        self, data: UserRegistration | dict[str, Any]
    ) -> UserSummary:
        """
        Register a user, crediting the referrer when a code is given.

        Raises:
            BadRequestError: Invalid fields or duplicate email/mobile
            NotFoundError: Unknown referral code
        """
        registration = _parse(UserRegistration, data)
        return await self._run(
            "register_user",
            lambda s: UserService(s, self.policy).register_user(registration),
        )

    async def get_user(self, user_id: int) -> UserSummary | None:
        """Get user summary."""
        return await self._run(
            "get_user", lambda s: UserService(s, self.policy).get_user(user_id)
        )

    async def delete_user(self, user_id: int) -> None:
        """
        Delete a user and their bank profile; history survives.

        Raises:
            NotFoundError: Unknown user
        """
        await self._run(
            "delete_user",
            lambda s: UserService(s, self.policy).delete_user(user_id),
        )

    # Eligibility and redemption

    async def get_eligibility(self, user_id: int) -> Eligibility:
        """
        Current redemption ceiling of a user.

        Raises:
            NotFoundError: Unknown user
        """
        return await self._run(
            "get_eligibility",
            lambda s: RedemptionEligibilityCalculator(
                s, self.policy
            ).get_eligibility(user_id),
        )

    async def request_redemption(
        self,
        user_id: int,
        bank_details: BankDetailsInput | dict[str, Any],
        redeem_amount: int | None = None,
    ) -> BankProfileWithUser:
        """
        Save bank details and redeem wallet credit when an amount is given.

        Raises:
            BadRequestError: Below minimum, fractional amount, invalid bank fields
            EligibilityExceededError: Above the eligibility ceiling
            NotFoundError: Unknown user
            ConflictError: Concurrent request kept the row locked
        """
        details = _parse(BankDetailsInput, bank_details)
        amount = _parse(RedeemAmount, {"redeem_amount": redeem_amount})
        return await self._run(
            "request_redemption",
            lambda s: RedemptionRequestHandler(
                s, self.policy
            ).request_redemption(user_id, details, amount.redeem_amount),
        )

    async def redeem_from_saved_profile(
        self, user_id: int, redeem_amount: int
    ) -> BankProfileWithUser:
        """
        Redeem using the bank details on file.

        Raises:
            BadRequestError: Below minimum or not a whole number
            EligibilityExceededError: Above the eligibility ceiling
            NotFoundError: Unknown user or no bank profile
        """
        amount = _parse(RedeemAmount, {"redeem_amount": redeem_amount})
        if amount.redeem_amount is None:
            raise BadRequestError("Redeem amount is required")
        return await self._run(
            "redeem_from_saved_profile",
            lambda s: RedemptionRequestHandler(
                s, self.policy
            ).redeem_from_saved_profile(user_id, amount.redeem_amount),
        )

    async def mark_deposited(self, user_id: int) -> BankProfileWithUser:
        """
        Mark the latest processing redemption as deposited.

        Raises:
            NotFoundError: No bank profile
            InternalError: Stored snapshot is unreadable
        """
        return await self._run(
            "mark_deposited",
            lambda s: RedemptionLifecycleHandler(
                s, self.policy
            ).mark_deposited(user_id),
        )

    async def mark_failed(
        self, user_id: int, reason: str | None = None
    ) -> BankProfileWithUser:
        """
        Fail the latest processing redemption, crediting the wallet back.

        Raises:
            NotFoundError: No bank profile
            BadRequestError: No processing redemption
        """
        return await self._run(
            "mark_failed",
            lambda s: RedemptionLifecycleHandler(
                s, self.policy
            ).mark_failed(user_id, reason),
        )

    async def get_redeem_history(self, user_id: int) -> list[RedeemHistoryItem]:
        """Redeem history, oldest first, with snapshots parsed."""
        return await self._run(
            "get_redeem_history",
            lambda s: RedemptionQueryService(
                s, self.policy
            ).get_redeem_history(user_id),
        )

    # Bank profiles

    async def get_bank_profile(
        self, user_id: int
    ) -> BankProfileWithUser | None:
        """Bank profile with user summary."""
        return await self._run(
            "get_bank_profile",
            lambda s: BankProfileService(s, self.policy).get(user_id),
        )

    async def save_bank_details(
        self, user_id: int, bank_details: BankDetailsInput | dict[str, Any]
    ) -> BankProfileWithUser:
        """
        Create or update bank details without redeeming.

        Raises:
            BadRequestError: Invalid bank fields
            NotFoundError: Unknown user
        """
        details = _parse(BankDetailsInput, bank_details)
        return await self._run(
            "save_bank_details",
            lambda s: BankProfileService(s, self.policy).upsert(
                user_id, details
            ),
        )

    async def bank_profile_exists(self, user_id: int) -> bool:
        """Whether the user has bank details on file."""
        return await self._run(
            "bank_profile_exists",
            lambda s: BankProfileService(s, self.policy).exists(user_id),
        )

    async def delete_bank_profile(self, user_id: int) -> None:
        """
        Delete a user's bank profile.

        Raises:
            NotFoundError: No bank profile
        """
        await self._run(
            "delete_bank_profile",
            lambda s: BankProfileService(s, self.policy).delete(user_id),
        )

    async def list_bank_profiles(self) -> list[BankProfileWithUser]:
        """All bank profiles, oldest first."""
        return await self._run(
            "list_bank_profiles",
            lambda s: BankProfileService(s, self.policy).list_all(),
        )

    @staticmethod
    def validate_bank_details(
        bank_details: BankDetailsInput | dict[str, Any],
    ) -> ValidationResult:
        """Format check of bank fields; no storage access."""
        return BankProfileService.validate_format(
            _parse(BankDetailsInput, bank_details)
        )

    # Payouts

    async def get_payouts(self, user_id: int) -> list[PayoutView]:
        """Payouts of a user, newest first."""
        return await self._run(
            "get_payouts", lambda s: PayoutService(s).get_payouts(user_id)
        )

    async def get_payout(self, payout_id: str) -> PayoutView | None:
        """Payout by generated id."""
        return await self._run(
            "get_payout", lambda s: PayoutService(s).get_payout(payout_id)
        )

    async def get_payout_stats(self, user_id: int) -> PayoutStats:
        """Payout totals of a user."""
        return await self._run(
            "get_payout_stats",
            lambda s: PayoutService(s).get_payout_stats(user_id),
        )

    # Reward targets

    async def add_reward_target(
        self, data: RewardTargetCreate | dict[str, Any]
    ) -> RewardTargetView:
        """Create a reward tier."""
        target = _parse(RewardTargetCreate, data)
        return await self._run(
            "add_reward_target",
            lambda s: RewardTargetService(s).add_target(target),
        )

    async def list_reward_targets(self) -> list[RewardTargetView]:
        """All reward tiers, lowest threshold first."""
        return await self._run(
            "list_reward_targets",
            lambda s: RewardTargetService(s).list_targets(),
        )

    async def update_reward_target(
        self, target_id: int, data: RewardTargetUpdate | dict[str, Any]
    ) -> RewardTargetView:
        """
        Update a reward tier.

        Raises:
            NotFoundError: Unknown tier
            BadRequestError: Empty or invalid update
        """
        changes = _parse(RewardTargetUpdate, data)
        return await self._run(
            "update_reward_target",
            lambda s: RewardTargetService(s).update_target(target_id, changes),
        )

    async def delete_reward_target(self, target_id: int) -> None:
        """
        Delete a reward tier.

        Raises:
            NotFoundError: Unknown tier
        """
        await self._run(
            "delete_reward_target",
            lambda s: RewardTargetService(s).delete_target(target_id),
        )

    async def get_reward_progress(self, user_id: int) -> RewardProgress:
        """
        Reward tiers unlocked by a user and the next one.

        Raises:
            NotFoundError: Unknown user
        """
        return await self._run(
            "get_reward_progress",
            lambda s: RewardTargetService(s).get_progress(user_id),
        )

    async def approve_user_reward(
        self, user_id: int, data: RewardApproval | dict[str, Any]
    ) -> UserSummary:
        """
        Set a user's reward label, moving it through approved and delivered.

        Raises:
            NotFoundError: Unknown user
            BadRequestError: Invalid payload
        """
        approval = _parse(RewardApproval, data)
        return await self._run(
            "approve_user_reward",
            lambda s: RewardTargetService(s).approve_user_reward(
                user_id, approval
            ),
        )
