"""Payout payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from referral_wallet.models.enums import PayoutStatus


class PayoutView(BaseModel):
    """Payout record as returned to callers."""

    id: int
    user_id: int
    payout_id: str
    amount: int
    method: str
    status: PayoutStatus
    description: str
    bank_details: str
    transaction_id: str | None = None
    date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PayoutStats(BaseModel):
    """Payout totals of one user, split by status."""

    total_payouts: int = 0
    total_amount: int = 0
    pending_amount: int = 0
    completed_amount: int = 0
    processing_amount: int = 0
    failed_amount: int = 0
