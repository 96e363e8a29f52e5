"""Bank profile payloads."""

import json
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from referral_wallet.config.business_constants import NOT_AVAILABLE
from referral_wallet.models.enums import RedeemStatus


def _or_not_available(value: str | None) -> str:
    """Placeholder only for a missing key; empty strings render as-is."""
    return NOT_AVAILABLE if value is None else value


class BankDetailsInput(BaseModel):
    """Bank fields submitted by a user."""

    account_number: str
    ifsc_code: str
    bank_name: str
    account_holder_name: str

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    def snapshot(self) -> "BankSnapshot":
        """Snapshot of exactly these fields for the redeem history."""
        return BankSnapshot(
            bank_name=self.bank_name,
            account_number=self.account_number,
            ifsc_code=self.ifsc_code,
            account_holder_name=self.account_holder_name,
        )


class BankProfileUpdate(BankDetailsInput):
    """Full set of writable bank profile fields."""

    redeem_amount: int | None = Field(default=None, ge=0)
    redeem_status: RedeemStatus | None = None

    def to_columns(self) -> dict:
        """Column values to write, skipping unset redemption fields."""
        data = self.model_dump(exclude_none=True)
        if "redeem_status" in data:
            data["redeem_status"] = data["redeem_status"].value
        return data


class BankSnapshot(BaseModel):
    """
    Bank fields frozen into a redeem history entry.

    Serialized with camelCase keys, the layout stored rows already use.
    Missing keys in stored JSON parse to None.
    """

    bank_name: str | None = None
    account_number: str | None = None
    ifsc_code: str | None = None
    account_holder_name: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    def to_json(self) -> str:
        """JSON text for the bank_details column."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str | None) -> "BankSnapshot | None":
        """
        Parse a stored snapshot.

        Raises:
            ValueError: If the text is not a JSON object
        """
        if not raw:
            return None
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("Bank snapshot is not a JSON object")
        return cls.model_validate(data)

    def render(self) -> str:
        """Human-readable line for the payout record."""
        return (
            f"{_or_not_available(self.bank_name)} - "
            f"A/C: {_or_not_available(self.account_number)} - "
            f"IFSC: {_or_not_available(self.ifsc_code)}"
        )


class UserSummary(BaseModel):
    """User fields returned alongside a bank profile."""

    id: int
    name: str
    email: str
    mobile_number: str
    referral_code: str
    referred_by_code: str | None = None
    referral_count: int
    wallet_balance: int
    payment_status: str
    reward: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BankProfileWithUser(BaseModel):
    """Bank profile joined with its owner."""

    id: int
    account_number: str
    ifsc_code: str
    bank_name: str
    account_holder_name: str
    redeem_amount: int
    redeem_status: RedeemStatus
    created_at: datetime
    updated_at: datetime
    user: UserSummary

    model_config = ConfigDict(from_attributes=True)
