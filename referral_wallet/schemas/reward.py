"""Reward tier payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RewardTargetCreate(BaseModel):
    """New reward tier."""

    referral_count: int = Field(gt=0)
    reward: str = Field(min_length=1, max_length=255)
    target: str | None = Field(default=None, max_length=255)

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class RewardTargetUpdate(BaseModel):
    """Partial update of a reward tier."""

    referral_count: int | None = Field(default=None, gt=0)
    reward: str | None = Field(default=None, min_length=1, max_length=255)
    target: str | None = Field(default=None, max_length=255)

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class RewardTargetView(BaseModel):
    """Reward tier as returned to callers."""

    id: int
    referral_count: int
    reward: str
    target: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RewardProgress(BaseModel):
    """Tiers unlocked by a user and the distance to the next one."""

    user_id: int
    referral_count: int
    unlocked: list[RewardTargetView]
    next_target: RewardTargetView | None = None
    referrals_needed: int = 0


class RewardApproval(BaseModel):
    """
    Admin decision on a user's reward.

    `status` of "approved" or "delivered" (any case) drives the label;
    any other status stores `reward` as given.
    """

    reward: str | None = Field(default=None, max_length=255)
    status: str | None = Field(default=None, max_length=32)

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)
