"""User payloads."""

from pydantic import BaseModel, ConfigDict, Field


class UserRegistration(BaseModel):
    """Fields accepted when a user registers."""

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(
        min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
    )
    mobile_number: str = Field(pattern=r"^\+?\d{10,14}$")
    referral_code: str | None = Field(default=None, max_length=50)

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)
