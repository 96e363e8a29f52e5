"""
Bank details validators.

Pure format checks for bank fields, reusable before any persistence.
"""

import re
from dataclasses import dataclass, field

from referral_wallet.config.business_constants import (
    MAX_ACCOUNT_HOLDER_NAME_LENGTH,
    MAX_BANK_NAME_LENGTH,
    MIN_ACCOUNT_HOLDER_NAME_LENGTH,
)
from referral_wallet.schemas.bank import BankDetailsInput

IFSC_PATTERN = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")
ACCOUNT_NUMBER_PATTERN = re.compile(r"^\d{9,18}$")


@dataclass
class ValidationResult:
    """Result of bank details validation."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)

    @property
    def error_message(self) -> str | None:
        """All errors joined into one message."""
        if self.is_valid:
            return None
        return "; ".join(self.errors)


def validate_bank_details(details: BankDetailsInput) -> ValidationResult:
    """
    Validate bank fields.

    Collects every problem instead of stopping at the first one.

    Args:
        details: Submitted bank fields

    Returns:
        ValidationResult with the list of errors

    Examples:
        >>> validate_bank_details(BankDetailsInput(
        ...     account_number="123456789012", ifsc_code="SBIN0001234",
        ...     bank_name="State Bank", account_holder_name="Asha Rao",
        ... )).is_valid
        True
    """
    errors: list[str] = []

    # Required fields
    if not details.bank_name.strip():
        errors.append("Bank name is required")
    if not details.account_number.strip():
        errors.append("Account number is required")
    if not details.ifsc_code.strip():
        errors.append("IFSC code is required")
    if not details.account_holder_name.strip():
        errors.append("Account holder name is required")

    # Formats
    if details.ifsc_code and not IFSC_PATTERN.match(details.ifsc_code):
        errors.append(
            "Invalid IFSC code format. Must be 4 letters + 0 + 6 "
            "alphanumeric characters"
        )
    if details.account_number and not ACCOUNT_NUMBER_PATTERN.match(
        details.account_number
    ):
        errors.append("Invalid account number format")

    # Lengths
    if len(details.bank_name) > MAX_BANK_NAME_LENGTH:
        errors.append("Bank name is too long")
    holder_name = details.account_holder_name.strip()
    if holder_name and len(holder_name) < MIN_ACCOUNT_HOLDER_NAME_LENGTH:
        errors.append(
            f"Account holder name must be at least "
            f"{MIN_ACCOUNT_HOLDER_NAME_LENGTH} characters"
        )
    if len(details.account_holder_name) > MAX_ACCOUNT_HOLDER_NAME_LENGTH:
        errors.append("Account holder name is too long")

    return ValidationResult(is_valid=not errors, errors=errors)
