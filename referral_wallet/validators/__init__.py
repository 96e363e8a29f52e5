"""
Validators package.

Provides validation functions for user input.
"""

from referral_wallet.validators.bank_details import (
    ValidationResult,
    validate_bank_details,
)


__all__ = [
    "ValidationResult",
    "validate_bank_details",
]
