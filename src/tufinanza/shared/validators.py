# src/tufinanza/shared/validators.py
"""
Input Validation Utilities - Amount Validation

This module validates user-entered amounts before they are shown or stored.
Validation failures are returned as data, never raised.

Files that USE this module:
- callers validating amount input before creating movements or goals
- tests.test_validators (unit tests)

Files that this module USES:
- tufinanza.shared.language (translate for error messages)
"""
import math
from dataclasses import dataclass
from typing import Optional

from tufinanza.shared.language import translate

MAX_AMOUNT = 999_999_999


@dataclass(frozen=True)
class AmountValidation:
    """Result of validate_amount: is_valid plus a message when invalid."""
    is_valid: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.is_valid


def validate_amount(amount: float) -> AmountValidation:
    """
    Validate a currency amount entered by the user.

    Args:
        amount: Amount to validate

    Returns:
        AmountValidation; invalid for NaN, negative, zero or above MAX_AMOUNT
    """
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return AmountValidation(False, translate("amount_not_positive"))

    if math.isnan(value) or value < 0:
        return AmountValidation(False, translate("amount_not_positive"))

    if value == 0:
        return AmountValidation(False, translate("amount_zero"))

    if value > MAX_AMOUNT:
        return AmountValidation(False, translate("amount_too_large"))

    return AmountValidation(True)
