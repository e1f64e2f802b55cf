# src/tufinanza/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Language management
- Logging configuration
"""

from tufinanza.shared.validators import AmountValidation, MAX_AMOUNT, validate_amount
from tufinanza.shared.language import (
    get_language,
    set_language,
    translate,
    LANG_ENGLISH,
    LANG_SPANISH,
)

__all__ = [
    "AmountValidation",
    "MAX_AMOUNT",
    "validate_amount",
    "get_language",
    "set_language",
    "translate",
    "LANG_ENGLISH",
    "LANG_SPANISH",
]
