# src/tufinanza/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models, the currency table and business rules.
No dependencies on infrastructure or external systems.
"""

from tufinanza.domain.currencies import (
    CURRENCIES,
    USD_EXCHANGE_RATES,
    Currency,
    CurrencyInfo,
    get_currency_info,
    get_locale_for_currency,
    get_usd_rate,
)
from tufinanza.domain.models import (
    Category,
    Country,
    ExchangeRates,
    Movement,
    MovementType,
    QuoteSource,
    RatesSource,
    SavingGoal,
    SavingTransaction,
    TransactionType,
    UserProfile,
    USDTQuote,
)
from tufinanza.domain.errors import (
    DomainError,
    InvalidRecordError,
    StorageError,
)

__all__ = [
    "Currency",
    "CurrencyInfo",
    "CURRENCIES",
    "USD_EXCHANGE_RATES",
    "get_currency_info",
    "get_locale_for_currency",
    "get_usd_rate",
    "USDTQuote",
    "ExchangeRates",
    "QuoteSource",
    "RatesSource",
    "UserProfile",
    "Movement",
    "MovementType",
    "SavingGoal",
    "SavingTransaction",
    "TransactionType",
    "Category",
    "Country",
    "DomainError",
    "StorageError",
    "InvalidRecordError",
]
