# src/tufinanza/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the conversion functions, the quote cache service and
balance statistics. Storage is reached only through injected adapters.
"""

from tufinanza.application.conversion import (
    convert_ars_to_usdt,
    convert_currency,
    convert_from_usd,
    convert_from_usdt,
    convert_to_usd,
    convert_to_usdt,
    convert_usdt_to_ars,
    format_exchange_rate,
    get_exchange_rate,
)
from tufinanza.application.quote_service import QuoteService
from tufinanza.application.stats import (
    BalanceStats,
    MovementFilter,
    Period,
    SavingStats,
    compute_balance_stats,
    compute_saving_stats,
    filter_movements,
)

__all__ = [
    "convert_to_usd",
    "convert_from_usd",
    "convert_currency",
    "convert_ars_to_usdt",
    "convert_usdt_to_ars",
    "convert_to_usdt",
    "convert_from_usdt",
    "get_exchange_rate",
    "format_exchange_rate",
    "QuoteService",
    "BalanceStats",
    "SavingStats",
    "MovementFilter",
    "Period",
    "compute_balance_stats",
    "compute_saving_stats",
    "filter_movements",
]
