# src/tufinanza/app.py
"""
Application Entry Point - Market and Balance Summary

This module is the composition root: it wires settings, logging, the JSON
file store, the quote service and the finance database, then prints the
current USDT quote, the rate table and the user's balance.

Files that USE this module:
- tufinanza.__main__ (python -m tufinanza)
- tufinanza console script (pyproject.toml)

Files that this module USES:
- tufinanza.shared.logging_conf (setup_logging)
- tufinanza.config (settings)
- tufinanza.adapters.persistence (JsonFileStore, FinanceDatabase)
- tufinanza.application (QuoteService, conversion, stats)
- tufinanza.adapters.formatting (amount formatting)
"""
from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

from tufinanza.adapters.formatting.formatter import format_balance, format_currency, format_time_ago
from tufinanza.adapters.persistence.database import FinanceDatabase
from tufinanza.adapters.persistence.file_store import JsonFileStore
from tufinanza.application.conversion import format_exchange_rate
from tufinanza.application.quote_service import QuoteService
from tufinanza.application.stats import compute_balance_stats
from tufinanza.config import Settings, settings as default_settings
from tufinanza.domain.catalog import DEFAULT_CURRENCY
from tufinanza.domain.currencies import Currency
from tufinanza.domain.errors import StorageError
from tufinanza.shared.language import translate
from tufinanza.shared.logging_conf import setup_logging

logger = logging.getLogger(__name__)


def build_summary(db: FinanceDatabase, quotes: QuoteService, now: Optional[datetime] = None) -> str:
    """
    Render the market and balance summary as plain text.

    Args:
        db: Finance database holding the user's data
        quotes: Quote service for the current USDT quote and rates
        now: Reference time (default: current UTC time)

    Returns:
        Multi-line summary
    """
    now = now or datetime.now(timezone.utc)
    quote = quotes.get_current_usdt_quote()
    rates = quotes.get_current_exchange_rates()

    lines: List[str] = [
        translate(
            "usdt_quote_line",
            price=format_currency(quote.price, Currency.ARS),
            source=quote.source.value,
            age=format_time_ago(quote.timestamp, now),
        )
    ]
    for currency in Currency:
        if currency == Currency.USD:
            continue
        lines.append(format_exchange_rate(Currency.USD, currency, rates.rates))

    profile = db.get_user_profile()
    if profile is None:
        lines.append(translate("no_profile"))
        return "\n".join(lines)

    display_currency = (
        db.get_balance_display_currency()
        or profile.preferred_balance_currency
        or DEFAULT_CURRENCY
    )
    stats = compute_balance_stats(db.get_movements(), display_currency, now=now, rates=rates.rates)
    lines.append("")
    lines.append(translate("balance_header", currency=display_currency.value))
    lines.append(translate("income_line", value=format_balance(stats.total_income, display_currency)))
    lines.append(translate("expenses_line", value=format_balance(stats.total_expenses, display_currency)))
    lines.append(translate("savings_line", value=format_balance(stats.total_savings, display_currency)))
    lines.append(translate("net_line", value=format_balance(stats.net_balance, display_currency)))
    return "\n".join(lines)


def main(settings: Optional[Settings] = None) -> int:
    """
    Print the summary for the data file configured in settings.

    Returns:
        Process exit code
    """
    settings = settings or default_settings
    setup_logging(settings)

    try:
        store = JsonFileStore(settings.data_file)
    except StorageError as e:
        logger.error("Cannot open data file %s: %s", settings.data_file, e)
        return 1

    db = FinanceDatabase(store)
    quotes = QuoteService(store, settings=settings)
    print(build_summary(db, quotes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
