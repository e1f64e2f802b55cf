# src/tufinanza/adapters/formatting/formatter.py
"""
Amount Formatter - Display and Parsing of Money Amounts

This module renders amounts with the punctuation of each currency's locale
(e.g. "$ 1.234,56" for ARS, "$ 1,234.56" for USD), parses amounts typed by
users in either convention, and formats relative times.

Files that USE this module:
- tufinanza.app (summary output)
- tests.test_formatter (unit tests)

Files that this module USES:
- tufinanza.domain.currencies (symbols and locales)
- tufinanza.shared.language (translate for relative times)
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from tufinanza.domain.currencies import (
    CURRENCIES,
    DEFAULT_LOCALE,
    Currency,
    CurrencyLike,
    get_currency_info,
    get_locale_for_currency,
)
from tufinanza.shared.language import LANG_SPANISH, get_language, translate


@dataclass(frozen=True)
class NumberFormat:
    """
    Punctuation used by a locale.

    Attributes:
        group: Thousands separator
        decimal: Decimal separator
        min_grouping_digits: Integer part must have more than 3 + (this - 1)
            digits before grouping kicks in (es-ES leaves 4-digit numbers alone)
    """
    group: str
    decimal: str
    min_grouping_digits: int = 1


_COMMA_GROUPS = NumberFormat(group=",", decimal=".")
_DOT_GROUPS = NumberFormat(group=".", decimal=",")

LOCALE_FORMATS: Dict[str, NumberFormat] = {
    "en-US": _COMMA_GROUPS,
    "en-GB": _COMMA_GROUPS,
    "es-MX": _COMMA_GROUPS,
    "es-PE": _COMMA_GROUPS,
    "es-AR": _DOT_GROUPS,
    "es-CO": _DOT_GROUPS,
    "es-CL": _DOT_GROUPS,
    "es-UY": _DOT_GROUPS,
    "pt-BR": _DOT_GROUPS,
    "es-ES": NumberFormat(group=".", decimal=",", min_grouping_digits=2),
}


def _group_digits(digits: str, fmt: NumberFormat) -> str:
    if len(digits) < 3 + fmt.min_grouping_digits:
        return digits
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return fmt.group.join(groups)


def format_number(amount: float, decimals: int = 2, locale: str = DEFAULT_LOCALE) -> str:
    """
    Format a number with locale punctuation.

    Rounds half away from zero to `decimals` places.

    Args:
        amount: Number to format
        decimals: Fraction digits (0 or 2 in practice)
        locale: Locale tag; unknown tags use en-US punctuation

    Returns:
        Formatted string like '1,234.56' or '-1.234,56'
    """
    fmt = LOCALE_FORMATS.get(locale, LOCALE_FORMATS[DEFAULT_LOCALE])
    if not math.isfinite(amount):
        return "NaN" if math.isnan(amount) else ("-∞" if amount < 0 else "∞")

    quantum = Decimal(1).scaleb(-decimals)
    value = Decimal(repr(float(amount))).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    text = f"{abs(value):f}"
    int_part, _, frac_part = text.partition(".")

    result = sign + _group_digits(int_part, fmt)
    if decimals > 0:
        result += fmt.decimal + frac_part
    return result


def format_currency(
    amount: float,
    currency: CurrencyLike,
    show_decimals: bool = True,
    show_symbol: bool = True,
    locale: Optional[str] = None,
) -> str:
    """
    Format an amount for display in a currency.

    Args:
        amount: Amount to format
        currency: Currency whose symbol (and default locale) is used
        show_decimals: Two fraction digits when True, none when False
        show_symbol: Prefix the currency symbol
        locale: Override the currency's locale

    Returns:
        Formatted string like '$ 1.234,56' (ARS) or '€ 1234,56' (EUR)
    """
    formatted = format_number(
        amount,
        decimals=2 if show_decimals else 0,
        locale=locale or get_locale_for_currency(currency),
    )
    if show_symbol:
        return f"{get_currency_info(currency).symbol} {formatted}"
    return formatted


def format_balance(amount: float, currency: CurrencyLike) -> str:
    """Format for balance display (no decimals)."""
    return format_currency(amount, currency, show_decimals=False, show_symbol=True)


def format_movement_amount(amount: float, currency: CurrencyLike) -> str:
    """Format for movement details (with decimals)."""
    return format_currency(amount, currency, show_decimals=True, show_symbol=True)


# Symbols and codes of every supported currency, longest first so "R$" wins over "$"
_CURRENCY_MARKS = sorted(
    {info.symbol for info in CURRENCIES.values()} | {currency.value for currency in Currency},
    key=len,
    reverse=True,
)
_MARKS_AND_SPACE = re.compile("|".join(re.escape(mark) for mark in _CURRENCY_MARKS) + r"|\s+", re.IGNORECASE)
_AMOUNT = re.compile(r"-?[\d.,]*\d[\d.,]*")


def parse_number(text: str) -> float:
    """
    Parse an amount typed by a user in either punctuation convention.

    Currency symbols and codes ("$", "S/", "R$", "USDT", "ARS", ...) and
    whitespace are removed first; anything left that is not digits, '.', ','
    and a leading '-' makes the input unparseable ('1e3', '12abc'). Then:
    - comma after the last period: the comma is the decimal separator
      ('1.234,56' -> 1234.56)
    - else a period followed by at most 2 digits is the decimal separator
      ('1,234.56' -> 1234.56)
    - else periods are thousands separators ('1.234' -> 1234)

    Args:
        text: User input

    Returns:
        Parsed number, or 0.0 when the input is not an amount
    """
    cleaned = _MARKS_AND_SPACE.sub("", text or "")
    if not _AMOUNT.fullmatch(cleaned):
        return 0.0

    last_dot = cleaned.rfind(".")
    last_comma = cleaned.rfind(",")

    if last_comma > last_dot:
        int_part = cleaned[:last_comma].replace(".", "").replace(",", "")
        cleaned = f"{int_part}.{cleaned[last_comma + 1:]}"
    elif last_dot != -1:
        after_dot = cleaned[last_dot + 1:]
        if len(after_dot) <= 2:
            before_dot = cleaned[:last_dot].replace(".", "").replace(",", "")
            cleaned = f"{before_dot}.{after_dot}"
        else:
            cleaned = cleaned.replace(".", "").replace(",", "")

    try:
        value = float(cleaned)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def format_time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """
    Format how long ago something happened.

    Args:
        moment: Past instant (naive values are taken as UTC)
        now: Reference instant (default: current UTC time)

    Returns:
        'Just now', '5 min ago', '3h ago', '12 days ago', or the date itself
        after 30 days (in the active language)
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    seconds = (now - moment).total_seconds()
    minutes = math.floor(seconds / 60)
    hours = math.floor(seconds / 3600)
    days = math.floor(seconds / 86400)

    if minutes < 1:
        return translate("just_now")
    if minutes < 60:
        return translate("minutes_ago", minutes=minutes)
    if hours < 24:
        return translate("hours_ago", hours=hours)
    if days < 30:
        return translate("days_ago", days=days)

    if get_language() == LANG_SPANISH:
        return f"{moment.day}/{moment.month}/{moment.year}"
    return f"{moment.month}/{moment.day}/{moment.year}"
