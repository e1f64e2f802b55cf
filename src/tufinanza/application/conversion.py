# src/tufinanza/application/conversion.py
"""
Currency Conversion - Pure Conversion Functions

Conversions between any two supported currencies pivot through USD using a
rate table (the static USD_EXCHANGE_RATES unless a snapshot is supplied).
The ARS <-> USDT pair can use a live USDTQuote instead of the table.

All functions are pure and work on floats. Round trips are approximate:
convert_currency(convert_currency(x, A, B), B, A) only matches x within
floating-point tolerance.

Files that USE this module:
- tufinanza.application.stats (totals in the display currency)
- tufinanza.app (summary output)
- tests.test_conversion (unit tests)

Files that this module USES:
- tufinanza.domain.currencies (rate table and symbols)
- tufinanza.domain.models (USDTQuote)
"""
from __future__ import annotations

from typing import Mapping, Optional

from tufinanza.domain.currencies import Currency, CurrencyLike, get_currency_info, get_usd_rate, to_currency
from tufinanza.domain.models import USDTQuote

RateTable = Mapping[Currency, float]

# Currencies treated as exactly 1:1 with USDT
_DOLLAR_PEGGED = (Currency.USD, Currency.USDT)


def _same_currency(a: CurrencyLike, b: CurrencyLike) -> bool:
    return (to_currency(a) or str(a)) == (to_currency(b) or str(b))


def convert_to_usd(amount: float, from_currency: CurrencyLike, rates: Optional[RateTable] = None) -> float:
    """
    Convert an amount to USD.

    Args:
        amount: Amount in from_currency
        from_currency: Source currency
        rates: Optional rate table (defaults to the static table)

    Returns:
        Amount in USD; unknown currencies convert 1:1
    """
    if to_currency(from_currency) == Currency.USD:
        return amount
    return amount * get_usd_rate(from_currency, rates)


def convert_from_usd(usd_amount: float, to: CurrencyLike, rates: Optional[RateTable] = None) -> float:
    """
    Convert a USD amount to another currency.

    Args:
        usd_amount: Amount in USD
        to: Target currency
        rates: Optional rate table (defaults to the static table)

    Returns:
        Amount in the target currency; unknown currencies convert 1:1
    """
    if to_currency(to) == Currency.USD:
        return usd_amount
    return usd_amount / get_usd_rate(to, rates)


def convert_currency(
    amount: float,
    from_currency: CurrencyLike,
    to: CurrencyLike,
    rates: Optional[RateTable] = None,
) -> float:
    """
    Convert between any two currencies via USD.

    Same-currency conversion returns the amount unchanged.
    """
    if _same_currency(from_currency, to):
        return amount
    usd_amount = convert_to_usd(amount, from_currency, rates)
    return convert_from_usd(usd_amount, to, rates)


def convert_ars_to_usdt(ars_amount: float, quote: USDTQuote) -> float:
    """Convert ARS to USDT using a live quote (ARS per USDT)."""
    return ars_amount / quote.price


def convert_usdt_to_ars(usdt_amount: float, quote: USDTQuote) -> float:
    """Convert USDT to ARS using a live quote (ARS per USDT)."""
    return usdt_amount * quote.price


def convert_to_usdt(
    amount: float,
    from_currency: CurrencyLike,
    quote: Optional[USDTQuote] = None,
    rates: Optional[RateTable] = None,
) -> float:
    """
    Convert any currency to USDT.

    ARS uses the quote when one is given. USD and USDT are 1:1. Everything
    else (and ARS without a quote) goes through the USD table.
    """
    currency = to_currency(from_currency)
    if currency == Currency.ARS and quote is not None:
        return convert_ars_to_usdt(amount, quote)
    if currency in _DOLLAR_PEGGED:
        return amount
    return convert_to_usd(amount, from_currency, rates)


def convert_from_usdt(
    usdt_amount: float,
    to: CurrencyLike,
    quote: Optional[USDTQuote] = None,
    rates: Optional[RateTable] = None,
) -> float:
    """
    Convert USDT to any currency.

    Mirror image of convert_to_usdt.
    """
    currency = to_currency(to)
    if currency == Currency.ARS and quote is not None:
        return convert_usdt_to_ars(usdt_amount, quote)
    if currency in _DOLLAR_PEGGED:
        return usdt_amount
    return convert_from_usd(usdt_amount, to, rates)


def get_exchange_rate(from_currency: CurrencyLike, to: CurrencyLike, rates: Optional[RateTable] = None) -> float:
    """
    Multiplicative rate from one currency to another, via USD.

    Returns:
        Units of `to` per unit of `from_currency`; 1.0 when both are the same
    """
    if _same_currency(from_currency, to):
        return 1.0
    return get_usd_rate(from_currency, rates) / get_usd_rate(to, rates)


def format_exchange_rate(from_currency: CurrencyLike, to: CurrencyLike, rates: Optional[RateTable] = None) -> str:
    """
    Human readable rate, always with the larger side as the number.

    Returns:
        '1 € = 1.10 $' when the rate is >= 1, otherwise '909.09 $ = 1 $'
    """
    rate = get_exchange_rate(from_currency, to, rates)
    from_symbol = get_currency_info(from_currency).symbol
    to_symbol = get_currency_info(to).symbol

    if rate >= 1:
        return f"1 {from_symbol} = {rate:.2f} {to_symbol}"
    return f"{1 / rate:.2f} {from_symbol} = 1 {to_symbol}"
