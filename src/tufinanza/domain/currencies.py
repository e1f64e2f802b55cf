# src/tufinanza/domain/currencies.py
"""
Currency Table - Supported Currencies and Static USD Rates

This module holds the closed set of currencies the app understands, their
display metadata (symbol, name, locale) and the static table of USD values
used for pivot conversion.

Files that USE this module:
- tufinanza.application.conversion (USD pivot rates and symbols)
- tufinanza.application.quote_service (base table for simulated rates)
- tufinanza.adapters.formatting.formatter (symbols and locales)
- tufinanza.domain.models (Currency enum for records)

Files that this module USES:
- None (pure domain data)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

logger = logging.getLogger(__name__)


class Currency(str, Enum):
    """Supported currency codes. USDT is the stablecoin proxy pegged to USD."""
    ARS = "ARS"
    USD = "USD"
    USDT = "USDT"
    COP = "COP"
    MXN = "MXN"
    CLP = "CLP"
    PEN = "PEN"
    UYU = "UYU"
    BRL = "BRL"
    EUR = "EUR"
    GBP = "GBP"

    def __str__(self) -> str:
        return self.value


CurrencyLike = Union[Currency, str]


@dataclass(frozen=True)
class CurrencyInfo:
    """
    Display metadata for one currency.

    Attributes:
        code: Currency code
        symbol: Symbol shown next to amounts (e.g. "$", "S/", "R$")
        name: Human readable name
    """
    code: Currency
    symbol: str
    name: str


CURRENCIES: Mapping[Currency, CurrencyInfo] = MappingProxyType({
    Currency.ARS: CurrencyInfo(Currency.ARS, "$", "Peso Argentino"),
    Currency.USD: CurrencyInfo(Currency.USD, "$", "Dólar Americano"),
    Currency.USDT: CurrencyInfo(Currency.USDT, "USDT", "Tether USD"),
    Currency.COP: CurrencyInfo(Currency.COP, "$", "Peso Colombiano"),
    Currency.MXN: CurrencyInfo(Currency.MXN, "$", "Peso Mexicano"),
    Currency.CLP: CurrencyInfo(Currency.CLP, "$", "Peso Chileno"),
    Currency.PEN: CurrencyInfo(Currency.PEN, "S/", "Sol Peruano"),
    Currency.UYU: CurrencyInfo(Currency.UYU, "$", "Peso Uruguayo"),
    Currency.BRL: CurrencyInfo(Currency.BRL, "R$", "Real Brasileño"),
    Currency.EUR: CurrencyInfo(Currency.EUR, "€", "Euro"),
    Currency.GBP: CurrencyInfo(Currency.GBP, "£", "Libra Esterlina"),
})

# Value of 1 unit of each currency in USD (simulated, approximate)
USD_EXCHANGE_RATES: Mapping[Currency, float] = MappingProxyType({
    Currency.USD: 1.0,
    Currency.USDT: 1.0,  # pegged 1:1
    Currency.ARS: 0.0011,  # ~900 ARS per USD
    Currency.COP: 0.00025,  # ~4000 COP per USD
    Currency.MXN: 0.059,  # ~17 MXN per USD
    Currency.CLP: 0.0011,  # ~900 CLP per USD
    Currency.PEN: 0.27,  # ~3.7 PEN per USD
    Currency.UYU: 0.026,  # ~38 UYU per USD
    Currency.BRL: 0.20,  # ~5 BRL per USD
    Currency.EUR: 1.10,
    Currency.GBP: 1.27,
})

DEFAULT_LOCALE = "en-US"

LOCALES: Mapping[Currency, str] = MappingProxyType({
    Currency.ARS: "es-AR",
    Currency.USD: "en-US",
    Currency.USDT: "en-US",
    Currency.COP: "es-CO",
    Currency.MXN: "es-MX",
    Currency.CLP: "es-CL",
    Currency.PEN: "es-PE",
    Currency.UYU: "es-UY",
    Currency.BRL: "pt-BR",
    Currency.EUR: "es-ES",
    Currency.GBP: "en-GB",
})


def to_currency(code: CurrencyLike) -> Optional[Currency]:
    """
    Coerce a code to a Currency member.

    Args:
        code: Currency member or its string code (case-insensitive)

    Returns:
        Currency member, or None if the code is not supported
    """
    if isinstance(code, Currency):
        return code
    try:
        return Currency(str(code).strip().upper())
    except ValueError:
        return None


def get_currency_info(code: CurrencyLike) -> CurrencyInfo:
    """
    Get display metadata for a currency.

    Unknown codes get a synthetic entry that uses the code itself as symbol.
    """
    currency = to_currency(code)
    if currency is None:
        logger.warning("Unknown currency %s, using code as symbol", code)
        return CurrencyInfo(code, str(code), str(code))  # type: ignore[arg-type]
    return CURRENCIES[currency]


def get_usd_rate(code: CurrencyLike, rates: Optional[Mapping[Currency, float]] = None) -> float:
    """
    Get the USD value of one unit of a currency.

    Args:
        code: Currency to look up
        rates: Optional rate table (defaults to the static USD_EXCHANGE_RATES)

    Returns:
        Rate as float; 1.0 with a logged warning when the rate is missing
    """
    table = USD_EXCHANGE_RATES if rates is None else rates
    currency = to_currency(code)
    rate = table.get(currency) if currency is not None else None
    if not rate:
        logger.warning("Exchange rate not found for %s, using 1:1", code)
        return 1.0
    return float(rate)


def get_locale_for_currency(code: CurrencyLike) -> str:
    """Locale used to render amounts of this currency (en-US when unmapped)."""
    currency = to_currency(code)
    if currency is None:
        return DEFAULT_LOCALE
    return LOCALES.get(currency, DEFAULT_LOCALE)
