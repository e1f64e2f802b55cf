# tests/test_currencies.py
"""
Currency Table Tests - Rate Table and Metadata
"""
import logging

import pytest  # Testing framework for writing and running tests

from tufinanza.domain.currencies import (
    CURRENCIES,
    USD_EXCHANGE_RATES,
    Currency,
    get_currency_info,
    get_locale_for_currency,
    get_usd_rate,
    to_currency,
)


class TestRateTable:
    def test_every_currency_has_rate_and_info(self):
        assert set(USD_EXCHANGE_RATES) == set(Currency)
        assert set(CURRENCIES) == set(Currency)
        assert all(rate > 0 for rate in USD_EXCHANGE_RATES.values())

    def test_usd_is_exactly_one(self):
        assert USD_EXCHANGE_RATES[Currency.USD] == 1

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            USD_EXCHANGE_RATES[Currency.ARS] = 2.0  # type: ignore[index]

    def test_get_usd_rate(self):
        assert get_usd_rate(Currency.BRL) == 0.20
        assert get_usd_rate("brl") == 0.20

    def test_unknown_code_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert get_usd_rate("XYZ") == 1.0
        assert "XYZ" in caplog.text


class TestMetadata:
    def test_currency_info(self):
        info = get_currency_info(Currency.PEN)
        assert info.symbol == "S/"
        assert info.name == "Sol Peruano"
        assert info.code is Currency.PEN

    def test_unknown_currency_info_uses_code(self):
        assert get_currency_info("XYZ").symbol == "XYZ"

    def test_locales(self):
        assert get_locale_for_currency(Currency.ARS) == "es-AR"
        assert get_locale_for_currency(Currency.BRL) == "pt-BR"
        assert get_locale_for_currency("XYZ") == "en-US"

    def test_to_currency(self):
        assert to_currency(" usdt ") is Currency.USDT
        assert to_currency("nope") is None
        assert str(Currency.EUR) == "EUR"

