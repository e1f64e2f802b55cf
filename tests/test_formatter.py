# tests/test_formatter.py
"""
Formatter Tests - Unit Tests for Amount Formatting and Parsing

This module contains unit tests for locale-aware amount formatting, the
balance/movement presets, user input parsing and relative time strings.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- tufinanza.adapters.formatting.formatter (all formatter functions for testing)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from datetime import timedelta  # Offsets for relative time tests

from tufinanza.adapters.formatting.formatter import (
    format_balance,  # Preset without decimals
    format_currency,  # Locale-aware amount formatting
    format_movement_amount,  # Preset with decimals
    format_number,  # Bare number formatting
    format_time_ago,  # Relative time strings
    parse_number,  # Inverse of formatting for user input
)
from tufinanza.domain.currencies import Currency
from tufinanza.shared.language import LANG_SPANISH, set_language

from conftest import NOW


class TestFormatNumber:
    def test_comma_grouping(self):
        assert format_number(1234567.891, 2, "en-US") == "1,234,567.89"

    def test_dot_grouping(self):
        assert format_number(1234567.891, 2, "es-AR") == "1.234.567,89"

    def test_spain_does_not_group_four_digits(self):
        assert format_number(1234.5, 2, "es-ES") == "1234,50"
        assert format_number(12345.5, 2, "es-ES") == "12.345,50"

    def test_rounds_half_away_from_zero(self):
        assert format_number(2.675, 2, "en-US") == "2.68"
        assert format_number(-2.5, 0, "en-US") == "-3"

    def test_negative_amount(self):
        assert format_number(-1234.5, 2, "pt-BR") == "-1.234,50"

    def test_unknown_locale_uses_default(self):
        assert format_number(1234.5, 2, "xx-XX") == "1,234.50"


class TestFormatCurrency:
    def test_ars_defaults(self):
        assert format_currency(1234.56, Currency.ARS) == "$ 1.234,56"

    def test_usd_defaults(self):
        assert format_currency(1234.56, Currency.USD) == "$ 1,234.56"

    def test_symbols(self):
        assert format_currency(10, Currency.PEN) == "S/ 10.00"
        assert format_currency(10, Currency.BRL) == "R$ 10,00"
        assert format_currency(10, Currency.USDT) == "USDT 10.00"
        assert format_currency(10, Currency.GBP) == "£ 10.00"

    def test_without_symbol(self):
        assert format_currency(1234.5, Currency.EUR, show_symbol=False) == "1234,50"

    def test_without_decimals(self):
        assert format_currency(1234.56, Currency.COP, show_decimals=False) == "$ 1.235"

    def test_locale_override(self):
        assert format_currency(1234.56, Currency.ARS, locale="en-US") == "$ 1,234.56"

    def test_presets(self):
        assert format_balance(98765.4, Currency.MXN) == "$ 98,765"
        assert format_movement_amount(98765.4, Currency.MXN) == "$ 98,765.40"


class TestParseNumber:
    def test_comma_after_last_period_is_decimal(self):
        assert parse_number("1.234,56") == pytest.approx(1234.56)

    def test_period_with_two_decimals_is_decimal(self):
        assert parse_number("1,234.56") == pytest.approx(1234.56)

    def test_period_with_three_digits_is_grouping(self):
        assert parse_number("1.234") == 1234

    def test_strips_symbols_and_spaces(self):
        assert parse_number("$ 1.234.567,89") == pytest.approx(1234567.89)
        assert parse_number("R$ 50,5") == pytest.approx(50.5)
        assert parse_number("S/ 12.3") == pytest.approx(12.3)
        assert parse_number(" € 7 ") == 7

    def test_garbage_is_zero(self):
        assert parse_number("") == 0
        assert parse_number("abc") == 0
        assert parse_number(".") == 0
        assert parse_number("1-2") == 0

    @pytest.mark.parametrize("text", ["1e3", "12abc", "nan", "inf", "1_000", "$ 5 x"])
    def test_only_currency_marks_are_stripped(self, text):
        assert parse_number(text) == 0

    def test_currency_codes_are_stripped(self):
        assert parse_number("ARS 1.500") == 1500
        assert parse_number("usd 10") == 10
        assert parse_number("-12,5 EUR") == pytest.approx(-12.5)

    @pytest.mark.parametrize("currency", list(Currency))
    @pytest.mark.parametrize("amount", [0.5, 12.34, 1234.56, 1234567.89, -9876.54])
    def test_formatted_amount_parses_back(self, currency, amount):
        assert parse_number(format_currency(amount, currency)) == pytest.approx(amount, abs=0.005)


class TestFormatTimeAgo:
    def test_just_now(self):
        assert format_time_ago(NOW - timedelta(seconds=30), NOW) == "Just now"

    def test_minutes(self):
        assert format_time_ago(NOW - timedelta(minutes=5), NOW) == "5 min ago"

    def test_hours(self):
        assert format_time_ago(NOW - timedelta(hours=3, minutes=59), NOW) == "3h ago"

    def test_days(self):
        assert format_time_ago(NOW - timedelta(days=12), NOW) == "12 days ago"

    def test_old_dates_show_the_date(self):
        assert format_time_ago(NOW - timedelta(days=45), NOW) == "5/1/2024"

    def test_spanish(self):
        set_language(LANG_SPANISH)
        assert format_time_ago(NOW - timedelta(minutes=5), NOW) == "Hace 5 min"
        assert format_time_ago(NOW - timedelta(days=45), NOW) == "1/5/2024"
