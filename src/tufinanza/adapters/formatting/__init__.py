# src/tufinanza/adapters/formatting/__init__.py
"""
Formatting Adapters - Amount Formatting and Parsing

This package contains locale-aware amount formatting for display output.
"""

from tufinanza.adapters.formatting.formatter import (
    format_balance,
    format_currency,
    format_movement_amount,
    format_number,
    format_time_ago,
    parse_number,
)

__all__ = [
    "format_balance",
    "format_currency",
    "format_movement_amount",
    "format_number",
    "format_time_ago",
    "parse_number",
]
