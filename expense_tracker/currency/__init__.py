"""Currency registry, formatting and parsing."""

from expense_tracker.currency.formatter import format_amount, round_amount
from expense_tracker.currency.parser import parse_amount
from expense_tracker.currency.registry import (
    DEFAULT_CURRENCY,
    CurrencyNotFoundError,
    find_currency,
    list_currencies,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "CurrencyNotFoundError",
    "find_currency",
    "format_amount",
    "list_currencies",
    "parse_amount",
    "round_amount",
]
