"""Expense ledger and list queries."""

from expense_tracker.ledger.filters import apply_filter, filter_expenses
from expense_tracker.ledger.store import ExpenseLedger, ExpenseNotFoundError

__all__ = [
    "ExpenseLedger",
    "ExpenseNotFoundError",
    "apply_filter",
    "filter_expenses",
]
