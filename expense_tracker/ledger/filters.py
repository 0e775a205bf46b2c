"""Search, category filtering and sorting of expense lists."""

from typing import Iterable, Optional

from expense_tracker.models.expense import (
    Expense,
    ExpenseCategory,
    ExpenseFilter,
    SortKey,
)


def matches_search(expense: Expense, search: str) -> bool:
    """Case-insensitive substring match on description or category."""
    needle = search.strip().casefold()
    if not needle:
        return True
    return (
        needle in expense.description.casefold()
        or needle in expense.category.value.casefold()
    )


def sort_expenses(expenses: Iterable[Expense], sort_by: SortKey) -> list[Expense]:
    # Stable sorts: ties keep their incoming (newest-first) order
    if sort_by == SortKey.AMOUNT:
        return sorted(expenses, key=lambda e: e.amount, reverse=True)
    if sort_by == SortKey.CATEGORY:
        return sorted(expenses, key=lambda e: e.category.value.casefold())
    return sorted(expenses, key=lambda e: e.spent_on, reverse=True)


def filter_expenses(
    expenses: Iterable[Expense],
    search: str = "",
    category: Optional[ExpenseCategory] = None,
    sort_by: SortKey = SortKey.DATE,
) -> list[Expense]:
    """
    Apply the expense list controls.

    Args:
        expenses: Expenses to filter (not modified)
        search: Text to look for; empty matches everything
        category: Keep only this category; None keeps all
        sort_by: Ordering of the result

    Returns:
        A new list of matching expenses
    """
    selected = [
        expense
        for expense in expenses
        if matches_search(expense, search)
        and (category is None or expense.category == category)
    ]
    return sort_expenses(selected, sort_by)


def apply_filter(expenses: Iterable[Expense], criteria: ExpenseFilter) -> list[Expense]:
    """filter_expenses() driven by an ExpenseFilter model."""
    return filter_expenses(
        expenses,
        search=criteria.search,
        category=criteria.category,
        sort_by=criteria.sort_by,
    )
