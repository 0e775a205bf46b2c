"""
Spending Analytics

DESIGN DECISION: Analytics are DETERMINISTIC functions of the expense list.
Nothing here reads storage or the clock implicitly; "today" and the
selected month are always passed in, so every report is reproducible.

All sums are Decimal. Percentages are floats rounded to one place,
since they are only ever displayed.
"""

import calendar
from collections import defaultdict
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from expense_tracker.models.expense import Expense, ExpenseCategory
from expense_tracker.models.reports import (
    CategoryShare,
    DailyPoint,
    MonthlyReport,
    MonthlyTotal,
)

# Fixed English labels; calendar.month_abbr follows the process locale
MONTH_ABBR = (
    "", "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
MONTH_NAMES = (
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

ZERO = Decimal("0")
CENT = Decimal("0.01")


# =============================================================================
# MONTH HELPERS
# =============================================================================

def month_key(day: date) -> str:
    """'YYYY-MM' bucket for a date."""
    return f"{day.year:04d}-{day.month:02d}"


def _split_month(month: str) -> tuple[int, int]:
    try:
        year_str, month_str = month.split("-")
        year, month_num = int(year_str), int(month_str)
    except ValueError:
        raise ValueError(f"Invalid month key {month!r}, expected 'YYYY-MM'") from None
    if not 1 <= month_num <= 12:
        raise ValueError(f"Invalid month key {month!r}, expected 'YYYY-MM'")
    return year, month_num


def previous_month(month: str) -> str:
    """Month key of the month before, wrapping January to December."""
    year, month_num = _split_month(month)
    if month_num == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{month_num - 1:02d}"


def month_label(month: str, long: bool = False) -> str:
    """'Jan 2024' (or 'January 2024' when long) for a month key."""
    year, month_num = _split_month(month)
    names = MONTH_NAMES if long else MONTH_ABBR
    return f"{names[month_num]} {year}"


def days_in_month(month: str) -> int:
    year, month_num = _split_month(month)
    return calendar.monthrange(year, month_num)[1]


# =============================================================================
# AGGREGATIONS
# =============================================================================

def total_spent(expenses: Iterable[Expense]) -> Decimal:
    """Sum of all amounts."""
    return sum((e.amount for e in expenses), ZERO)


def category_breakdown(expenses: Iterable[Expense]) -> list[CategoryShare]:
    """
    Totals per category with their share of the overall total.

    Sorted by amount, largest first; ties follow category order.
    Empty when there is nothing to break down.
    """
    totals: dict[ExpenseCategory, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        totals[expense.category] += expense.amount

    grand_total = sum(totals.values(), ZERO)
    if grand_total <= 0:
        return []

    order = list(ExpenseCategory)
    ranked = sorted(totals.items(), key=lambda item: (-item[1], order.index(item[0])))
    return [
        CategoryShare(
            category=category,
            amount=amount,
            percentage=round(float(amount / grand_total * 100), 1),
        )
        for category, amount in ranked
    ]


def monthly_totals(expenses: Iterable[Expense]) -> list[MonthlyTotal]:
    """Totals per calendar month, oldest month first."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        totals[month_key(expense.spent_on)] += expense.amount

    return [
        MonthlyTotal(month=month, label=month_label(month), amount=amount)
        for month, amount in sorted(totals.items())
    ]


def daily_series(
    expenses: Iterable[Expense],
    days: int = 30,
    today: Optional[date] = None,
) -> list[DailyPoint]:
    """
    Totals for each of the last `days` days, ending today, oldest first.

    Days without expenses are present with a zero amount.
    """
    if days < 1:
        raise ValueError("days must be at least 1")
    today = today or date.today()
    start = today - timedelta(days=days - 1)

    totals: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        if start <= expense.spent_on <= today:
            totals[expense.spent_on] += expense.amount

    series = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        series.append(DailyPoint(
            day=day,
            label=f"{MONTH_ABBR[day.month]} {day.day}",
            amount=totals[day],
        ))
    return series


def available_months(expenses: Iterable[Expense], current: str) -> list[str]:
    """
    Months that have expenses, newest first.

    The current month is always offered, at the top when it has no
    expenses yet.
    """
    _split_month(current)
    months = sorted({month_key(e.spent_on) for e in expenses}, reverse=True)
    if current not in months:
        months.insert(0, current)
    return months


# =============================================================================
# MONTHLY REPORT
# =============================================================================

def monthly_report(expenses: Iterable[Expense], month: str) -> MonthlyReport:
    """
    Build the report for one month.

    Args:
        expenses: All expenses (any month)
        month: Month to report on, 'YYYY-MM'

    Returns:
        Totals, per-day average, category breakdown and the change
        relative to the previous month
    """
    expenses = list(expenses)
    prev = previous_month(month)

    current_items = [e for e in expenses if month_key(e.spent_on) == month]
    previous_items = [e for e in expenses if month_key(e.spent_on) == prev]

    total = total_spent(current_items)
    previous_total = total_spent(previous_items)
    change = total - previous_total
    if previous_total > 0:
        change_percent = round(float(change / previous_total * 100), 1)
    else:
        change_percent = 0.0

    categories = category_breakdown(current_items)
    top = categories[0] if categories else None

    return MonthlyReport(
        month=month,
        label=month_label(month, long=True),
        total=total,
        transaction_count=len(current_items),
        average_per_day=(total / days_in_month(month)).quantize(CENT, rounding=ROUND_HALF_UP),
        categories=categories,
        top_category=top.category if top else None,
        top_category_amount=top.amount if top else ZERO,
        previous_month=prev,
        previous_total=previous_total,
        change=change,
        change_percent=change_percent,
    )
