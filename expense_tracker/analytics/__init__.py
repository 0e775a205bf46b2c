"""Spending analytics package."""

from expense_tracker.analytics.reports import (
    available_months,
    category_breakdown,
    daily_series,
    month_key,
    month_label,
    monthly_report,
    monthly_totals,
    previous_month,
    total_spent,
)

__all__ = [
    "available_months",
    "category_breakdown",
    "daily_series",
    "month_key",
    "month_label",
    "monthly_report",
    "monthly_totals",
    "previous_month",
    "total_spent",
]
