"""
Data Models Package

This package contains all Pydantic models used by the expense tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.currency import CurrencyDescriptor
from expense_tracker.models.expense import (
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    ExpenseFilter,
    SortKey,
)
from expense_tracker.models.reports import (
    CategoryShare,
    ChartData,
    DailyPoint,
    DashboardSummary,
    MonthlyReport,
    MonthlyTotal,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Currency
    "CurrencyDescriptor",
    # Expense models
    "Expense",
    "ExpenseCategory",
    "ExpenseDraft",
    "ExpenseFilter",
    "SortKey",
    # Report models
    "CategoryShare",
    "ChartData",
    "DailyPoint",
    "DashboardSummary",
    "MonthlyReport",
    "MonthlyTotal",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
