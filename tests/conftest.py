"""Shared fixtures: in-memory stores, wired trackers and sample expenses."""

from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.config import AppSettings
from expense_tracker.models.expense import Expense, ExpenseCategory
from expense_tracker.storage import InMemoryKeyValueStore
from expense_tracker.tracker import ExpenseTracker


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def app_settings():
    return AppSettings(
        default_currency_code="USD",
        daily_trend_days=7,
        audit_log_max_events=50,
    )


@pytest.fixture
def audit_logger(store):
    return AuditLogger(store, max_events=50)


@pytest.fixture
def tracker(store, audit_logger, app_settings):
    return ExpenseTracker(store, audit_logger=audit_logger, app_settings=app_settings)


def make_expense(amount, category, description, spent_on) -> Expense:
    return Expense(
        amount=Decimal(amount),
        category=category,
        description=description,
        spent_on=spent_on,
    )


@pytest.fixture
def sample_expenses():
    """Newest first, spanning November and December 2024."""
    return [
        make_expense("120.00", ExpenseCategory.FOOD_AND_DINING, "Dinner out", date(2024, 12, 14)),
        make_expense("45.50", ExpenseCategory.TRANSPORTATION, "Metro card top-up", date(2024, 12, 12)),
        make_expense("300.00", ExpenseCategory.SHOPPING, "Winter jacket", date(2024, 12, 3)),
        make_expense("80.00", ExpenseCategory.FOOD_AND_DINING, "Groceries", date(2024, 12, 1)),
        make_expense("200.00", ExpenseCategory.BILLS_AND_UTILITIES, "Electricity bill", date(2024, 11, 20)),
        make_expense("50.00", ExpenseCategory.FOOD_AND_DINING, "Lunch with team", date(2024, 11, 5)),
    ]
