"""
Expense Tracker Orchestrator

This module ties together the components and defines the operations a
front end calls:
1. Currency setup (select once, persisted by value)
2. Expense management (add / edit / delete / browse)
3. Reporting (dashboard summary, monthly report, chart series, export)

DESIGN DECISION: The active currency is held here and passed explicitly
to the formatter on every call. The formatting core never reads storage
or settings.
"""

import json
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Iterator, Optional, Union
from uuid import UUID

from pydantic import ValidationError

from expense_tracker.analytics import (
    available_months,
    category_breakdown,
    daily_series,
    month_key,
    month_label,
    monthly_report,
    monthly_totals,
    total_spent,
)
from expense_tracker.audit import AuditLogger
from expense_tracker.config import AppSettings, Settings, get_settings
from expense_tracker.currency import (
    find_currency,
    format_amount,
    parse_amount,
    round_amount,
)
from expense_tracker.ledger import ExpenseLedger, filter_expenses
from expense_tracker.logs import configure_logging
from expense_tracker.models.audit import AuditEventBuilder
from expense_tracker.models.currency import CurrencyDescriptor
from expense_tracker.models.expense import (
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    SortKey,
)
from expense_tracker.models.reports import ChartData, DashboardSummary, MonthlyReport
from expense_tracker.storage import (
    SELECTED_CURRENCY_KEY,
    KeyValueStore,
    NotFoundError,
    StorageError,
    create_store,
)

AmountInput = Union[str, int, float, Decimal]


class ExpenseTracker:
    """
    One user's expense tracking session.

    GUARANTEES:
    - Every expense change is persisted before the method returns
    - Every amount shown to the user goes through format_amount()
    - An unset currency falls back to the configured default
    """

    def __init__(
        self,
        store: KeyValueStore,
        audit_logger: Optional[AuditLogger] = None,
        app_settings: Optional[AppSettings] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger
        self._settings = app_settings or get_settings().app
        self._ledger = ExpenseLedger(store)

    @property
    def ledger(self) -> ExpenseLedger:
        return self._ledger

    @contextmanager
    def _storage_guard(self, operation: str) -> Iterator[None]:
        """Audit a failed store write, then let the StorageError propagate."""
        try:
            yield
        except NotFoundError:
            raise
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log(AuditEventBuilder.storage_error(operation, str(e)))
            raise

    # -------------------------------------------------------------------------
    # Currency
    # -------------------------------------------------------------------------

    @property
    def selected_currency(self) -> Optional[CurrencyDescriptor]:
        """The currency the user picked, or None before setup."""
        raw = self._store.get(SELECTED_CURRENCY_KEY)
        if not raw:
            return None
        try:
            return CurrencyDescriptor.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            raise StorageError(f"Stored currency is corrupt: {e}") from e

    @property
    def needs_currency_setup(self) -> bool:
        return self.selected_currency is None

    @property
    def currency(self) -> CurrencyDescriptor:
        """Currency used for display: the selected one or the default."""
        return self.selected_currency or find_currency(self._settings.default_currency_code)

    def select_currency(self, code: str) -> CurrencyDescriptor:
        """
        Pick the session currency by code and persist a copy of it.

        Raises:
            CurrencyNotFoundError: If the code is not supported
        """
        currency = find_currency(code)
        with self._storage_guard("select_currency"):
            self._store.set(
                SELECTED_CURRENCY_KEY,
                json.dumps(currency.to_storage_dict(), ensure_ascii=False),
            )
        if self._audit_logger:
            self._audit_logger.log(
                AuditEventBuilder.currency_selected(currency.code, currency.name)
            )
        return currency

    def format(self, amount: Union[int, float, Decimal]) -> str:
        """Format an amount in the active currency."""
        return format_amount(amount, self.currency)

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    @staticmethod
    def _build_draft(
        amount: AmountInput,
        category: Union[ExpenseCategory, str],
        description: str,
        spent_on: Optional[date],
    ) -> ExpenseDraft:
        """
        Build a validated draft from form values.

        Text amounts are parsed leniently (unreadable text becomes 0,
        which the draft then rejects as not positive).

        Raises:
            ValidationError: If any field is invalid
        """
        value = parse_amount(amount) if isinstance(amount, str) else amount
        return ExpenseDraft(
            amount=round_amount(value),
            category=category,
            description=description,
            spent_on=spent_on or date.today(),
        )

    def add_expense(
        self,
        amount: AmountInput,
        category: Union[ExpenseCategory, str],
        description: str,
        spent_on: Optional[date] = None,
    ) -> Expense:
        """Record a new expense (dated today unless spent_on is given)."""
        draft = self._build_draft(amount, category, description, spent_on)
        with self._storage_guard("add_expense"):
            expense = self._ledger.add(draft)
        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.expense_added(
                expense_id=expense.id,
                category=expense.category.value,
                amount=self.format(expense.amount),
            ))
        return expense

    def update_expense(
        self,
        expense_id: UUID,
        amount: AmountInput,
        category: Union[ExpenseCategory, str],
        description: str,
        spent_on: Optional[date] = None,
    ) -> Expense:
        """
        Replace the editable fields of an expense.

        Raises:
            ExpenseNotFoundError: If no expense has this ID
        """
        draft = self._build_draft(amount, category, description, spent_on)
        with self._storage_guard("update_expense"):
            expense = self._ledger.update(expense_id, draft)
        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.expense_updated(
                expense_id=expense.id,
                category=expense.category.value,
                amount=self.format(expense.amount),
            ))
        return expense

    def delete_expense(self, expense_id: UUID) -> Expense:
        """
        Delete an expense.

        Raises:
            ExpenseNotFoundError: If no expense has this ID
        """
        with self._storage_guard("delete_expense"):
            expense = self._ledger.delete(expense_id)
        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.expense_deleted(expense.id))
        return expense

    def list_expenses(
        self,
        search: str = "",
        category: Optional[ExpenseCategory] = None,
        sort_by: SortKey = SortKey.DATE,
    ) -> list[Expense]:
        """Expenses matching the list controls."""
        return filter_expenses(
            self._ledger.expenses,
            search=search,
            category=category,
            sort_by=sort_by,
        )

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def summary(self, today: Optional[date] = None) -> DashboardSummary:
        """Headline numbers: overall total, current month, count."""
        today = today or date.today()
        total = total_spent(self._ledger.expenses)
        return DashboardSummary(
            total=total,
            total_display=self.format(total),
            month_label=month_label(month_key(today), long=True),
            transaction_count=len(self._ledger),
        )

    def report(
        self,
        month: Optional[str] = None,
        today: Optional[date] = None,
    ) -> MonthlyReport:
        """Monthly report for `month` ('YYYY-MM'), default the current month."""
        month = month or month_key(today or date.today())
        return monthly_report(self._ledger.expenses, month)

    def available_months(self, today: Optional[date] = None) -> list[str]:
        """Months offered in the report picker, newest first."""
        current = month_key(today or date.today())
        return available_months(self._ledger.expenses, current)

    def charts(self, today: Optional[date] = None) -> ChartData:
        """Chart series plus formatted tooltip text for each bar and slice."""
        expenses = self._ledger.expenses
        categories = category_breakdown(expenses)
        monthly = monthly_totals(expenses)

        tooltips = {share.category.value: self.format(share.amount) for share in categories}
        tooltips.update({m.label: self.format(m.amount) for m in monthly})

        return ChartData(
            categories=categories,
            monthly=monthly,
            daily=daily_series(
                expenses,
                days=self._settings.daily_trend_days,
                today=today,
            ),
            tooltips=tooltips,
        )

    def export_json(self, today: Optional[date] = None) -> tuple[str, str]:
        """
        Export all expenses.

        Returns:
            (filename, json_text) - e.g. ("expenses-2024-12-01.json", "[...]")
        """
        today = today or date.today()
        filename = f"expenses-{today.isoformat()}.json"
        payload = self._ledger.to_json(indent=2)
        if self._audit_logger:
            self._audit_logger.log(
                AuditEventBuilder.data_exported(filename, len(self._ledger))
            )
        return filename, payload


def create_tracker(settings: Optional[Settings] = None) -> ExpenseTracker:
    """
    Factory function to create a fully wired tracker.

    Chooses the store from STORAGE_BACKEND and enables audit persistence
    according to APP_AUDIT_LOG_MAX_EVENTS.
    """
    settings = settings or get_settings()
    app_settings = settings.app
    configure_logging(debug=app_settings.debug_mode)

    store = create_store(settings.storage)
    audit_logger = AuditLogger(store, max_events=app_settings.audit_log_max_events)
    return ExpenseTracker(store, audit_logger=audit_logger, app_settings=app_settings)
