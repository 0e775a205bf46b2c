"""
Expense Ledger

Owns the list of recorded expenses and keeps the key-value store in
sync with it.

DESIGN DECISION: The ledger writes the full list after every mutation.
There is no dirty tracking and no batching; a personal ledger is small
and losing an edit is worse than rewriting a few kilobytes.
"""

import json
from typing import Iterator, Optional
from uuid import UUID

from pydantic import ValidationError

from expense_tracker.models.expense import Expense, ExpenseDraft
from expense_tracker.storage import EXPENSES_KEY, KeyValueStore, NotFoundError, StorageError


class ExpenseNotFoundError(NotFoundError):
    """No expense with the requested ID exists."""

    def __init__(self, expense_id: UUID):
        super().__init__(f"Expense not found: {expense_id}")
        self.expense_id = expense_id


class ExpenseLedger:
    """
    CRUD over the user's expenses, newest first.

    The expense list is loaded from the store once, at construction.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store
        self._expenses: list[Expense] = self._load()

    def _load(self) -> list[Expense]:
        raw = self._store.get(EXPENSES_KEY)
        if not raw:
            return []
        try:
            rows = json.loads(raw)
            return [Expense.model_validate(row) for row in rows]
        except (ValueError, TypeError, ValidationError) as e:
            raise StorageError(f"Stored expenses are corrupt: {e}") from e

    def _commit(self, expenses: list[Expense]) -> None:
        """Persist a new list, then adopt it. A failed write changes nothing."""
        self._store.set(EXPENSES_KEY, self._serialize(expenses))
        self._expenses = expenses

    @staticmethod
    def _serialize(expenses: list[Expense], indent: Optional[int] = None) -> str:
        return json.dumps(
            [expense.model_dump(mode="json") for expense in expenses],
            ensure_ascii=False,
            indent=indent,
        )

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize the expense list (newest first) to JSON text."""
        return self._serialize(self._expenses, indent=indent)

    @property
    def expenses(self) -> list[Expense]:
        """All expenses, newest first (a copy)."""
        return list(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(list(self._expenses))

    def get(self, expense_id: UUID) -> Expense:
        """
        Get one expense.

        Raises:
            ExpenseNotFoundError: If no expense has this ID
        """
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        raise ExpenseNotFoundError(expense_id)

    def add(self, draft: ExpenseDraft) -> Expense:
        """Record a new expense at the top of the list."""
        expense = Expense(**draft.model_dump())
        self._commit([expense] + self._expenses)
        return expense

    def update(self, expense_id: UUID, draft: ExpenseDraft) -> Expense:
        """
        Replace an expense's editable fields, keeping its ID and position.

        Raises:
            ExpenseNotFoundError: If no expense has this ID
        """
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                updated = expense.with_changes(draft)
                expenses = list(self._expenses)
                expenses[index] = updated
                self._commit(expenses)
                return updated
        raise ExpenseNotFoundError(expense_id)

    def delete(self, expense_id: UUID) -> Expense:
        """
        Remove an expense and return it.

        Raises:
            ExpenseNotFoundError: If no expense has this ID
        """
        expense = self.get(expense_id)
        self._commit([e for e in self._expenses if e.id != expense_id])
        return expense
