"""
Expense Models

These models define the schema of a recorded expense and of the
filters used to browse them.

DESIGN DECISION: Amounts are Decimals with at most two fractional digits.
Free-text amounts are parsed before they reach these models, so a model
never has to guess what a string meant.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Categories offered for organizing expenses.

    Member order is the order shown to the user.
    """
    FOOD_AND_DINING = "Food & Dining"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    TRAVEL = "Travel"
    EDUCATION = "Education"
    OTHER = "Other"


class SortKey(str, Enum):
    """How an expense list is ordered."""
    DATE = "date"          # newest first
    AMOUNT = "amount"      # largest first
    CATEGORY = "category"  # alphabetical


# =============================================================================
# CORE EXPENSE MODELS
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    The user-editable part of an expense.

    This is what the add/edit form submits. All fields are required.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Amount spent, in the session currency"
    )
    category: ExpenseCategory = Field(
        ...,
        description="Expense category"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="What the money was spent on"
    )
    spent_on: date = Field(
        ...,
        description="Date of the expense"
    )


class Expense(ExpenseDraft):
    """
    A recorded expense.

    Identity and creation time are assigned by the ledger and never
    change when the expense is edited.
    """

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense ID"
    )
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the expense was recorded (UTC)"
    )

    def with_changes(self, draft: ExpenseDraft) -> "Expense":
        """Return a copy carrying the draft's fields and this identity."""
        return Expense(
            id=self.id,
            created_at=self.created_at,
            **draft.model_dump(),
        )


class ExpenseFilter(BaseModel):
    """Search, category filter and ordering for an expense list."""

    search: str = Field(
        default="",
        description="Case-insensitive text matched against description and category"
    )
    category: Optional[ExpenseCategory] = Field(
        default=None,
        description="Only this category (None means all)"
    )
    sort_by: SortKey = Field(
        default=SortKey.DATE
    )
