"""
Report Models

Rows produced by the analytics layer. Charts, tooltips and the monthly
report all consume these instead of raw expense lists.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from expense_tracker.models.expense import ExpenseCategory


class CategoryShare(BaseModel):
    """Total spent in one category and its share of the overall total."""

    category: ExpenseCategory
    amount: Decimal
    percentage: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Share of the total, rounded to one decimal place"
    )


class MonthlyTotal(BaseModel):
    """Total spent in one calendar month."""

    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Month key in 'YYYY-MM' form"
    )
    label: str = Field(
        ...,
        description="Short display label, e.g. 'Jan 2024'"
    )
    amount: Decimal


class DailyPoint(BaseModel):
    """Total spent on one day (zero when nothing was recorded)."""

    day: date
    label: str = Field(
        ...,
        description="Short display label, e.g. 'Jan 5'"
    )
    amount: Decimal


class MonthlyReport(BaseModel):
    """
    Statistics for one month, compared with the month before it.

    change_percent is 0 when the previous month has no spending,
    so callers never divide by zero.
    """

    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    label: str
    total: Decimal
    transaction_count: int = Field(ge=0)
    average_per_day: Decimal
    categories: list[CategoryShare] = Field(default_factory=list)
    top_category: Optional[ExpenseCategory] = None
    top_category_amount: Decimal = Decimal("0")

    previous_month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    previous_total: Decimal
    change: Decimal
    change_percent: float

    @property
    def has_previous(self) -> bool:
        """Was there any spending in the previous month?"""
        return self.previous_total > 0


class DashboardSummary(BaseModel):
    """Headline numbers shown above the expense list."""

    total: Decimal
    total_display: str
    month_label: str
    transaction_count: int = Field(ge=0)


class ChartData(BaseModel):
    """Series backing the category, monthly and daily charts."""

    categories: list[CategoryShare] = Field(default_factory=list)
    monthly: list[MonthlyTotal] = Field(default_factory=list)
    daily: list[DailyPoint] = Field(default_factory=list)
    tooltips: dict[str, str] = Field(
        default_factory=dict,
        description="Formatted amount for each category and month label"
    )
