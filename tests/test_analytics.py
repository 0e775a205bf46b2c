"""Tests for spending analytics."""

from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.analytics import (
    available_months,
    category_breakdown,
    daily_series,
    month_label,
    monthly_report,
    monthly_totals,
    previous_month,
    total_spent,
)
from expense_tracker.analytics.reports import days_in_month
from expense_tracker.models.expense import ExpenseCategory


class TestMonthHelpers:
    """Tests for month key arithmetic and labels."""

    def test_previous_month_wraps_year(self):
        """Test January steps back to December."""
        assert previous_month("2024-01") == "2023-12"
        assert previous_month("2024-12") == "2024-11"

    def test_month_labels(self):
        """Test short and long labels."""
        assert month_label("2024-01") == "Jan 2024"
        assert month_label("2024-09", long=True) == "September 2024"

    def test_days_in_month(self):
        """Test leap years are respected."""
        assert days_in_month("2024-02") == 29
        assert days_in_month("2023-02") == 28
        assert days_in_month("2024-12") == 31

    @pytest.mark.parametrize("bad", ["2024", "2024-13", "2024-00", "24-1x", "2024-01-01"])
    def test_invalid_month_key(self, bad):
        """Test malformed month keys are rejected."""
        with pytest.raises(ValueError, match="YYYY-MM"):
            previous_month(bad)


class TestAggregations:
    """Tests for totals, breakdowns and series."""

    def test_total_spent(self, sample_expenses):
        """Test the overall sum is exact."""
        assert total_spent(sample_expenses) == Decimal("795.50")

    def test_total_spent_empty(self):
        """Test an empty list sums to zero."""
        assert total_spent([]) == Decimal("0")

    def test_category_breakdown(self, sample_expenses):
        """Test per-category totals, shares and ordering."""
        shares = category_breakdown(sample_expenses)
        assert [s.category for s in shares] == [
            ExpenseCategory.SHOPPING,
            ExpenseCategory.FOOD_AND_DINING,
            ExpenseCategory.BILLS_AND_UTILITIES,
            ExpenseCategory.TRANSPORTATION,
        ]
        assert shares[0].amount == Decimal("300.00")
        assert shares[1].amount == Decimal("250.00")
        assert shares[0].percentage == 37.7
        assert sum(s.amount for s in shares) == Decimal("795.50")

    def test_category_breakdown_ties_follow_category_order(self, sample_expenses):
        """Test equal totals are ordered like the category enum."""
        tied = category_breakdown([
            sample_expenses[1].model_copy(update={"amount": Decimal("50.00")}),  # Transportation 50
            sample_expenses[5],  # Food & Dining 50
        ])
        assert [s.category for s in tied] == [
            ExpenseCategory.FOOD_AND_DINING,
            ExpenseCategory.TRANSPORTATION,
        ]
        assert [s.percentage for s in tied] == [50.0, 50.0]

    def test_category_breakdown_empty(self):
        """Test nothing to break down yields an empty list."""
        assert category_breakdown([]) == []

    def test_monthly_totals(self, sample_expenses):
        """Test months are summed and ordered oldest first."""
        totals = monthly_totals(sample_expenses)
        assert [t.month for t in totals] == ["2024-11", "2024-12"]
        assert [t.label for t in totals] == ["Nov 2024", "Dec 2024"]
        assert totals[0].amount == Decimal("250.00")
        assert totals[1].amount == Decimal("545.50")

    def test_daily_series(self, sample_expenses):
        """Test the zero-filled window ending today."""
        series = daily_series(sample_expenses, days=5, today=date(2024, 12, 14))
        assert [p.day for p in series] == [
            date(2024, 12, 10),
            date(2024, 12, 11),
            date(2024, 12, 12),
            date(2024, 12, 13),
            date(2024, 12, 14),
        ]
        assert [p.amount for p in series] == [
            Decimal("0"), Decimal("0"), Decimal("45.50"), Decimal("0"), Decimal("120.00"),
        ]
        assert series[-1].label == "Dec 14"

    def test_daily_series_default_length(self, sample_expenses):
        """Test the default thirty-day window."""
        series = daily_series(sample_expenses, today=date(2024, 12, 14))
        assert len(series) == 30
        assert series[0].day == date(2024, 11, 15)

    def test_daily_series_rejects_empty_window(self):
        """Test a window must cover at least one day."""
        with pytest.raises(ValueError):
            daily_series([], days=0)

    def test_available_months(self, sample_expenses):
        """Test months with data, newest first."""
        assert available_months(sample_expenses, "2024-12") == ["2024-12", "2024-11"]

    def test_available_months_adds_current(self, sample_expenses):
        """Test the current month is offered even without expenses."""
        assert available_months(sample_expenses, "2025-01") == ["2025-01", "2024-12", "2024-11"]


class TestMonthlyReport:
    """Tests for the monthly report."""

    def test_report_for_december(self, sample_expenses):
        """Test totals and the comparison with November."""
        report = monthly_report(sample_expenses, "2024-12")
        assert report.label == "December 2024"
        assert report.total == Decimal("545.50")
        assert report.transaction_count == 4
        assert report.average_per_day == Decimal("17.60")
        assert report.top_category == ExpenseCategory.SHOPPING
        assert report.top_category_amount == Decimal("300.00")
        assert report.previous_month == "2024-11"
        assert report.previous_total == Decimal("250.00")
        assert report.change == Decimal("295.50")
        assert report.change_percent == 118.2
        assert report.has_previous is True

    def test_report_without_previous_month(self, sample_expenses):
        """Test change percent is zero when last month had no spending."""
        report = monthly_report(sample_expenses, "2024-11")
        assert report.previous_total == Decimal("0")
        assert report.change == Decimal("250.00")
        assert report.change_percent == 0.0
        assert report.has_previous is False

    def test_report_for_empty_month(self, sample_expenses):
        """Test a month without expenses."""
        report = monthly_report(sample_expenses, "2025-01")
        assert report.total == Decimal("0")
        assert report.transaction_count == 0
        assert report.categories == []
        assert report.top_category is None
        assert report.change == Decimal("-545.50")
        assert report.change_percent == -100.0
