"""Tests for pocketledger.domain.report pure functions."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from pocketledger.domain.models import CategoryName, CategoryTotal, Entry, Kind, Money, Month
from pocketledger.domain.report import (
    calculate_histogram_bar_length,
    category_totals,
    entries_in_month,
    format_amount,
    month_summary,
    round_amount,
)
from pocketledger.errors import InvalidKind, InvalidMonthKey


def make_entry(
    entry_id: int,
    kind: Kind,
    amount: str,
    category: str,
    created_at: datetime | None = None,
) -> Entry:
    return Entry(
        id=entry_id,
        kind=kind,
        amount=Money(Decimal(amount)),
        category=CategoryName(category),
        note=None,
        created_at=created_at or datetime(2024, 1, 15, 12, 0, tzinfo=UTC),
    )


JANUARY = Month("2024-01")


class TestEntriesInMonth:
    """Tests for entries_in_month."""

    def test_boundaries_are_half_open(self) -> None:
        """Last instant of the month is in; first instant of the next is out."""
        last = make_entry(1, Kind.EXPENSE, "1", "a", datetime(2024, 1, 31, 23, 59, 59, 999999, tzinfo=UTC))
        first_next = make_entry(2, Kind.EXPENSE, "1", "a", datetime(2024, 2, 1, tzinfo=UTC))
        first = make_entry(3, Kind.EXPENSE, "1", "a", datetime(2024, 1, 1, tzinfo=UTC))

        result = entries_in_month([last, first_next, first], JANUARY)

        assert [entry.id for entry in result] == [1, 3]

    def test_invalid_month_raises(self) -> None:
        with pytest.raises(InvalidMonthKey):
            entries_in_month([], Month("2024-1"))


class TestMonthSummary:
    """Tests for month_summary."""

    def test_sums_income_and_expense(self) -> None:
        entries = [
            make_entry(1, Kind.INCOME, "1000.00", "salary"),
            make_entry(2, Kind.INCOME, "250.50", "gift"),
            make_entry(3, Kind.EXPENSE, "40.25", "food"),
            make_entry(4, Kind.EXPENSE, "9.75", "gas"),
        ]

        summary = month_summary(entries, JANUARY)

        assert summary.month == "2024-01"
        assert summary.income == Decimal("1250.50")
        assert summary.expense == Decimal("50.00")
        assert summary.balance == Decimal("1200.50")

    def test_ignores_other_months(self) -> None:
        entries = [
            make_entry(1, Kind.INCOME, "100", "salary"),
            make_entry(2, Kind.INCOME, "999", "salary", datetime(2024, 2, 1, tzinfo=UTC)),
            make_entry(3, Kind.EXPENSE, "999", "food", datetime(2023, 12, 31, 23, 59, tzinfo=UTC)),
        ]

        summary = month_summary(entries, JANUARY)

        assert summary.income == Decimal("100")
        assert summary.expense == Decimal("0")

    def test_empty_month_is_zero(self) -> None:
        summary = month_summary([], JANUARY)

        assert summary.income == 0
        assert summary.expense == 0
        assert summary.balance == 0

    def test_negative_balance(self) -> None:
        entries = [make_entry(1, Kind.INCOME, "10", "a"), make_entry(2, Kind.EXPENSE, "25", "b")]

        assert month_summary(entries, JANUARY).balance == Decimal("-15")

    def test_no_drift_over_many_entries(self) -> None:
        """A thousand 0.10 expenses sum to exactly 100.00."""
        entries = [make_entry(i, Kind.EXPENSE, "0.10", "coffee") for i in range(1000)]

        assert month_summary(entries, JANUARY).expense == Decimal("100.00")

    def test_sum_wider_than_default_precision_is_exact(self) -> None:
        """Cents survive next to a 28-digit total instead of being rounded away."""
        entries = [
            make_entry(1, Kind.INCOME, "1000000000000000000000000000", "a"),
            make_entry(2, Kind.INCOME, "0.01", "b"),
        ]

        summary = month_summary(entries, JANUARY)

        assert summary.income == Decimal("1000000000000000000000000000.01")
        assert summary.balance == Decimal("1000000000000000000000000000.01")

    def test_to_dict_keeps_exact_decimals(self) -> None:
        entries = [make_entry(1, Kind.INCOME, "0.30", "a"), make_entry(2, Kind.EXPENSE, "0.10", "b")]

        assert month_summary(entries, JANUARY).to_dict() == {
            "month": "2024-01",
            "income": Decimal("0.30"),
            "expense": Decimal("0.10"),
            "balance": Decimal("0.20"),
        }


class TestCategoryTotals:
    """Tests for category_totals."""

    def test_groups_and_orders_by_total_descending(self) -> None:
        entries = [
            make_entry(1, Kind.EXPENSE, "10", "food"),
            make_entry(2, Kind.EXPENSE, "5", "food"),
            make_entry(3, Kind.EXPENSE, "20", "gas"),
        ]

        result = category_totals(entries, JANUARY, Kind.EXPENSE)

        assert result == [
            CategoryTotal(category=CategoryName("gas"), total=Money(Decimal("20"))),
            CategoryTotal(category=CategoryName("food"), total=Money(Decimal("15"))),
        ]

    def test_ties_broken_by_category_name(self) -> None:
        entries = [
            make_entry(1, Kind.EXPENSE, "5", "zoo"),
            make_entry(2, Kind.EXPENSE, "5", "art"),
            make_entry(3, Kind.EXPENSE, "5", "music"),
        ]

        result = category_totals(entries, JANUARY, "expense")

        assert [row.category for row in result] == ["art", "music", "zoo"]

    def test_filters_by_kind(self) -> None:
        entries = [
            make_entry(1, Kind.EXPENSE, "10", "food"),
            make_entry(2, Kind.INCOME, "500", "salary"),
        ]

        result = category_totals(entries, JANUARY, Kind.INCOME)

        assert [(row.category, row.total) for row in result] == [("salary", Decimal("500"))]

    def test_case_sensitive_grouping(self) -> None:
        """Food and food are different categories."""
        entries = [
            make_entry(1, Kind.EXPENSE, "3", "Food"),
            make_entry(2, Kind.EXPENSE, "4", "food"),
            make_entry(3, Kind.EXPENSE, "1", "food "),
        ]

        result = category_totals(entries, JANUARY, Kind.EXPENSE)

        assert [row.category for row in result] == ["food", "Food", "food "]

    def test_omits_categories_outside_month(self) -> None:
        entries = [
            make_entry(1, Kind.EXPENSE, "10", "food"),
            make_entry(2, Kind.EXPENSE, "10", "travel", datetime(2024, 3, 1, tzinfo=UTC)),
        ]

        result = category_totals(entries, JANUARY, Kind.EXPENSE)

        assert [row.category for row in result] == ["food"]

    def test_empty_result(self) -> None:
        assert category_totals([], JANUARY, Kind.EXPENSE) == []

    def test_large_totals_are_exact(self) -> None:
        entries = [
            make_entry(1, Kind.EXPENSE, "1000000000000000000000000000", "rent"),
            make_entry(2, Kind.EXPENSE, "0.01", "rent"),
        ]

        result = category_totals(entries, JANUARY, Kind.EXPENSE)

        assert result[0].total == Decimal("1000000000000000000000000000.01")

    def test_output_is_stable_regardless_of_input_order(self) -> None:
        entries = [
            make_entry(1, Kind.EXPENSE, "5", "b"),
            make_entry(2, Kind.EXPENSE, "7", "a"),
            make_entry(3, Kind.EXPENSE, "5", "c"),
        ]

        forward = category_totals(entries, JANUARY, Kind.EXPENSE)
        backward = category_totals(list(reversed(entries)), JANUARY, Kind.EXPENSE)

        assert forward == backward

    def test_invalid_kind_raises(self) -> None:
        with pytest.raises(InvalidKind):
            category_totals([], JANUARY, "transfer")

    def test_invalid_month_raises(self) -> None:
        with pytest.raises(InvalidMonthKey):
            category_totals([], Month("January"), Kind.EXPENSE)


class TestFormatting:
    """Tests for rounding and display helpers."""

    def test_round_half_even(self) -> None:
        assert round_amount(Decimal("0.125")) == Decimal("0.12")
        assert round_amount(Decimal("0.135")) == Decimal("0.14")

    def test_format_amount(self) -> None:
        assert format_amount(Decimal("1234.5")) == "1,234.50"
        assert format_amount(Decimal("-15"), "£") == "-£15.00"

    def test_format_amount_wider_than_default_precision(self) -> None:
        assert format_amount(Decimal("1000000000000000000000000000.005")) == "1,000,000,000,000,000,000,000,000,000.00"

    def test_format_tiny_negative_has_no_sign(self) -> None:
        assert format_amount(Decimal("-0.001")) == "0.00"

    def test_histogram_bar_length(self) -> None:
        assert calculate_histogram_bar_length(Decimal("5"), Decimal("10"), 30) == 15
        assert calculate_histogram_bar_length(Decimal("5"), Decimal("0"), 30) == 0
