"""Pure functions for month summaries and category breakdowns.

This module contains the functional core for reporting:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations over Entry sequences

Sums are exact Decimals, computed in a wide context that traps any inexact
result. Rounding (half-even, two places) happens only in format_amount,
never while accumulating.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_EVEN, Context, Decimal, Inexact, InvalidOperation, localcontext

from pocketledger.dates import month_range
from pocketledger.domain.models import CategoryName, CategoryTotal, Entry, Kind, Money, Month, MonthSummary
from pocketledger.domain.validation import parse_kind

ZERO = Money(Decimal(0))

_CENTS = Decimal("0.01")

# Room for any sum of bounded amounts; an inexact result raises instead of rounding
_EXACT = Context(prec=60, rounding=ROUND_HALF_EVEN, traps=[Inexact, InvalidOperation])


def entries_in_month(entries: Iterable[Entry], month: Month) -> list[Entry]:
    """Filter entries to those created within a month.

    Args:
        entries: Entries to filter.
        month: Month in YYYY-MM format.

    Returns:
        Entries whose created_at falls in [start, end) of the month, in input order.

    Raises:
        InvalidMonthKey: If month is not a valid month key.
    """
    start, end = month_range(month)
    return [entry for entry in entries if start <= entry.created_at < end]


def month_summary(entries: Iterable[Entry], month: Month) -> MonthSummary:
    """Calculate income, expense and balance for a month.

    Args:
        entries: Entries to summarize; those outside the month are ignored.
        month: Month in YYYY-MM format.

    Returns:
        MonthSummary. An empty month gives zero for all three figures.

    Raises:
        InvalidMonthKey: If month is not a valid month key.
    """
    income = ZERO
    expense = ZERO

    with localcontext(_EXACT):
        for entry in entries_in_month(entries, month):
            if entry.kind is Kind.INCOME:
                income = Money(income + entry.amount)
            else:
                expense = Money(expense + entry.amount)
        balance = Money(income - expense)

    return MonthSummary(month=month, income=income, expense=expense, balance=balance)


def sort_category_totals(totals: dict[CategoryName, Money]) -> list[CategoryTotal]:
    """Sort totals by amount descending, then category name ascending."""
    with localcontext(_EXACT):
        ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [CategoryTotal(category=category, total=total) for category, total in ordered]


def category_totals(entries: Iterable[Entry], month: Month, kind: Kind | str) -> list[CategoryTotal]:
    """Total amounts per category for one kind within a month.

    Categories are grouped by exact, case-sensitive match. Categories with no
    entries in range do not appear.

    Args:
        entries: Entries to group.
        month: Month in YYYY-MM format.
        kind: Kind to include.

    Returns:
        CategoryTotal list ordered by total descending, ties by category ascending.

    Raises:
        InvalidMonthKey: If month is not a valid month key.
        InvalidKind: If kind is not expense or income.
    """
    wanted = parse_kind(kind)
    totals: dict[CategoryName, Money] = {}

    with localcontext(_EXACT):
        for entry in entries_in_month(entries, month):
            if entry.kind is not wanted:
                continue
            totals[entry.category] = Money(totals.get(entry.category, ZERO) + entry.amount)

    return sort_category_totals(totals)


def round_amount(amount: Decimal) -> Decimal:
    """Round to two places using banker's rounding."""
    with localcontext(_EXACT) as ctx:
        ctx.traps[Inexact] = False
        return amount.quantize(_CENTS, rounding=ROUND_HALF_EVEN)


def format_amount(amount: Decimal, symbol: str = "") -> str:
    """Format an amount for display (e.g., "£1,234.56" or "-12.00").

    Args:
        amount: Amount to format.
        symbol: Optional currency symbol placed after the sign.

    Returns:
        Formatted string with thousands separators and two decimal places.
    """
    rounded = round_amount(amount).copy_abs()
    sign = "-" if amount < 0 and rounded else ""
    return f"{sign}{symbol}{rounded:,.2f}"


def calculate_histogram_bar_length(amount: Decimal, max_amount: Decimal, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
