"""Report commands for month summaries and category totals."""

from rich.markup import escape
from rich.table import Table

from pocketledger.commands.common import console, fail, open_ledger
from pocketledger.config import get_currency_symbol, load_config
from pocketledger.dates import current_month, month_label
from pocketledger.domain.models import CategoryTotal, Kind, Month
from pocketledger.domain.report import calculate_histogram_bar_length, format_amount
from pocketledger.errors import LedgerError

BAR_WIDTH = 30


def resolve_kinds(income: bool, expense: bool, both: bool) -> list[Kind]:
    """Pick which kinds a category report covers (expense by default)."""
    if both or (income and expense):
        return [Kind.EXPENSE, Kind.INCOME]
    if income:
        return [Kind.INCOME]
    return [Kind.EXPENSE]


def month_command(month: str | None = None) -> None:
    """Show income, expense and balance for a month."""
    month = month or current_month()

    try:
        summary = open_ledger().month_summary(month)
        label = month_label(month)
    except LedgerError as e:
        fail(e)

    symbol = get_currency_symbol(load_config())
    balance_color = "green" if summary.balance >= 0 else "red"

    console.print(f"\n[bold]Summary: {label}[/bold]")
    console.print(f"  Income:  [green]{format_amount(summary.income, symbol):>14}[/green]")
    console.print(f"  Expense: [red]{format_amount(summary.expense, symbol):>14}[/red]")
    console.print(f"  Balance: [{balance_color}]{format_amount(summary.balance, symbol):>14}[/{balance_color}]")


def render_category_totals(kind: Kind, month: Month, rows: list[CategoryTotal], symbol: str) -> None:
    """Render one category breakdown with histogram bars."""
    table = Table(title=f"Category Totals ({kind.value.title()}) {month_label(month)}")
    table.add_column("Category", style="magenta")
    table.add_column("Total", justify="right")
    table.add_column("", style="cyan")

    if not rows:
        console.print(f"\n[bold]Category Totals ({kind.value.title()}) {month_label(month)}[/bold]")
        console.print("[dim](no data)[/dim]")
        return

    max_total = max(row.total for row in rows)
    for row in rows:
        bar = "█" * calculate_histogram_bar_length(row.total, max_total, BAR_WIDTH)
        table.add_row(escape(row.category), format_amount(row.total, symbol), bar)

    console.print(table)


def category_command(
    month: str | None = None,
    income: bool = False,
    expense: bool = False,
    both: bool = False,
) -> None:
    """Show per-category totals for a month."""
    month = Month(month or current_month())
    kinds = resolve_kinds(income, expense, both)

    try:
        ledger = open_ledger()
        reports = [(kind, ledger.category_totals(month, kind)) for kind in kinds]
    except LedgerError as e:
        fail(e)

    symbol = get_currency_symbol(load_config())
    for kind, rows in reports:
        render_category_totals(kind, month, rows, symbol)
