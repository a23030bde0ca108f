"""CLI entry point for pocketledger."""

import logging
import sys
import tomllib

import typer

from pocketledger.commands.admin import init_command, list_command
from pocketledger.commands.common import console
from pocketledger.commands.entries import add_command, delete_command
from pocketledger.commands.report import category_command, month_command
from pocketledger.config import DEFAULT_LOG_LEVEL, load_config

app = typer.Typer(
    name="pocketledger",
    help="pocketledger - A personal income and expense ledger",
    add_completion=False,
)

report_app = typer.Typer(help="Show month summaries and category breakdowns.")
app.add_typer(report_app, name="report")


def configure_logging(verbose: bool) -> None:
    """Configure logging from --verbose or the config log_level."""
    try:
        level_name = "INFO" if verbose else str(load_config().get("log_level", DEFAULT_LOG_LEVEL))
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {e}[/red]", style="bold")
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log ledger operations"),
) -> None:
    """pocketledger - A personal income and expense ledger."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Reset an existing config to defaults"),
) -> None:
    """Initialize pocketledger database and configuration."""
    init_command(force)


@app.command()
def add(
    kind: str = typer.Argument(..., help="'expense' or 'income'"),
    amount: str = typer.Argument(..., help="Positive amount (e.g., 12.50)"),
    category: str = typer.Argument(..., help="Category label"),
    note: list[str] = typer.Argument(None, help="Optional note"),
) -> None:
    """Add an expense or income entry."""
    add_command(kind, amount, category, note)


@app.command(name="list")
def list_entries(
    limit: int = typer.Option(50, help="Maximum entries to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your entries"),
) -> None:
    """List your entries, newest first."""
    list_command(limit, all)


@app.command()
def delete(
    entry_id: int = typer.Argument(..., help="Entry ID (from 'pocketledger list')"),
) -> None:
    """Delete an entry."""
    delete_command(entry_id)


@report_app.command(name="month")
def report_month(
    month: str = typer.Argument(None, help="Month (YYYY-MM), default: current month"),
) -> None:
    """Show income, expense and balance for a month."""
    month_command(month)


@report_app.command(name="category")
def report_category(
    month: str = typer.Argument(None, help="Month (YYYY-MM), default: current month"),
    income: bool = typer.Option(False, "--income", help="Show income categories"),
    expense: bool = typer.Option(False, "--expense", help="Show expense categories (default)"),
    both: bool = typer.Option(False, "--both", help="Show expense and income categories"),
) -> None:
    """Show totals per category for a month."""
    category_command(month, income, expense, both)


if __name__ == "__main__":
    app()
