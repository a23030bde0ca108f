"""Admin commands for initializing and listing the ledger."""

import sys

from rich.markup import escape
from rich.table import Table

from pocketledger.commands.common import console, fail, open_ledger
from pocketledger.config import create_default_config, get_config_path, get_currency_symbol, load_config, resolve_db_path
from pocketledger.domain.models import Kind
from pocketledger.domain.report import format_amount
from pocketledger.errors import LedgerError
from pocketledger.store.schema import database_exists


def init_command(force: bool = False) -> None:
    """Initialize pocketledger database and configuration."""
    config_path = get_config_path()

    try:
        # Guard: refuse to reset the config without force flag
        if config_path.exists() and not force:
            console.print("[red]Initialization failed:[/red]", style="bold")
            console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'pocketledger init --force' to reset it[/yellow]")
            sys.exit(1)

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        db_existed = database_exists(resolve_db_path(load_config()))
        ledger = open_ledger()
        if db_existed:
            console.print("[green]✓[/green] Existing database kept (schema up to date)")
        else:
            console.print("[green]✓[/green] Database initialized")

        console.print("\n[green]Initialization complete![/green]", style="bold")
        console.print(f"[dim]Database: {ledger.db_path}[/dim]")
        console.print(f"[dim]Config: {config_path}[/dim]")

    except LedgerError as e:
        fail(e)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def list_command(
    limit: int = 50,
    all: bool = False,
) -> None:
    """List entries, newest first."""
    try:
        ledger = open_ledger()
        entries = ledger.list(None if all else limit)
        total = ledger.count()
    except LedgerError as e:
        fail(e)

    if not entries:
        console.print("[yellow]No entries found[/yellow]")
        return

    symbol = get_currency_symbol(load_config())
    title = f"Entries (showing all {total})" if len(entries) == total else f"Entries (showing {len(entries)} of {total})"
    table = Table(title=title)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Created (UTC)", style="cyan")
    table.add_column("Kind")
    table.add_column("Amount", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Note", style="white")

    for entry in entries:
        amount = format_amount(entry.amount, symbol)
        if entry.kind is Kind.EXPENSE:
            amount_display = f"[red]-{amount}[/red]"
        else:
            amount_display = f"[green]+{amount}[/green]"

        table.add_row(
            str(entry.id),
            entry.created_at.strftime("%Y-%m-%d %H:%M"),
            entry.kind.value,
            amount_display,
            escape(entry.category),
            escape(entry.note) if entry.note else "[dim]-[/dim]",
        )

    console.print(table)
