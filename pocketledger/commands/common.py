"""Helpers shared by the CLI commands."""

import sys
from typing import NoReturn

from rich.console import Console
from rich.markup import escape

from pocketledger.config import load_config, resolve_db_path
from pocketledger.errors import LedgerError, StorageError, ValidationError
from pocketledger.ledger import Ledger

console = Console()


def open_ledger() -> Ledger:
    """Open the ledger at the configured database path."""
    return Ledger(resolve_db_path(load_config()))


def fail(error: LedgerError) -> NoReturn:
    """Print an error and exit with status 1."""
    message = escape(str(error))
    if isinstance(error, StorageError):
        console.print(f"[red]Database error: {message}[/red]", style="bold")
    elif isinstance(error, ValidationError):
        console.print(f"[red]{message}[/red]")
    else:
        console.print(f"[red]Error: {message}[/red]")
    sys.exit(1)
