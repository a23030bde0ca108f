"""Entry management commands (add, delete)."""

from rich.markup import escape

from pocketledger.commands.common import console, fail, open_ledger
from pocketledger.config import get_currency_symbol, load_config
from pocketledger.domain.report import format_amount
from pocketledger.errors import LedgerError


def add_command(kind: str, amount: str, category: str, note: list[str] | None = None) -> None:
    """Add an entry.

    Args:
        kind: "expense" or "income".
        amount: Amount as typed on the command line (e.g., "12.50").
        category: Category label.
        note: Optional note words, joined with spaces.
    """
    note_text = " ".join(note) if note else None

    try:
        ledger = open_ledger()
        entry = ledger.add(kind, amount, category, note_text)
    except LedgerError as e:
        fail(e)

    symbol = get_currency_symbol(load_config())
    console.print(f"[green]✓[/green] Entry added (ID: {entry.id}):")
    console.print(f"  Kind: {entry.kind.value}")
    console.print(f"  Amount: {format_amount(entry.amount, symbol)}")
    console.print(f"  Category: {escape(entry.category)}")
    if entry.note is not None:
        console.print(f"  Note: {escape(entry.note)}")


def delete_command(entry_id: int) -> None:
    """Delete an entry by ID.

    A missing ID is reported but is not an error.
    """
    try:
        removed = open_ledger().delete(entry_id)
    except LedgerError as e:
        fail(e)

    if removed:
        console.print(f"[green]✓[/green] Entry {entry_id} deleted")
    else:
        console.print(f"[yellow]No entry found with ID: {entry_id}[/yellow]")
