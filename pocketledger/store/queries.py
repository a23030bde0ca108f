"""Database query functions for ledger entries."""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from pocketledger.dates import format_timestamp, parse_timestamp
from pocketledger.domain.models import CategoryName, Entry, Kind, Money
from pocketledger.store.schema import get_db_path

_ENTRY_COLUMNS = "id, kind, amount, category, note, created_at"


@contextmanager
def _connect(db_path: Path | None = None) -> Iterator[sqlite3.Connection]:
    """Open a database connection with row factory and full sync.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Yields:
        Database connection, closed on exit.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    # A commit is on disk before it returns
    conn.execute("PRAGMA synchronous = FULL")
    try:
        yield conn
    finally:
        conn.close()


def _row_to_entry(row: sqlite3.Row) -> Entry:
    return Entry(
        id=row["id"],
        kind=Kind(row["kind"]),
        amount=Money(Decimal(row["amount"])),
        category=CategoryName(row["category"]),
        note=row["note"],
        created_at=parse_timestamp(row["created_at"]),
    )


def insert_entry(
    kind: Kind,
    amount: Money,
    category: CategoryName,
    note: str | None,
    created_at: datetime,
    db_path: Path | None = None,
) -> Entry:
    """Insert a new entry.

    The caller is responsible for validating the fields first.

    Args:
        kind: Expense or income.
        amount: Positive amount.
        category: Category label, stored exactly as given.
        note: Optional note.
        created_at: Creation timestamp.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The stored Entry with its assigned id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    stamp = format_timestamp(created_at)
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO entries (kind, amount, category, note, created_at) VALUES (?, ?, ?, ?, ?)",
                (kind.value, str(amount), category, note, stamp),
            )
            entry_id = cursor.lastrowid
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

    return Entry(
        id=entry_id,
        kind=kind,
        amount=amount,
        category=category,
        note=note,
        created_at=parse_timestamp(stamp),
    )


def get_all_entries(db_path: Path | None = None, limit: int | None = None) -> list[Entry]:
    """Get all entries, newest first.

    Args:
        db_path: Path to the database file. If None, uses default location.
        limit: Maximum number of entries to return. If None, returns all.

    Returns:
        List of entries ordered by id descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = f"SELECT {_ENTRY_COLUMNS} FROM entries ORDER BY id DESC"
        params: list[int] = []

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor.execute(query, params)
        return [_row_to_entry(row) for row in cursor.fetchall()]


def get_entries_between(since: datetime, until: datetime, db_path: Path | None = None) -> list[Entry]:
    """Get entries created in the half-open interval [since, until).

    Args:
        since: Inclusive lower bound.
        until: Exclusive upper bound.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of entries ordered by id descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE created_at >= ? AND created_at < ? ORDER BY id DESC",
            (format_timestamp(since), format_timestamp(until)),
        )
        return [_row_to_entry(row) for row in cursor.fetchall()]


def get_entry(entry_id: int, db_path: Path | None = None) -> Entry | None:
    """Get a single entry by id.

    Args:
        entry_id: Entry ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The entry, or None if no entry has that id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE id = ?", (entry_id,))
        row = cursor.fetchone()
        return _row_to_entry(row) if row else None


def delete_entry(entry_id: int, db_path: Path | None = None) -> bool:
    """Delete an entry by id.

    Args:
        entry_id: Entry ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if an entry was removed, False if none had that id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM entries WHERE id = ?", (entry_id,))
            removed = cursor.rowcount > 0
            conn.commit()
            return removed
        except sqlite3.Error:
            conn.rollback()
            raise


def count_entries(db_path: Path | None = None) -> int:
    """Count stored entries.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT COUNT(*) FROM entries")
        return cursor.fetchone()[0]
