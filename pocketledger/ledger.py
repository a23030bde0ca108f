"""Ledger engine: the single entry point for storing and querying entries.

Ledger ties the pure domain functions to the SQLite store. It validates
before writing, stamps entries in UTC, serializes mutations behind one lock
and turns database failures into StorageError.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from pocketledger import store
from pocketledger.dates import REFERENCE_TZ, month_range
from pocketledger.domain.models import CategoryTotal, Entry, Kind, Month, MonthSummary
from pocketledger.domain import report
from pocketledger.domain.validation import normalize_note, parse_kind, validate_entry
from pocketledger.errors import NotFound, StorageError

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(REFERENCE_TZ)


class Ledger:
    """Personal ledger backed by one SQLite file.

    Args:
        db_path: Database file. If None, uses the default location.
        clock: Callable returning the creation timestamp for new entries.
    """

    def __init__(
        self,
        db_path: Path | str | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.db_path = Path(db_path) if db_path is not None else store.get_db_path()
        self._clock = clock or _utc_now
        self._lock = threading.Lock()
        with self._storage("init"):
            store.init_database(self.db_path)

    @contextmanager
    def _storage(self, operation: str) -> Iterator[None]:
        try:
            yield
        except (sqlite3.Error, OSError) as e:
            logger.error("ledger.%s.failed db_path=%s error=%s", operation, self.db_path, e)
            raise StorageError(f"Database error during {operation}: {e}") from e

    def add(self, kind: Kind | str, amount: Any, category: str, note: str | None = None) -> Entry:
        """Validate and store a new entry.

        Args:
            kind: "expense" or "income".
            amount: Positive number (Decimal, int, float or numeric string).
            category: Non-blank category label.
            note: Optional note; blank notes are stored as None.

        Returns:
            The stored Entry.

        Raises:
            ValidationError: If any field is rejected. Nothing is written.
            StorageError: If the database write fails.
        """
        valid = validate_entry(kind, amount, category)
        note = normalize_note(note)

        with self._lock, self._storage("add"):
            entry = store.insert_entry(
                valid.kind,
                valid.amount,
                valid.category,
                note,
                self._clock(),
                self.db_path,
            )

        logger.info("ledger.add id=%s kind=%s category=%s", entry.id, entry.kind.value, entry.category)
        return entry

    def list(self, limit: int | None = None) -> list[Entry]:
        """List entries, newest (highest id) first."""
        with self._lock, self._storage("list"):
            return store.get_all_entries(self.db_path, limit)

    def count(self) -> int:
        with self._lock, self._storage("count"):
            return store.count_entries(self.db_path)

    def get(self, entry_id: int) -> Entry | None:
        """Get an entry by id, or None if it does not exist."""
        with self._lock, self._storage("get"):
            return store.get_entry(entry_id, self.db_path)

    def require(self, entry_id: int) -> Entry:
        """Get an entry by id.

        Raises:
            NotFound: If no entry has that id.
        """
        entry = self.get(entry_id)
        if entry is None:
            raise NotFound(f"No entry found with ID: {entry_id}")
        return entry

    def delete(self, entry_id: int) -> bool:
        """Delete an entry.

        Returns:
            True if the entry was removed, False if it did not exist.
        """
        with self._lock, self._storage("delete"):
            removed = store.delete_entry(entry_id, self.db_path)

        logger.info("ledger.delete id=%s removed=%s", entry_id, removed)
        return removed

    def _entries_for_month(self, month: Month) -> list[Entry]:
        since, until = month_range(month)
        with self._lock, self._storage("query"):
            return store.get_entries_between(since, until, self.db_path)

    def month_summary(self, month: Month | str) -> MonthSummary:
        """Income, expense and balance for a YYYY-MM month.

        Raises:
            InvalidMonthKey: If month is not a valid month key.
        """
        return report.month_summary(self._entries_for_month(Month(month)), Month(month))

    def category_totals(self, month: Month | str, kind: Kind | str) -> list[CategoryTotal]:
        """Per-category totals for one kind in a YYYY-MM month.

        Raises:
            InvalidMonthKey: If month is not a valid month key.
            InvalidKind: If kind is not expense or income.
        """
        wanted = parse_kind(kind)
        return report.category_totals(self._entries_for_month(Month(month)), Month(month), wanted)
