"""Database schema initialization."""

import os
import sqlite3
from pathlib import Path

DB_ENV_VAR = "POCKETLEDGER_DB"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path.

    The POCKETLEDGER_DB environment variable wins; otherwise the database
    lives under the XDG data directory.
    """
    override = os.environ.get(DB_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_xdg_data_home() / "pocketledger" / "ledger.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Safe to run against an existing database.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        # AUTOINCREMENT so ids of deleted entries are never handed out again
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS entries (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                kind TEXT NOT NULL CHECK (kind IN ('expense', 'income')),
                amount TEXT NOT NULL CHECK (CAST(amount AS REAL) > 0),
                category TEXT NOT NULL CHECK (length(trim(category)) > 0),
                note TEXT,
                created_at TEXT NOT NULL
            )
        """
        )

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_entries_created_at ON entries(created_at)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_entries_kind_created_at ON entries(kind, created_at)")

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
