"""Database store layer - provides persistence for ledger entries.

This module re-exports all public database functions for easy importing.
"""

from pocketledger.store.queries import (
    count_entries,
    delete_entry,
    get_all_entries,
    get_entries_between,
    get_entry,
    insert_entry,
)
from pocketledger.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "count_entries",
    "delete_entry",
    "get_all_entries",
    "get_entries_between",
    "get_entry",
    "insert_entry",
]
