"""
SQLite database utilities for the cache.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path


TABLE_NAME = "entries"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS entries (
  key TEXT PRIMARY KEY,
  value BLOB NOT NULL
);
"""

EXPECTED_COLUMNS = ("key", "value")

# (name, declared type, primary key position) as reported by PRAGMA table_info
EXPECTED_LAYOUT = (("key", "TEXT", 1), ("value", "BLOB", 0))

JOURNAL_MODES = frozenset({"delete", "truncate", "persist", "memory", "wal", "off"})
SYNCHRONOUS_MODES = frozenset({"off", "normal", "full", "extra"})


def connect(
    db_path: str | Path,
    timeout_seconds: float = 5.0,
    journal_mode: str = "delete",
    synchronous: str = "full",
) -> sqlite3.Connection:
    """Open a SQLite connection and apply pragmas.

    The connection is closed again if any pragma fails.
    """
    journal_mode = journal_mode.lower()
    synchronous = synchronous.lower()
    if journal_mode not in JOURNAL_MODES:
        raise ValueError(f"Unsupported journal_mode: {journal_mode}")
    if synchronous not in SYNCHRONOUS_MODES:
        raise ValueError(f"Unsupported synchronous mode: {synchronous}")

    connection = sqlite3.connect(
        str(db_path),
        timeout=timeout_seconds,
        check_same_thread=False,
    )
    try:
        connection.row_factory = sqlite3.Row
        # pragma values cannot be bound as parameters; both are whitelisted above
        _ = connection.execute(f"PRAGMA journal_mode = {journal_mode}").fetchone()
        _ = connection.execute(f"PRAGMA synchronous = {synchronous}")
    except BaseException:
        connection.close()
        raise
    return connection


def initialize_schema(connection: sqlite3.Connection) -> None:
    """Create the entries table if needed and verify its shape."""
    with connection:
        _ = connection.executescript(SCHEMA_SQL)
    rows = connection.execute(f"PRAGMA table_info({TABLE_NAME})").fetchall()
    layout = tuple(
        (str(row["name"]), str(row["type"]).upper(), int(row["pk"])) for row in rows
    )
    if layout != EXPECTED_LAYOUT:
        raise sqlite3.DatabaseError(
            f"Table {TABLE_NAME!r} has layout {layout}, expected {EXPECTED_LAYOUT}"
        )
