import sqlite3
from pathlib import Path

import pytest

from pond.database import EXPECTED_COLUMNS, connect, initialize_schema


def test_initialize_schema_creates_single_table(tmp_path: Path) -> None:
    connection = connect(tmp_path / "cache.db")
    try:
        initialize_schema(connection)
        initialize_schema(connection)
        tables = [
            row["name"]
            for row in connection.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            ).fetchall()
        ]
        columns = tuple(
            row["name"] for row in connection.execute("PRAGMA table_info(entries)").fetchall()
        )
    finally:
        connection.close()

    assert tables == ["entries"]
    assert columns == EXPECTED_COLUMNS


def test_connect_applies_journal_mode(tmp_path: Path) -> None:
    connection = connect(tmp_path / "cache.db", journal_mode="wal")
    try:
        mode = connection.execute("PRAGMA journal_mode").fetchone()[0]
    finally:
        connection.close()

    assert mode == "wal"


def test_connect_rejects_unknown_pragmas(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        connect(tmp_path / "cache.db", journal_mode="fast")
    with pytest.raises(ValueError):
        connect(tmp_path / "cache.db", synchronous="sometimes")


def test_connect_rejects_non_database_file(tmp_path: Path) -> None:
    path = tmp_path / "cache.db"
    path.write_bytes(b"garbage" * 1000)

    with pytest.raises(sqlite3.DatabaseError):
        connect(path)


def test_initialize_schema_rejects_table_without_primary_key(tmp_path: Path) -> None:
    connection = connect(tmp_path / "cache.db")
    try:
        connection.execute("CREATE TABLE entries (key TEXT, value BLOB)")
        with pytest.raises(sqlite3.DatabaseError):
            initialize_schema(connection)
    finally:
        connection.close()
