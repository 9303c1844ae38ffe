"""SQLite-backed persistent key-value cache."""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from types import TracebackType
from typing import Any, TypeAlias
from uuid import UUID

from pond.codec import Codec, JsonCodec
from pond.database import connect, initialize_schema
from pond.errors import StorageError
from pond.schemas import CacheConfig, CacheInfo


logger = logging.getLogger(__name__)

KeyInput: TypeAlias = UUID | str

_UPSERT_SQL = """
INSERT INTO entries (key, value) VALUES (?, ?)
ON CONFLICT(key) DO UPDATE SET value = excluded.value
"""


def _coerce_key(key: object) -> str:
    if isinstance(key, UUID):
        return str(key)
    if isinstance(key, str):
        return str(UUID(key))
    raise TypeError(f"Cache keys must be UUID or str, got {type(key).__name__}")


class Cache:
    """Durable key-value cache keyed by UUID.

    The cache owns a single SQLite connection from construction until
    ``close()`` (or the end of a ``with`` block). Every operation runs under
    an internal lock, so one instance may be shared between threads; access
    from other processes is coordinated by SQLite's own file locking.

    Values cross the storage boundary through a ``Codec``. The default
    ``JsonCodec`` handles anything pydantic can serialize, and ``get`` takes
    the type to decode into:

        with Cache("cache.db") as cache:
            cache.store(key, {"name": "pond"})
            value = cache.get(key, dict[str, str])
    """

    path: Path
    codec: Codec

    def __init__(
        self,
        path: str | Path,
        *,
        codec: Codec | None = None,
        timeout_seconds: float = 5.0,
        journal_mode: str = "delete",
        synchronous: str = "full",
    ) -> None:
        self.path = Path(path)
        self.codec = JsonCodec() if codec is None else codec
        self._lock = threading.RLock()
        self._connection: sqlite3.Connection | None = None

        try:
            connection = connect(
                self.path,
                timeout_seconds=timeout_seconds,
                journal_mode=journal_mode,
                synchronous=synchronous,
            )
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open cache at {self.path}: {exc}") from exc

        try:
            initialize_schema(connection)
        except sqlite3.Error as exc:
            connection.close()
            raise StorageError(f"Invalid cache database at {self.path}: {exc}") from exc

        self._connection = connection
        logger.debug(f"Opened cache at {self.path}")

    @classmethod
    def from_config(cls, config: CacheConfig) -> "Cache":
        return cls(
            config.path,
            codec=JsonCodec(strict=config.strict),
            timeout_seconds=config.timeout_seconds,
            journal_mode=config.journal_mode,
            synchronous=config.synchronous,
        )

    @property
    def closed(self) -> bool:
        return self._connection is None

    def _require_open(self) -> sqlite3.Connection:
        if self._connection is None:
            raise StorageError("cache is closed")
        return self._connection

    def store(self, key: KeyInput, value: object) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        The write is committed before this returns.

        Raises:
            SerializationError: If the value cannot be encoded
            StorageError: If the write fails or the cache is closed
        """
        key_text = _coerce_key(key)
        payload = self.codec.encode(value)
        with self._lock:
            connection = self._require_open()
            try:
                with connection:
                    _ = connection.execute(_UPSERT_SQL, (key_text, payload))
            except sqlite3.Error as exc:
                logger.warning(f"Failed to store {key_text} in {self.path}: {exc}")
                raise StorageError(f"Failed to store {key_text}: {exc}") from exc
        logger.debug(f"Stored {key_text} ({len(payload)} bytes)")

    def get(self, key: KeyInput, type_: Any = Any) -> Any | None:
        """Return the value stored under ``key`` decoded as ``type_``.

        A missing key returns ``None``; it is not an error.

        Raises:
            DeserializationError: If the payload does not fit ``type_``
            StorageError: If the read fails or the cache is closed
        """
        key_text = _coerce_key(key)
        with self._lock:
            connection = self._require_open()
            try:
                row = connection.execute(
                    "SELECT value FROM entries WHERE key = ?",
                    (key_text,),
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(f"Failed to read {key_text}: {exc}") from exc
        if row is None:
            logger.debug(f"Cache miss for {key_text}")
            return None
        return self.codec.decode(bytes(row["value"]), type_)

    def delete(self, key: KeyInput) -> bool:
        """Remove the entry for ``key``. Returns True if one existed."""
        key_text = _coerce_key(key)
        with self._lock:
            connection = self._require_open()
            try:
                with connection:
                    cursor = connection.execute(
                        "DELETE FROM entries WHERE key = ?",
                        (key_text,),
                    )
            except sqlite3.Error as exc:
                logger.warning(f"Failed to delete {key_text} in {self.path}: {exc}")
                raise StorageError(f"Failed to delete {key_text}: {exc}") from exc
        deleted = cursor.rowcount > 0
        if deleted:
            logger.debug(f"Deleted {key_text}")
        return deleted

    def contains(self, key: KeyInput) -> bool:
        key_text = _coerce_key(key)
        with self._lock:
            connection = self._require_open()
            try:
                row = connection.execute(
                    "SELECT 1 FROM entries WHERE key = ?",
                    (key_text,),
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(f"Failed to look up {key_text}: {exc}") from exc
        return row is not None

    def keys(self) -> list[UUID]:
        with self._lock:
            connection = self._require_open()
            try:
                rows = connection.execute("SELECT key FROM entries ORDER BY key").fetchall()
            except sqlite3.Error as exc:
                raise StorageError(f"Failed to list keys: {exc}") from exc
        return [UUID(str(row["key"])) for row in rows]

    def info(self) -> CacheInfo:
        with self._lock:
            connection = self._require_open()
            try:
                row = connection.execute(
                    "SELECT COUNT(*) AS entries, COALESCE(SUM(length(value)), 0) AS payload_bytes "
                    "FROM entries"
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(f"Failed to read cache info: {exc}") from exc
        file_size = self.path.stat().st_size if self.path.is_file() else 0
        return CacheInfo(
            path=str(self.path),
            entries=int(row["entries"]),
            payload_bytes=int(row["payload_bytes"]),
            file_size_bytes=file_size,
        )

    def close(self) -> None:
        with self._lock:
            if self._connection is None:
                return
            self._connection.close()
            self._connection = None
        logger.debug(f"Closed cache at {self.path}")

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self.info().entries

    def __enter__(self) -> "Cache":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"Cache(path={str(self.path)!r}, {state})"
