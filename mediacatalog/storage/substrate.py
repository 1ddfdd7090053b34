"""Key-value substrates backing the catalog.

A substrate is a synchronous, string-keyed, string-valued store. The catalog
never talks to disk directly: it reads and writes whole collections through
one of the implementations below.
"""

import sqlite3
import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator, List, Optional

from loguru import logger

from mediacatalog.config.settings import (
    DEFAULT_DB_PATH,
    KV_TABLE,
    SQLITE_TIMEOUT_SECONDS,
)
from mediacatalog.storage.exceptions import PersistenceWriteError


class KeyValueStore(ABC):
    """
    Abstract synchronous key-value store.

    Writes issued inside ``batch()`` are staged and applied together when
    the outermost batch exits, so several keys can change as one unit.
    Reads inside a batch see the staged values. Other threads wait until
    the batch is applied.
    """

    def __init__(self) -> None:
        self._pending: Dict[str, Optional[str]] = {}
        self._batch_depth = 0
        self._lock = threading.RLock()

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """Read a committed value, or None if absent."""

    @abstractmethod
    def _write_many(self, items: Dict[str, Optional[str]]) -> None:
        """Apply several writes at once. A None value deletes the key."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Return the committed keys."""

    def get(self, key: str) -> Optional[str]:
        """
        Return the value stored under a key.

        Args:
            key: Key to look up.

        Returns:
            Stored string, or None if the key is absent.
        """
        with self._lock:
            if self._batch_depth and key in self._pending:
                return self._pending[key]
            return self._read(key)

    def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            PersistenceWriteError: If the substrate rejects the write.
        """
        self._stage(key, value)

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        self._stage(key, None)

    def _stage(self, key: str, value: Optional[str]) -> None:
        with self._lock:
            if self._batch_depth:
                self._pending[key] = value
            else:
                self._write_many({key: value})

    @contextmanager
    def batch(self) -> Generator["KeyValueStore", None, None]:
        """
        Group writes so they are applied together.

        Nested batches join the outermost one. If a block raises, the writes
        it staged are discarded; writes staged before it by an enclosing
        batch are kept.

        Example:
            with substrate.batch():
                substrate.set("a", "1")
                substrate.set("b", "2")
            # both keys written, or neither
        """
        with self._lock:
            saved = dict(self._pending)
            self._batch_depth += 1
            try:
                yield self
            except BaseException:
                self._batch_depth -= 1
                self._pending = saved
                raise
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._pending:
                pending, self._pending = self._pending, {}
                self._write_many(pending)

    @property
    def in_batch(self) -> bool:
        """True while a batch is open."""
        return self._batch_depth > 0

    def close(self) -> None:
        """Release resources held by the substrate."""

    def __enter__(self) -> "KeyValueStore":
        """Context manager entry - return the instance."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close the substrate."""
        self.close()


class MemoryStore(KeyValueStore):
    """
    In-process dict-backed substrate.

    Used by tests and for throwaway catalogs; nothing survives the process.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        super().__init__()
        self._data: Dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write_many(self, items: Dict[str, Optional[str]]) -> None:
        for key, value in items.items():
            if value is None:
                self._data.pop(key, None)
            else:
                self._data[key] = value

    def keys(self) -> List[str]:
        return list(self._data)

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of every committed key and value."""
        return dict(self._data)


class SQLiteStore(KeyValueStore):
    """
    SQLite-backed substrate.

    Stores every key in a single table and applies each batch inside one
    ``BEGIN IMMEDIATE`` transaction.

    Attributes:
        db_path: Path to the SQLite database file.
        conn: Active database connection, or None if closed.
    """

    def __init__(self, db_path: Optional[Path] = None) -> None:
        """
        Open (and create if needed) the database.

        Args:
            db_path: Path to the SQLite file. Uses mediacatalog.db by default.
        """
        super().__init__()
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.conn: Optional[sqlite3.Connection] = None
        self._connect()

    def _connect(self) -> None:
        """Establish the connection and create the table."""
        try:
            self.conn = sqlite3.connect(
                self.db_path, timeout=SQLITE_TIMEOUT_SECONDS, check_same_thread=False
            )
            self._create_table()
        except sqlite3.Error as e:
            logger.error(f"Database connection error for {self.db_path}: {e}")
            self.conn = None

    def _create_table(self) -> None:
        """Create the key-value table if it doesn't exist."""
        if not self.conn:
            return

        cursor = self.conn.cursor()
        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS {KV_TABLE} (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at INTEGER
            )
        """)
        self.conn.commit()

    def _read(self, key: str) -> Optional[str]:
        if not self.conn:
            return None

        cursor = self.conn.cursor()
        try:
            cursor.execute(f"SELECT value FROM {KV_TABLE} WHERE key = ?", (key,))
            row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.warning(f"Error reading key {key}: {e}")
            return None
        return row[0] if row else None

    def _write_many(self, items: Dict[str, Optional[str]]) -> None:
        if not self.conn:
            raise PersistenceWriteError(f"Database {self.db_path} is not open")

        cursor = self.conn.cursor()
        try:
            cursor.execute("BEGIN IMMEDIATE")
            now = int(time.time())
            for key, value in items.items():
                if value is None:
                    cursor.execute(f"DELETE FROM {KV_TABLE} WHERE key = ?", (key,))
                else:
                    cursor.execute(
                        f"""INSERT OR REPLACE INTO {KV_TABLE}
                            (key, value, updated_at) VALUES (?, ?, ?)""",
                        (key, value, now)
                    )
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error writing {', '.join(items)} to {self.db_path}: {e}")
            self.conn.rollback()
            raise PersistenceWriteError(str(e)) from e

    def keys(self) -> List[str]:
        if not self.conn:
            return []
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT key FROM {KV_TABLE} ORDER BY key")
        return [row[0] for row in cursor.fetchall()]

    def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
