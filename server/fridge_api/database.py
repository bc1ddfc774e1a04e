"""SQLite-backed key-value store for the app's persisted JSON blobs."""
import sqlite3
from contextlib import contextmanager
from typing import Generator, Optional
import logging

from fridge_ai.stores import StoreUnavailable

from .config import get_settings

log = logging.getLogger(__name__)


class SQLiteKeyValueStore:
    """
    Flat string key-value store in a single SQLite table.

    Each read or write opens its own short-lived connection so the store
    can be shared across request handlers.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or get_settings().store_db_path
        with self._connect() as conn:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS kv_store (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
        log.info(f"[STORE] Using key-value store at {self.db_path}")

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        """Create a connection that commits on success."""
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as e:
            raise StoreUnavailable(f"{self.db_path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailable(f"{self.db_path}: {e}") from e
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
