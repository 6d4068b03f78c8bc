# client/hooddeals/db/local_storage.py

import sqlite3
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from hooddeals.core.config_loader import settings


# Retry configuration
MAX_RETRIES = 5
RETRY_DELAY = 0.1  # 100ms


class LocalStorage:
    """
    Device key-value store. Values are plain strings (usually JSON blobs),
    one row per key.
    """

    def __init__(self, db_path: Optional[str] = None):
        path = Path(db_path or settings.SESSION_DB_PATH)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.db_path = path

        self.conn = sqlite3.connect(
            str(path),
            check_same_thread=False,
            timeout=30.0
        )
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA busy_timeout=30000")
        self._init_tables()

    def _execute_with_retry(self, operation, *args, **kwargs):
        """Execute database operation with retry logic for handling locked database"""
        for attempt in range(MAX_RETRIES):
            try:
                return operation(*args, **kwargs)
            except sqlite3.OperationalError as e:
                if "locked" in str(e).lower() and attempt < MAX_RETRIES - 1:
                    time.sleep(RETRY_DELAY * (attempt + 1))
                    continue
                raise

    # ----------------------------------------------------------------------
    # CREATE TABLES
    # ----------------------------------------------------------------------
    def _init_tables(self):
        cur = self.conn.cursor()
        cur.execute("""
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        self.conn.commit()

    # ----------------------------------------------------------------------
    # READ
    # ----------------------------------------------------------------------
    def get_item(self, key: str) -> Optional[str]:
        cur = self.conn.cursor()
        cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
        row = cur.fetchone()
        return row["value"] if row else None

    def keys(self) -> List[str]:
        cur = self.conn.cursor()
        cur.execute("SELECT key FROM kv_store ORDER BY key")
        return [r["key"] for r in cur.fetchall()]

    # ----------------------------------------------------------------------
    # WRITE
    # ----------------------------------------------------------------------
    def set_item(self, key: str, value: str):
        def _set_item():
            cur = self.conn.cursor()
            cur.execute("""
            REPLACE INTO kv_store (key, value, updated_at)
            VALUES (?, ?, ?)
            """, (key, value, datetime.now(timezone.utc).isoformat()))
            self.conn.commit()

        self._execute_with_retry(_set_item)

    def remove_item(self, key: str):
        self.multi_remove([key])

    def multi_remove(self, keys: List[str]):
        if not keys:
            return

        def _remove():
            cur = self.conn.cursor()
            cur.executemany("DELETE FROM kv_store WHERE key = ?", [(k,) for k in keys])
            self.conn.commit()

        self._execute_with_retry(_remove)

    def clear(self):
        def _clear():
            cur = self.conn.cursor()
            cur.execute("DELETE FROM kv_store")
            self.conn.commit()

        self._execute_with_retry(_clear)

    def close(self):
        self.conn.close()
