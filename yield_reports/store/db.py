"""Database layer for the yield summary table.

Holds one SQLite connection per process, opened lazily on first use and
shared by every request. The backing file must already exist: it is opened
read-write but never created, and a missing file is reported as
StoreUnavailable rather than crashing the process.

Thread-safety: requests run statements from FastAPI's threadpool, so the
connection is opened with check_same_thread=False. Opening is guarded by a
lock (double-checked) so concurrent first requests open it exactly once,
and each statement holds a second lock while it executes and fetches.
"""

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Optional

from yield_reports.reports.errors import StoreError, StoreUnavailable

logger = logging.getLogger(__name__)


class YieldStore:
    """Lazily opened, process-wide handle on the summary database."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        self._open_lock = threading.Lock()
        self._query_lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def _open(self) -> sqlite3.Connection:
        if not self.db_path.exists():
            logger.warning(f"Database file not found: {self.db_path}")
            raise StoreUnavailable()

        try:
            conn = sqlite3.connect(
                f"{self.db_path.resolve().as_uri()}?mode=rw",
                uri=True,
                check_same_thread=False,
            )
        except sqlite3.Error as e:
            logger.error(f"Error opening DB: {e}")
            raise StoreUnavailable()

        conn.row_factory = sqlite3.Row
        logger.info(f"Opened DB: {self.db_path}")
        return conn

    def get_connection(self) -> sqlite3.Connection:
        """Get the shared connection, opening it on first use.

        Once open, the same connection is returned for the life of the
        process. While the file is missing, every call re-checks it.

        Raises:
            StoreUnavailable: If the database file is missing or cannot be opened.
        """
        if self._conn is not None:
            return self._conn
        with self._open_lock:
            if self._conn is None:
                self._conn = self._open()
        return self._conn

    def is_available(self) -> bool:
        """Check whether the database can be used, opening it if needed."""
        try:
            self.get_connection()
        except StoreUnavailable:
            return False
        return True

    def execute(self, sql: str, params: tuple = (), fetch: str = "all") -> Any:
        """Execute a read-only SQL statement.

        Args:
            sql: SQL statement with ? placeholders
            params: Parameters tuple
            fetch: "one" or "all"

        Returns:
            dict (or None) for "one", list[dict] for "all"

        Raises:
            StoreUnavailable: If the database is not available.
            StoreError: If the statement fails.
        """
        if fetch not in ("one", "all"):
            raise ValueError(f"Unsupported fetch mode: {fetch}")

        conn = self.get_connection()
        with self._query_lock:
            try:
                cursor = conn.execute(sql, params)
                if fetch == "one":
                    row = cursor.fetchone()
                    return dict(row) if row is not None else None
                return [dict(row) for row in cursor.fetchall()]
            except sqlite3.Error as e:
                logger.error(f"Query failed: {e}")
                raise StoreError(str(e))

    def close(self) -> None:
        """Close the shared connection if it was opened."""
        with self._open_lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.info(f"Closed DB: {self.db_path}")
