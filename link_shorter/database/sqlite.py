"""SQLite implementation for link shorter."""

import asyncio
import logging
import sqlite3
from contextlib import suppress
from typing import Any, Callable, Optional, TypeVar

from ..errors import StorageFailure
from .base import ShorterDBBase

T = TypeVar("T")

DEFAULT_BUSY_TIMEOUT_MS = 8000

CREATE_SHORTERS_SQL = """
CREATE TABLE IF NOT EXISTS shorters (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    path TEXT NOT NULL UNIQUE,
    url TEXT NOT NULL,
    ttl INTEGER,
    token TEXT
);
"""

CREATE_TOKENS_SQL = """
CREATE TABLE IF NOT EXISTS tokens (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    token TEXT NOT NULL UNIQUE,
    ttl INTEGER
);
"""


def connect(db_path: str) -> sqlite3.Connection:
    """Open a SQLite connection usable from worker threads.

    Autocommit is on; every statement the stores issue is atomic on its own.
    """
    conn = sqlite3.connect(
        db_path,
        check_same_thread=False,
        isolation_level=None,
        timeout=DEFAULT_BUSY_TIMEOUT_MS / 1000.0,
    )
    # Not every filesystem supports WAL; the default journal is fine then
    with suppress(sqlite3.Error):
        conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute(f"PRAGMA busy_timeout={DEFAULT_BUSY_TIMEOUT_MS};")
    return conn


def create_tables(conn: sqlite3.Connection) -> None:
    """Create both tables and bring older shorters tables up to date."""
    conn.execute(CREATE_SHORTERS_SQL)
    conn.execute(CREATE_TOKENS_SQL)

    columns = {row[1] for row in conn.execute("PRAGMA table_info(shorters)")}
    if "token" not in columns:
        conn.execute("ALTER TABLE shorters ADD COLUMN token TEXT")


class SQLiteShorterDB(ShorterDBBase):
    """Single SQLite connection shared behind one lock."""

    def __init__(
        self,
        db_config: str,
        logger: Optional[logging.Logger] = None,
    ):
        """Open the database file and create tables if needed.

        Args:
            db_config: Path to the SQLite file (``:memory:`` works too)
            logger: Optional logger instance

        Raises:
            StorageFailure: if the file cannot be opened or initialized
        """
        super().__init__(db_config)

        self.logger = logger or logging.getLogger(__name__)
        self._lock = asyncio.Lock()

        try:
            self._conn: Optional[sqlite3.Connection] = connect(db_config)
            create_tables(self._conn)
        except sqlite3.Error as e:
            self.logger.error(f"Error opening database {db_config}: {e}")
            raise StorageFailure(f"cannot open database {db_config}") from e

        self.logger.debug(f"Opened database {db_config}")

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageFailure("database is closed")
        return self._conn

    async def run(self, operation: Callable[..., T], *args: Any) -> T:
        """Run ``operation(conn, *args)`` in a worker thread under the lock.

        A cancelled caller keeps the lock until the thread is done with the
        connection.
        """
        async with self._lock:
            conn = self.connection
            work = asyncio.ensure_future(asyncio.to_thread(operation, conn, *args))
            try:
                return await asyncio.shield(work)
            except asyncio.CancelledError:
                await asyncio.wait({work})
                raise

    async def health_check(self) -> bool:
        """Check if database is healthy."""
        try:
            row = await self.run(lambda conn: conn.execute("SELECT 1").fetchone())
            return row is not None
        except (sqlite3.Error, StorageFailure) as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the connection. Waits for the operation in flight."""
        async with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                self.logger.debug(f"Closed database {self.db_config}")
