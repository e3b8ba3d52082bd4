"""Shorter store: short path to target URL mappings with optional expiry."""

import logging
import sqlite3
from typing import List, Optional

from .database.models import Shorter
from .errors import StorageFailure
from .ttl import is_expired, optional_expiry

logger = logging.getLogger(__name__)


class ShorterRepository:
    """CRUD over the ``shorters`` table.

    Expired rows are left in place; ``get`` hides them.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(
        self,
        path: str,
        url: str,
        seconds: Optional[int] = None,
        token: Optional[str] = None,
    ) -> None:
        """Insert a mapping, replacing any existing row for ``path``."""
        ttl = optional_expiry(seconds)
        try:
            self._conn.execute(
                "INSERT OR REPLACE INTO shorters (path, url, ttl, token) VALUES (?, ?, ?, ?)",
                (path, url, ttl, token),
            )
        except sqlite3.Error as e:
            logger.error(f"Error inserting shorter {path}: {e}")
            raise StorageFailure("cannot insert shorter") from e

    def remove(self, path: str) -> None:
        try:
            self._conn.execute("DELETE FROM shorters WHERE path = ?", (path,))
        except sqlite3.Error as e:
            logger.error(f"Error removing shorter {path}: {e}")
            raise StorageFailure("cannot remove shorter") from e

    def locate(self, path: str) -> Optional[Shorter]:
        """Exact-match lookup, ignoring expiry."""
        try:
            rows = self._conn.execute(
                "SELECT path, url, ttl, token FROM shorters WHERE path = ?", (path,)
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error locating shorter {path}: {e}")
            raise StorageFailure("cannot locate shorter") from e

        if len(rows) == 1 and rows[0][0] == path:
            return Shorter(*rows[0])
        return None

    def get(self, path: str) -> Optional[Shorter]:
        """Like ``locate`` but an expired row counts as absent."""
        shorter = self.locate(path)
        if shorter is None:
            return None
        if shorter.ttl is not None and is_expired(shorter.ttl):
            return None
        return shorter

    def list(self) -> List[Shorter]:
        try:
            rows = self._conn.execute(
                "SELECT path, url, ttl, token FROM shorters ORDER BY id"
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error listing shorters: {e}")
            raise StorageFailure("cannot list shorters") from e
        return [Shorter(*row) for row in rows]
