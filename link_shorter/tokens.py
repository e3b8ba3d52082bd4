"""Token store: bearer tokens with optional expiry."""

import logging
import sqlite3
from typing import List, Optional

from .database.models import Token
from .errors import StorageFailure
from .ttl import is_expired, optional_expiry

logger = logging.getLogger(__name__)


class TokenRepository:
    """CRUD over the ``tokens`` table.

    Expects a live SQLite connection; callers serialize access to it.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def add(self, token: str, seconds: Optional[int] = None) -> None:
        """Insert a token, replacing any existing row (and expiry) for it."""
        ttl = optional_expiry(seconds)
        try:
            self._conn.execute(
                "INSERT OR REPLACE INTO tokens (token, ttl) VALUES (?, ?)",
                (token, ttl),
            )
        except sqlite3.Error as e:
            logger.error(f"Error adding token: {e}")
            raise StorageFailure("cannot add token") from e

    def remove(self, token: str) -> None:
        try:
            self._conn.execute("DELETE FROM tokens WHERE token = ?", (token,))
        except sqlite3.Error as e:
            logger.error(f"Error removing token: {e}")
            raise StorageFailure("cannot remove token") from e

    def locate(self, token: str) -> Optional[Token]:
        """Exact-match lookup.

        Anything other than a single row whose key equals ``token`` is
        reported as absent.
        """
        try:
            rows = self._conn.execute(
                "SELECT token, ttl FROM tokens WHERE token = ?", (token,)
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error locating token: {e}")
            raise StorageFailure("cannot locate token") from e

        if len(rows) == 1 and rows[0][0] == token:
            return Token(token=rows[0][0], ttl=rows[0][1])
        return None

    def list(self) -> List[Token]:
        """Snapshot of every stored token, oldest first."""
        try:
            rows = self._conn.execute(
                "SELECT token, ttl FROM tokens ORDER BY id"
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error listing tokens: {e}")
            raise StorageFailure("cannot list tokens") from e
        return [Token(token=row[0], ttl=row[1]) for row in rows]

    def is_allowed(self, token: str) -> bool:
        """The authorization predicate for write requests."""
        found = self.locate(token)
        if found is None:
            return False
        if found.ttl is None:
            return True
        return not is_expired(found.ttl)
