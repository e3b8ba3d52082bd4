"""Business logic service for link shorter."""

import logging
import sqlite3
from typing import Dict, List, Optional

from .common.validators import decode_target_url, normalize_path
from .database.base import ShorterDBBase
from .database.models import Shorter, Token
from .errors import NotFound, Unauthorized
from .shortcode import ShortCodeGenerator
from .shorters import ShorterRepository
from .tokens import TokenRepository


class ShorterService:
    """Service layer composing the token and shorter stores.

    Every public method is one unit of work: it takes the storage lock once
    and holds it until done.
    """

    def __init__(
        self,
        db: ShorterDBBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize link shorter service.

        Args:
            db: Database instance
            short_code_generator: Optional generator for missing paths
            logger: Optional logger
        """
        self.db = db
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)

    # Tokens

    async def add_token(self, token: str, seconds: Optional[int] = None) -> None:
        await self.db.run(lambda conn: TokenRepository(conn).add(token, seconds))
        self.logger.info(f"Added token (seconds={seconds})")

    async def remove_token(self, token: str) -> bool:
        """Remove a token.

        Returns:
            True if the token existed before removal
        """
        def _remove(conn: sqlite3.Connection) -> bool:
            tokens = TokenRepository(conn)
            existed = tokens.locate(token) is not None
            tokens.remove(token)
            return existed

        existed = await self.db.run(_remove)
        if existed:
            self.logger.info("Removed token")
        return existed

    async def locate_token(self, token: str) -> Optional[Token]:
        return await self.db.run(lambda conn: TokenRepository(conn).locate(token))

    async def list_tokens(self) -> List[Token]:
        return await self.db.run(lambda conn: TokenRepository(conn).list())

    async def is_token_allowed(self, token: str) -> bool:
        return await self.db.run(lambda conn: TokenRepository(conn).is_allowed(token))

    # Shorters

    async def create_shorter(
        self,
        token: Optional[str],
        url: Optional[str],
        path: Optional[str] = None,
        seconds: Optional[int] = None,
    ) -> str:
        """Create (or replace) a shorter on behalf of a token holder.

        Args:
            token: Bearer token of the caller
            url: Percent-encoded target URL
            path: Requested path; a random one is generated when empty
            seconds: Optional lifetime of the mapping

        Returns:
            The path the mapping was stored under

        Raises:
            Unauthorized: if the token is missing, unknown or expired
            BadInput: if the URL is empty or cannot be decoded
            StorageFailure: if the database rejects any statement
        """
        path = normalize_path(path) or self.generator.generate_random()

        def _create(conn: sqlite3.Connection) -> str:
            if not token or not TokenRepository(conn).is_allowed(token):
                raise Unauthorized("token is not allowed")
            target = decode_target_url(url)
            ShorterRepository(conn).insert(path, target, seconds, token)
            return target

        target = await self.db.run(_create)
        self.logger.info(f"Created shorter: {path} -> {target}")
        return path

    async def insert_shorter(
        self,
        path: str,
        url: str,
        seconds: Optional[int] = None,
        token: Optional[str] = None,
    ) -> None:
        await self.db.run(
            lambda conn: ShorterRepository(conn).insert(path, url, seconds, token)
        )

    async def get_shorter(self, path: str) -> Optional[Shorter]:
        """Resolve a path, hiding expired mappings."""
        shorter = await self.db.run(lambda conn: ShorterRepository(conn).get(path))
        if shorter is None:
            self.logger.debug(f"No such shorter: {path}")
        return shorter

    async def resolve_shorter(self, path: str) -> str:
        """Target URL of a live shorter.

        Raises:
            NotFound: if the path is unknown or expired
        """
        shorter = await self.get_shorter(path)
        if shorter is None:
            raise NotFound(path)
        return shorter.url

    async def locate_shorter(self, path: str) -> Optional[Shorter]:
        return await self.db.run(lambda conn: ShorterRepository(conn).locate(path))

    async def remove_shorter(self, path: str) -> bool:
        """Remove a shorter.

        Returns:
            True if the path existed before removal
        """
        def _remove(conn: sqlite3.Connection) -> bool:
            shorters = ShorterRepository(conn)
            existed = shorters.locate(path) is not None
            shorters.remove(path)
            return existed

        existed = await self.db.run(_remove)
        if existed:
            self.logger.info(f"Removed shorter: {path}")
        return existed

    async def list_shorters(self) -> List[Shorter]:
        return await self.db.run(lambda conn: ShorterRepository(conn).list())

    # Lifecycle

    async def health_check(self) -> Dict[str, bool]:
        db_healthy = await self.db.health_check()
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
