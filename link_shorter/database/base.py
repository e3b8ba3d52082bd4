"""Abstract base class for link shorter database implementations."""

from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar

T = TypeVar("T")


class ShorterDBBase(ABC):
    """Abstract base class for link shorter storage.

    Implementations own exactly one connection; every operation runs with
    exclusive access to it.
    """

    def __init__(self, db_config: str):
        """Initialize database handle.

        Args:
            db_config: Database location (file path)
        """
        self.db_config = db_config

    @abstractmethod
    async def run(self, operation: Callable[..., T], *args: Any) -> T:
        """Run ``operation(conn, *args)`` while holding the storage lock.

        Args:
            operation: Callable receiving the connection as first argument
            *args: Extra arguments passed through

        Returns:
            Whatever ``operation`` returns
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the database connection."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if database is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
