"""Database layer for link shorter."""

from .base import ShorterDBBase
from .sqlite import SQLiteShorterDB
from .models import Shorter, Token

__all__ = ["ShorterDBBase", "SQLiteShorterDB", "Shorter", "Token"]
