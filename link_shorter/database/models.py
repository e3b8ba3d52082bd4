"""Data models for link shorter."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Token:
    """A bearer token gating write access."""

    token: str
    ttl: Optional[int] = None


@dataclass
class Shorter:
    """A short path pointing at a target URL."""

    path: str
    url: str
    ttl: Optional[int] = None
    token: Optional[str] = None
