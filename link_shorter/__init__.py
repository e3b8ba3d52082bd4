"""Core business logic for link shorter."""

from .shortcode import ShortCodeGenerator
from .service import ShorterService

__all__ = ["ShortCodeGenerator", "ShorterService"]
