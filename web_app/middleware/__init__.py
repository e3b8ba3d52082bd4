"""Middleware for link shorter web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
