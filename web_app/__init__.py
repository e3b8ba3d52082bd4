"""Web application for link shorter."""

from .app_factory import create_app

__all__ = ["create_app"]
