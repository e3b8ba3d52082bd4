"""API routes for link shorter."""

from .routes import router as api_router

__all__ = ["api_router"]
