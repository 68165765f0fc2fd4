"""Routers package."""

from castattest.routers.health import router as health_router
from castattest.routers.mint import router as mint_router

__all__ = ["health_router", "mint_router"]
