"""API route modules."""

from src.api.routes.health import router as health_router
from src.api.routes.discovery import router as discovery_router

__all__ = [
    "health_router",
    "discovery_router",
]
