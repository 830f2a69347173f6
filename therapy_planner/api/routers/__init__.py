"""API routers."""

from .folders import router as folders_router
from .health import router as health_router

__all__ = [
    "folders_router",
    "health_router",
]
