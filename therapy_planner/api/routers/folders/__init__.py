"""
Folders router package.

Exports the router for session folder endpoints.
"""

from .folders_router import router

__all__ = ["router"]
