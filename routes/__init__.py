"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.auth import router as auth_router
from routes.products import router as products_router
from routes.editor import router as editor_router

__all__ = [
    "auth_router",
    "products_router",
    "editor_router",
]
