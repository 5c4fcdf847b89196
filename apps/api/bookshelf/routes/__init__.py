"""Route modules."""

from .auth import router as auth_router
from .books import router as books_router
from .list_items import router as list_items_router

__all__ = ["auth_router", "books_router", "list_items_router"]
