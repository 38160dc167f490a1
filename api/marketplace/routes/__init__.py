"""API routers."""

from .products import router as products_router
from .users import router as users_router
from .admin import router as admin_router

__all__ = ["products_router", "users_router", "admin_router"]
