"""Route modules."""

from .admin import router as admin_router
from .articles import router as articles_router
from .auth import router as auth_router
from .contacts import router as contacts_router
from .registrations import router as registrations_router

__all__ = ["admin_router", "articles_router", "auth_router", "contacts_router", "registrations_router"]
