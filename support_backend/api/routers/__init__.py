"""API routers."""

from .contacts import router as contacts_router
from .health import router as health_router

__all__ = [
    "contacts_router",
    "health_router",
]
