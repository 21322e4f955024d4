"""API-specific dependencies."""

from .dependencies import (
    get_contact_orchestrator,
    get_service_cache,
)

__all__ = [
    "get_contact_orchestrator",
    "get_service_cache",
]
