"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: support_backend.configs, support_backend.core, support_backend.boundary
System role: DI container for service injection
"""

from support_backend.boundary.aws.connect_client import ConnectContactClient
from support_backend.configs import get_settings
from support_backend.core.contact_orchestrator import ContactOrchestrator


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._connect_client = None
        self._contact_orchestrator = None

    @property
    def connect_client(self) -> ConnectContactClient:
        """Get cached Amazon Connect client."""
        if self._connect_client is None:
            settings = get_settings()
            self._connect_client = ConnectContactClient(
                instance_id=settings.connect.instance_id,
                contact_flow_id=settings.connect.contact_flow_id,
                region=settings.connect.region,
                config=settings.aws_clients.to_botocore_config(),
            )
        return self._connect_client

    @property
    def contact_orchestrator(self) -> ContactOrchestrator:
        """Get cached contact orchestrator."""
        if self._contact_orchestrator is None:
            self._contact_orchestrator = ContactOrchestrator(
                self.connect_client,
                default_display_name=get_settings().connect.default_display_name,
            )
        return self._contact_orchestrator

    def clear(self) -> None:
        """Clear all cached instances."""
        self._connect_client = None
        self._contact_orchestrator = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_contact_orchestrator() -> ContactOrchestrator:
    """
    Get contact orchestrator instance.

    Returns:
        ContactOrchestrator: Orchestrator bound to the configured Connect instance
    """
    return get_service_cache().contact_orchestrator
