"""
Health check API endpoints.

Routes: GET /health, GET /health/config

Dependencies: support_backend.configs
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from support_backend.configs import Settings, get_settings


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class ConfigHealthResponse(HealthResponse):
    """Which upstream integrations are configured."""

    connect_configured: bool
    connections_table_configured: bool
    websocket_endpoint_configured: bool


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/config", response_model=ConfigHealthResponse)
async def health_check_config(settings: Settings = Depends(get_settings)) -> ConfigHealthResponse:
    """
    Configuration check. Reports "degraded" while the Connect instance is
    missing, since no contact can be started without it.
    """
    connect_configured = bool(settings.connect.instance_id and settings.connect.contact_flow_id)
    return ConfigHealthResponse(
        status="healthy" if connect_configured else "degraded",
        message="Contact center configured" if connect_configured else "Amazon Connect instance not configured",
        connect_configured=connect_configured,
        connections_table_configured=bool(settings.connection_table.table_name),
        websocket_endpoint_configured=bool(settings.realtime.api_endpoint),
    )
