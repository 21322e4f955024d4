"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI and the Lambda handlers.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from support_backend.configs.aws_clients import AwsClientSettings
from support_backend.configs.base import BaseSettings
from support_backend.configs.connect import ConnectSettings
from support_backend.configs.connection_table import ConnectionTableSettings
from support_backend.configs.realtime import RealtimeSettings
from support_backend.configs.routing import RoutingSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    connect: ConnectSettings = Field(default_factory=ConnectSettings)
    connection_table: ConnectionTableSettings = Field(default_factory=ConnectionTableSettings)
    realtime: RealtimeSettings = Field(default_factory=RealtimeSettings)
    routing: RoutingSettings = Field(default_factory=RoutingSettings)
    aws_clients: AwsClientSettings = Field(default_factory=AwsClientSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once per process (once per Lambda container).

    Returns:
        Settings: Application settings instance

    Usage:
        from support_backend.configs import get_settings
        settings = get_settings()
    """
    return Settings()
