"""
Realtime transport configuration settings.

Dependencies: pydantic_settings
System role: WebSocket API configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RealtimeSettings(BaseSettings):
    """Settings for pushing messages to WebSocket clients."""

    model_config = SettingsConfigDict(
        env_prefix="WEBSOCKET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_endpoint: str = Field(
        default="",
        description="API Gateway management endpoint (https://{domain}/{stage})",
    )
