"""
Connection table configuration settings.

DynamoDB table that maps WebSocket connections to browser sessions.

Dependencies: pydantic_settings
System role: Connection registry configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConnectionTableSettings(BaseSettings):
    """Settings for the WebSocket connections table."""

    model_config = SettingsConfigDict(
        env_prefix="CONNECTIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    table_name: str = Field(
        default="",
        description="DynamoDB table holding connection records",
    )
    session_index_name: str = Field(
        default="sessionIdIndex",
        description="GSI keyed by sessionId",
    )
    voice_contact_index_name: str = Field(
        default="voiceContactIdIndex",
        description="Legacy GSI keyed by voiceContactId",
    )
    ttl_seconds: int = Field(
        default=86400,
        description="Connection record lifetime in seconds (default 24 hours)",
    )
