"""
Amazon Connect configuration settings.

Instance and contact flow used to start chat and WebRTC contacts.

Dependencies: pydantic_settings
System role: Contact-center configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConnectSettings(BaseSettings):
    """Settings for Amazon Connect contact operations."""

    model_config = SettingsConfigDict(
        env_prefix="CONNECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    instance_id: str = Field(
        default="",
        description="Amazon Connect instance ID",
    )
    contact_flow_id: str = Field(
        default="",
        description="Contact flow used for chat and voice contacts",
    )
    region: str | None = Field(
        default=None,
        description="AWS region of the Connect instance (defaults to AWS_REGION)",
    )
    default_display_name: str = Field(
        default="Customer",
        description="Participant display name when the widget sends none",
    )
