"""
Queue routing configuration settings.

Default queue and the account coordinates needed to address an agent's
personal queue.

Dependencies: pydantic_settings
System role: Escalation queue routing configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RoutingSettings(BaseSettings):
    """Settings for escalation queue routing."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_queue_arn: str = Field(
        default="",
        description="Queue used when agent continuity cannot be established",
    )
    aws_account_id: str = Field(
        default="",
        description="AWS account that owns the Connect instance",
    )
    aws_region: str = Field(
        default="us-west-2",
        description="AWS region used in queue ARNs",
    )
