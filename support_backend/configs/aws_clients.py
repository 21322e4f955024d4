"""
boto3 client configuration settings.

Timeouts and retry attempts for every AWS client the backend creates.

Dependencies: pydantic_settings, botocore
System role: Upstream client timeout configuration
"""

from botocore.config import Config
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AwsClientSettings(BaseSettings):
    """Settings applied to boto3 clients."""

    model_config = SettingsConfigDict(
        env_prefix="AWS_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    connect_timeout: float = Field(default=3.0, description="Connect timeout in seconds")
    read_timeout: float = Field(default=5.0, description="Read timeout in seconds")
    max_attempts: int = Field(default=3, description="botocore retry attempts")

    def to_botocore_config(self) -> Config:
        """Build the botocore client config."""
        return Config(
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            retries={"max_attempts": self.max_attempts, "mode": "standard"},
        )
