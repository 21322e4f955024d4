"""
Base configuration settings.

Environment name, debug flag and log level shared by the API process and
every Lambda entrypoint.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Process-wide settings read from the environment or a local .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment stage (development, staging, production)",
    )
    debug: bool = Field(default=False)
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the contact API (JSON list in the environment)",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level; Lambda handlers read LOG_LEVEL directly",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level
