"""
Configuration utilities for Lambda.

Environment validation and lazily built, per-container AWS services.
"""

import logging
import os
from typing import Dict, Iterable

from support_backend.boundary.aws.connect_client import ConnectContactClient
from support_backend.boundary.aws.connection_registry import ConnectionRegistry
from support_backend.boundary.aws.websocket_publisher import WebSocketPublisher
from support_backend.configs import Settings

logger = logging.getLogger(__name__)


def validate_environment(required_vars: Iterable[str]) -> Dict[str, str]:
    """
    Validate required environment variables.

    Raises:
        ValueError: Missing required environment variable
    """
    env_config = {}
    missing = []

    for var in required_vars:
        value = os.getenv(var)
        if not value:
            missing.append(var)
        else:
            env_config[var] = value

    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    logger.info("validate_environment - Environment validated")
    return env_config


def build_registry(settings: Settings) -> ConnectionRegistry:
    table_settings = settings.connection_table
    return ConnectionRegistry.from_table_name(
        table_settings.table_name,
        session_index_name=table_settings.session_index_name,
        voice_contact_index_name=table_settings.voice_contact_index_name,
    )


def build_connect_client(settings: Settings) -> ConnectContactClient:
    return ConnectContactClient(
        instance_id=settings.connect.instance_id,
        contact_flow_id=settings.connect.contact_flow_id,
        region=settings.connect.region,
        config=settings.aws_clients.to_botocore_config(),
    )


def build_publisher(settings: Settings, endpoint_url: str) -> WebSocketPublisher:
    return WebSocketPublisher(endpoint_url, config=settings.aws_clients.to_botocore_config())
