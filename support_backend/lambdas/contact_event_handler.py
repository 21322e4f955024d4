"""
Lambda handler for Amazon Connect contact events (EventBridge).

On agent-connected events, pushes the follow-up action to the customer's
WebSocket connection. Missing tagging or a missing connection is a
successful no-op.

Environment variables:
- CONNECT_INSTANCE_ID, CONNECT_CONTACT_FLOW_ID: Amazon Connect instance and flow
- CONNECTIONS_TABLE_NAME: DynamoDB connections table
- WEBSOCKET_API_ENDPOINT: https://{domain}/{stage} management endpoint
- LOG_LEVEL: Logging level

Dependencies: support_backend.core.event_router, lambda_utils
System role: Lambda entry point for contact lifecycle events
"""

import json
import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()

from support_backend.configs import get_settings
from support_backend.core.contact_orchestrator import ContactOrchestrator
from support_backend.core.event_router import EventRouter
from support_backend.core.exceptions import MessageParseError, SupportBackendException
from support_backend.core.realtime_gateway import RealtimeGateway
from support_backend.lambdas.lambda_utils.config import (
    build_connect_client,
    build_publisher,
    build_registry,
    validate_environment,
)
from support_backend.lambdas.lambda_utils.event_parser import parse_contact_event
from support_backend.observability.correlation import bind_lambda_context
from support_backend.observability.log_utils import log_exception_with_context
from support_backend.observability.logger import configure_logging

logger = logging.getLogger(__name__)

REQUIRED_ENV_VARS = [
    "CONNECT_INSTANCE_ID",
    "CONNECT_CONTACT_FLOW_ID",
    "CONNECTIONS_TABLE_NAME",
    "WEBSOCKET_API_ENDPOINT",
]


def get_router() -> EventRouter:
    """Event router built once per container."""
    if not hasattr(get_router, "_router"):
        settings = get_settings()
        registry = build_registry(settings)
        connect_client = build_connect_client(settings)
        get_router._router = EventRouter(
            registry=registry,
            gateway=RealtimeGateway(
                registry=registry,
                publisher=build_publisher(settings, settings.realtime.api_endpoint),
                connection_ttl_seconds=settings.connection_table.ttl_seconds,
            ),
            orchestrator=ContactOrchestrator(connect_client, settings.connect.default_display_name),
            connect_client=connect_client,
        )
    return get_router._router


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {"statusCode": status_code, "body": json.dumps(body)}


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for contact events.

    Args:
        event: EventBridge event with "detail"
        context: Lambda context object

    Returns:
        Dict with statusCode and outcome body
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    bind_lambda_context(context)

    try:
        validate_environment(REQUIRED_ENV_VARS)
    except ValueError as e:
        logger.error("%s:handler - ValueError: %s", __name__, e)
        return _response(500, {"error": str(e)})

    try:
        contact_event = parse_contact_event(event)
    except MessageParseError as e:
        logger.warning("%s:handler - MessageParseError: %s", __name__, e)
        return _response(400, {"error": "Invalid contact event", "details": e.message})

    try:
        result = get_router().route(contact_event)
    except SupportBackendException as e:
        logger.error(
            "%s:handler - %s: %s",
            __name__,
            type(e).__name__,
            e,
            extra={"contact_id": contact_event.contact_id},
        )
        return _response(500, {"error": "Internal server error"})
    except Exception as e:
        log_exception_with_context(
            logger,
            f"{__name__}:handler - Unexpected error",
            e,
            contact_id=contact_event.contact_id,
        )
        return _response(500, {"error": "Internal server error"})

    logger.info(
        "%s:handler - Event processed",
        __name__,
        extra={"contact_id": contact_event.contact_id, "outcome": result.outcome.value},
    )
    return _response(200, {"outcome": result.outcome.value, "message": result.detail})
