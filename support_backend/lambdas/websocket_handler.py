"""
Lambda handler for API Gateway WebSocket routes.

Routes:
- $connect: store connection record (optional ?sessionId=...)
- $disconnect: remove connection record
- $default: client messages ({"action": "register" | "ping", ...})

Environment variables:
- CONNECTIONS_TABLE_NAME: DynamoDB connections table
- CONNECTIONS_TTL_SECONDS: Connection record lifetime (optional)
- LOG_LEVEL: Logging level

Dependencies: support_backend.core.realtime_gateway, lambda_utils
System role: Lambda entry point for the realtime transport
"""

import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()

from support_backend.boundary.aws.websocket_publisher import management_endpoint
from support_backend.configs import get_settings
from support_backend.core.realtime_gateway import RealtimeGateway
from support_backend.core.exceptions import MessageParseError, SupportBackendException
from support_backend.lambdas.lambda_utils.config import (
    build_publisher,
    build_registry,
    validate_environment,
)
from support_backend.lambdas.lambda_utils.event_parser import parse_websocket_event
from support_backend.observability.correlation import bind_lambda_context
from support_backend.observability.log_utils import log_exception_with_context
from support_backend.observability.logger import configure_logging

logger = logging.getLogger(__name__)

REQUIRED_ENV_VARS = ["CONNECTIONS_TABLE_NAME"]

_gateways: Dict[str, RealtimeGateway] = {}


def get_gateway(endpoint_url: str) -> RealtimeGateway:
    """Gateway for one WebSocket API stage, built once per container."""
    if endpoint_url not in _gateways:
        settings = get_settings()
        _gateways[endpoint_url] = RealtimeGateway(
            registry=build_registry(settings),
            publisher=build_publisher(settings, endpoint_url),
            connection_ttl_seconds=settings.connection_table.ttl_seconds,
        )
    return _gateways[endpoint_url]


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for WebSocket route invocations.

    Args:
        event: API Gateway WebSocket event
        context: Lambda context object

    Returns:
        Dict with statusCode and body
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    bind_lambda_context(context)

    try:
        validate_environment(REQUIRED_ENV_VARS)
    except ValueError as e:
        logger.error("%s:handler - ValueError: %s", __name__, e)
        return {"statusCode": 500, "body": "Server misconfigured"}

    try:
        request = parse_websocket_event(event)
    except MessageParseError as e:
        logger.warning("%s:handler - MessageParseError: %s", __name__, e)
        return {"statusCode": 400, "body": "Invalid WebSocket event"}

    logger.info(
        "%s:handler - Processing route",
        __name__,
        extra={"route_key": request.route_key, "connection_id": request.connection_id},
    )

    try:
        gateway = get_gateway(management_endpoint(request.domain_name or "", request.stage or ""))

        if request.route_key == "$connect":
            response = gateway.connect(
                request.connection_id,
                session_id=request.query_parameters.get("sessionId"),
            )
        elif request.route_key == "$disconnect":
            response = gateway.disconnect(request.connection_id)
        elif request.route_key == "$default":
            response = gateway.handle_message(request.connection_id, request.body)
        else:
            logger.warning("%s:handler - Unknown route: %s", __name__, request.route_key)
            return {"statusCode": 400, "body": "Unknown route"}

        return response.to_lambda_response()

    except SupportBackendException as e:
        logger.error(
            "%s:handler - %s: %s",
            __name__,
            type(e).__name__,
            e,
            extra={"route_key": request.route_key, "connection_id": request.connection_id},
        )
        return {"statusCode": 500, "body": "Internal server error"}
    except Exception as e:
        log_exception_with_context(
            logger,
            f"{__name__}:handler - Unexpected error",
            e,
            route_key=request.route_key,
            connection_id=request.connection_id,
        )
        return {"statusCode": 500, "body": "Internal server error"}
