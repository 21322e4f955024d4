"""
Event parsing utilities for Lambda.

Decodes the three inbound event shapes (WebSocket route, EventBridge
contact event, contact flow invocation) into typed values once, at the
boundary.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from pydantic import ValidationError

from support_backend.core.exceptions import MessageParseError
from support_backend.models.events import ContactEvent, ContactEventDetail

logger = logging.getLogger(__name__)


@dataclass
class WebSocketRequest:
    """Route invocation from API Gateway WebSocket API."""

    route_key: str
    connection_id: str
    domain_name: str | None = None
    stage: str | None = None
    body: str | None = None
    query_parameters: Dict[str, str] = field(default_factory=dict)


@dataclass
class FlowContact:
    """Contact being queued, as passed by the contact flow."""

    contact_id: str | None
    channel: str | None
    attributes: Dict[str, Any]


def parse_websocket_event(event: Dict[str, Any]) -> WebSocketRequest:
    """
    Parse an API Gateway WebSocket event.

    Raises:
        MessageParseError: requestContext, routeKey or connectionId missing
    """
    context = event.get("requestContext") or {}
    route_key = context.get("routeKey")
    connection_id = context.get("connectionId")
    if not route_key or not connection_id:
        logger.error("parse_websocket_event - Missing routeKey or connectionId")
        raise MessageParseError(
            "WebSocket event requires requestContext.routeKey and requestContext.connectionId",
            {"route_key": route_key, "connection_id": connection_id},
        )

    return WebSocketRequest(
        route_key=route_key,
        connection_id=connection_id,
        domain_name=context.get("domainName"),
        stage=context.get("stage"),
        body=event.get("body"),
        query_parameters=event.get("queryStringParameters") or {},
    )


def parse_contact_event(event: Dict[str, Any]) -> ContactEvent:
    """
    Parse an EventBridge Amazon Connect contact event.

    Raises:
        MessageParseError: detail missing or without contactId
    """
    detail = event.get("detail")
    if not isinstance(detail, dict):
        raise MessageParseError("Contact event has no detail", {"detail_type": event.get("detail-type")})
    try:
        parsed = ContactEventDetail.model_validate(detail)
    except ValidationError as e:
        logger.error("parse_contact_event - ValidationError: %s", e)
        raise MessageParseError(f"Invalid contact event detail: {e}") from e

    contact_event = ContactEvent.from_detail(parsed)
    logger.info(
        "parse_contact_event - Parsed contact event",
        extra={
            "contact_id": contact_event.contact_id,
            "event_type": contact_event.raw_event_type,
            "channel": contact_event.channel.value,
            "agent_arn": contact_event.agent_arn,
        },
    )
    return contact_event


def parse_flow_event(event: Dict[str, Any]) -> FlowContact:
    """
    Parse a contact flow invocation ({"Details": {"ContactData": {...}}}).

    Never raises; missing members parse as empty values.
    """
    details = (event or {}).get("Details") or {}
    contact_data = details.get("ContactData") or {}
    attributes = contact_data.get("Attributes") or {}
    return FlowContact(
        contact_id=contact_data.get("ContactId"),
        channel=contact_data.get("Channel"),
        attributes=attributes if isinstance(attributes, dict) else {},
    )
