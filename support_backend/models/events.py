"""
Amazon Connect contact event schemas.

EventBridge delivers contact events as
{"detail-type": "Amazon Connect Contact Event", "detail": {...}}.
They are decoded once into ContactEvent before the router branches.

Dependencies: pydantic
System role: Contact lifecycle event contract
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from support_backend.models.contact import ContactChannel


class ContactEventType(str, Enum):
    """Contact lifecycle events the router distinguishes."""

    AGENT_CONNECTED = "CONNECTED_TO_AGENT"
    UNHANDLED = "UNHANDLED"

    @classmethod
    def parse(cls, value: str | None) -> "ContactEventType":
        normalized = (value or "").strip().upper().replace("-", "_")
        if normalized in ("CONNECTED_TO_AGENT", "AGENT_CONNECTED"):
            return cls.AGENT_CONNECTED
        return cls.UNHANDLED


class ContactEventDetail(BaseModel):
    """Raw "detail" member of the EventBridge event."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    contact_id: str = Field(..., alias="contactId")
    event_type: str | None = Field(default=None, alias="eventType")
    channel: str | None = None
    agent_info: dict[str, Any] | None = Field(default=None, alias="agentInfo")
    attributes: dict[str, Any] | None = None


class ContactEvent(BaseModel):
    """Strict internal representation of a contact lifecycle event."""

    contact_id: str
    event_type: ContactEventType
    channel: ContactChannel
    raw_event_type: str | None = None
    agent_arn: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_detail(cls, detail: ContactEventDetail) -> "ContactEvent":
        attributes = {}
        for key, value in (detail.attributes or {}).items():
            # Connect sometimes nests attribute values as {"value": ...}
            if isinstance(value, dict):
                value = value.get("value")
            if value is not None:
                attributes[key] = str(value)
        return cls(
            contact_id=detail.contact_id,
            event_type=ContactEventType.parse(detail.event_type),
            channel=ContactChannel.parse(detail.channel),
            raw_event_type=detail.event_type,
            agent_arn=(detail.agent_info or {}).get("agentArn"),
            attributes=attributes,
        )


class RoutingOutcome(str, Enum):
    """What the event router did with one event."""

    IGNORED = "ignored"
    MISSING_SESSION = "missing_session"
    NO_CONNECTION = "no_connection"
    CONNECTION_GONE = "connection_gone"
    ESCALATED_VOICE = "escalated_voice"
    CHAT_CREATED = "chat_created"
    AGENT_CONNECTED = "agent_connected"


class QueueSelection(BaseModel):
    """Queue chosen for a contact at queueing time."""

    queue_arn: str
    agent_id: str | None = None
    is_default: bool = True

    def to_flow_response(self) -> dict[str, str]:
        """Flat string map returned to the contact flow."""
        return {"queueSelector": self.queue_arn, "queueArn": self.queue_arn}
