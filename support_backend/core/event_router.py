"""
Contact event router.

Reacts to Amazon Connect agent-connected events: resolves the browser
session of the contact, finds its WebSocket connection, and pushes the
follow-up action (companion chat for voice, agent-connected and
escalation enablement for chat).

Dependencies: support_backend.boundary.aws, support_backend.core.realtime_gateway,
support_backend.core.contact_orchestrator
System role: Contact lifecycle → realtime client bridge
"""

import logging
from dataclasses import dataclass

from support_backend.boundary.aws.connect_client import ConnectContactClient
from support_backend.boundary.aws.connection_registry import ConnectionRegistry
from support_backend.core.contact_orchestrator import ContactOrchestrator
from support_backend.core.exceptions import ContactCenterError
from support_backend.core.realtime_gateway import RealtimeGateway
from support_backend.models.contact import (
    RELATED_CONTACT_ATTRIBUTE,
    SESSION_ID_ATTRIBUTE,
    ContactChannel,
)
from support_backend.models.events import ContactEvent, ContactEventType, RoutingOutcome
from support_backend.models.messages import (
    ChatAgentConnectedMessage,
    ChatContactCreatedMessage,
    EnableEscalationMessage,
)

logger = logging.getLogger(__name__)


@dataclass
class RoutingResult:
    """Outcome of routing one event, with a human-readable reason."""

    outcome: RoutingOutcome
    detail: str
    connection_id: str | None = None
    chat_contact_id: str | None = None


class EventRouter:
    """Routes agent-connected contact events to the customer's WebSocket."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        gateway: RealtimeGateway,
        orchestrator: ContactOrchestrator,
        connect_client: ConnectContactClient,
    ) -> None:
        self._registry = registry
        self._gateway = gateway
        self._orchestrator = orchestrator
        self._connect = connect_client

    def route(self, event: ContactEvent) -> RoutingResult:
        """
        Route one contact event.

        Missing session tagging, a missing connection, and a gone connection
        are logged no-ops, not errors. No dedup state is kept: redelivery of
        the same event repeats the same pushes.

        Args:
            event: Decoded contact event

        Returns:
            RoutingResult: What was done

        Raises:
            RegistryError / ContactCenterError / PushDeliveryError: Upstream failures
        """
        if event.event_type != ContactEventType.AGENT_CONNECTED:
            logger.info(
                "route - Ignoring event",
                extra={"contact_id": event.contact_id, "event_type": event.raw_event_type},
            )
            return RoutingResult(RoutingOutcome.IGNORED, f"Event ignored: {event.raw_event_type}")

        if event.channel not in (ContactChannel.VOICE, ContactChannel.CHAT):
            logger.info(
                "route - Ignoring channel",
                extra={"contact_id": event.contact_id, "channel": event.channel.value},
            )
            return RoutingResult(RoutingOutcome.IGNORED, f"Channel ignored: {event.channel.value}")

        attributes = self._resolve_attributes(event)
        session_id = attributes.get(SESSION_ID_ATTRIBUTE)
        if not session_id:
            logger.warning(
                "route - No sessionId in contact attributes, skipping notification",
                extra={"contact_id": event.contact_id, "channel": event.channel.value},
            )
            return RoutingResult(RoutingOutcome.MISSING_SESSION, "No sessionId found in contact attributes")

        connection = self._registry.find_by_session(session_id)
        if connection is None:
            logger.warning(
                "route - No WebSocket connection for session, user may have disconnected",
                extra={"contact_id": event.contact_id, "session_id": session_id},
            )
            return RoutingResult(RoutingOutcome.NO_CONNECTION, "No WebSocket connection found")

        related_contact_id = attributes.get(RELATED_CONTACT_ATTRIBUTE)
        if event.channel == ContactChannel.VOICE:
            return self._route_voice(event, session_id, connection.connection_id, related_contact_id)
        return self._route_chat(event, session_id, connection.connection_id, related_contact_id)

    def _resolve_attributes(self, event: ContactEvent) -> dict[str, str]:
        """Prefer the event's own attributes; fall back to describing the contact."""
        if event.attributes.get(SESSION_ID_ATTRIBUTE):
            return event.attributes

        try:
            contact = self._connect.describe_contact(event.contact_id)
        except ContactCenterError as e:
            logger.warning(
                "_resolve_attributes - Failed to describe contact",
                extra={"contact_id": event.contact_id, "error_msg": e.message},
            )
            return event.attributes
        return {**event.attributes, **contact.attributes}

    def _route_voice(
        self,
        event: ContactEvent,
        session_id: str,
        connection_id: str,
        related_contact_id: str | None,
    ) -> RoutingResult:
        if related_contact_id:
            # Escalated from an existing chat, which already carries the conversation
            logger.info(
                "_route_voice - Escalated voice contact, chat already exists",
                extra={"contact_id": event.contact_id, "related_contact_id": related_contact_id},
            )
            return RoutingResult(
                RoutingOutcome.ESCALATED_VOICE,
                "Voice contact escalated from chat; no companion chat needed",
                connection_id,
                related_contact_id,
            )

        chat = self._orchestrator.create_companion_chat(session_id, event.contact_id)
        delivered = self._gateway.push(
            connection_id,
            ChatContactCreatedMessage(
                chat_contact_id=chat.contact_id,
                participant_id=chat.participant_id,
                participant_token=chat.participant_token,
                voice_contact_id=event.contact_id,
                session_id=session_id,
            ),
        )
        if not delivered:
            return RoutingResult(
                RoutingOutcome.CONNECTION_GONE, "WebSocket connection is gone", connection_id, chat.contact_id
            )
        return RoutingResult(RoutingOutcome.CHAT_CREATED, "Companion chat created", connection_id, chat.contact_id)

    def _route_chat(
        self,
        event: ContactEvent,
        session_id: str,
        connection_id: str,
        related_contact_id: str | None,
    ) -> RoutingResult:
        delivered = self._gateway.push(
            connection_id,
            ChatAgentConnectedMessage(chat_contact_id=event.contact_id, session_id=session_id),
        )
        if not delivered:
            return RoutingResult(
                RoutingOutcome.CONNECTION_GONE, "WebSocket connection is gone", connection_id, event.contact_id
            )

        # Only first-generation chats may be escalated to voice
        if not related_contact_id:
            self._gateway.push(connection_id, EnableEscalationMessage(chat_contact_id=event.contact_id))

        return RoutingResult(
            RoutingOutcome.AGENT_CONNECTED, "Chat agent connected", connection_id, event.contact_id
        )
