"""
Realtime gateway for WebSocket clients.

Handles the connection lifecycle (connect, register, disconnect), the
client message contract, and pushes to a single connection with reaping
of connections the transport reports as gone.

Dependencies: support_backend.boundary.aws, support_backend.models
System role: WebSocket connection lifecycle and push delivery
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from support_backend.boundary.aws.connection_registry import ConnectionRegistry
from support_backend.boundary.aws.websocket_publisher import WebSocketPublisher
from support_backend.core import session_identity
from support_backend.core.exceptions import ConnectionGoneError, ConnectionNotFoundError
from support_backend.models.connection import ConnectionState
from support_backend.models.messages import ClientAction, ClientEnvelope, PongMessage

logger = logging.getLogger(__name__)


@dataclass
class GatewayResponse:
    """Synchronous response returned to API Gateway for a route invocation."""

    status_code: int
    body: str | dict[str, Any]
    state: ConnectionState | None = None

    def to_lambda_response(self) -> dict[str, Any]:
        body = self.body if isinstance(self.body, str) else json.dumps(self.body)
        return {"statusCode": self.status_code, "body": body}


class RealtimeGateway:
    """Connection lifecycle and push delivery for one WebSocket API."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        publisher: WebSocketPublisher,
        connection_ttl_seconds: int = 86400,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._registry = registry
        self._publisher = publisher
        self._connection_ttl_seconds = connection_ttl_seconds
        self._clock = clock

    def connect(self, connection_id: str, session_id: str | None = None) -> GatewayResponse:
        """
        Store a new connection record.

        Args:
            connection_id: API Gateway connection ID
            session_id: Optional session ID passed as a query parameter on connect

        Returns:
            GatewayResponse: 200 Connected (state OPEN, or REGISTERED with a session)
        """
        expires_at = int(self._clock()) + self._connection_ttl_seconds
        self._registry.put(connection_id, expires_at, session_id=session_id)
        state = ConnectionState.REGISTERED if session_id else ConnectionState.OPEN
        logger.info("connect - Client connected", extra={"connection_id": connection_id, "state": state.value})
        return GatewayResponse(200, "Connected", state)

    def disconnect(self, connection_id: str) -> GatewayResponse:
        """Remove the connection record; terminal."""
        self._registry.remove(connection_id)
        logger.info("disconnect - Client disconnected", extra={"connection_id": connection_id})
        return GatewayResponse(200, "Disconnected", ConnectionState.CLOSED)

    def handle_message(self, connection_id: str, body: str | None) -> GatewayResponse:
        """
        Dispatch one client message.

        Client sends:
            {"action": "register", "sessionId": "..."}
            {"action": "ping"}

        Returns:
            GatewayResponse: 200 on success, 400 on client errors, 410 when
            the connection record vanished before registration or the pong
            could not be delivered
        """
        if not body:
            logger.warning("handle_message - Empty message body", extra={"connection_id": connection_id})
            return GatewayResponse(400, "Message body required")

        try:
            raw = json.loads(body)
        except json.JSONDecodeError as e:
            logger.warning("handle_message - Invalid JSON: %s", e, extra={"connection_id": connection_id})
            return GatewayResponse(400, "Invalid JSON")
        if not isinstance(raw, dict):
            return GatewayResponse(400, "Invalid JSON")

        try:
            envelope = ClientEnvelope.model_validate(raw)
        except ValidationError as e:
            logger.warning("handle_message - Invalid envelope: %s", e, extra={"connection_id": connection_id})
            return GatewayResponse(400, "Invalid message")

        if envelope.action == ClientAction.REGISTER.value:
            return self._register(connection_id, envelope)
        if envelope.action == ClientAction.PING.value:
            if not self.push(connection_id, PongMessage()):
                return GatewayResponse(410, "Connection is gone", ConnectionState.CLOSED)
            return GatewayResponse(200, "Message sent")

        logger.warning(
            "handle_message - Unknown action",
            extra={"connection_id": connection_id, "action": envelope.action},
        )
        return GatewayResponse(400, "Unknown action")

    def _register(self, connection_id: str, envelope: ClientEnvelope) -> GatewayResponse:
        session_id = envelope.session_id.strip() if envelope.session_id else ""
        voice_contact_id = envelope.voice_contact_id.strip() if envelope.voice_contact_id else ""

        if not session_id and not voice_contact_id:
            logger.warning("register - No sessionId provided", extra={"connection_id": connection_id})
            return GatewayResponse(400, "sessionId required")

        try:
            if session_id:
                if not session_identity.is_valid_session_id(session_id):
                    logger.info(
                        "register - Session ID is not UUID-formatted",
                        extra={"connection_id": connection_id, "session_id": session_id},
                    )
                self._registry.attach_session(connection_id, session_id)
                body = {"status": "Registered", "connectionId": connection_id, "sessionId": session_id}
            else:
                self._registry.attach_voice_contact(connection_id, voice_contact_id)
                body = {"status": "Registered", "connectionId": connection_id, "voiceContactId": voice_contact_id}
        except ConnectionNotFoundError:
            logger.warning("register - Connection closed before registration", extra={"connection_id": connection_id})
            return GatewayResponse(410, "Connection no longer registered", ConnectionState.CLOSED)

        return GatewayResponse(200, body, ConnectionState.REGISTERED)

    def push(self, connection_id: str, message: BaseModel | dict[str, Any]) -> bool:
        """
        Deliver one message to a connection.

        A gone connection is reaped from the registry and reported as not
        delivered. Any other failure propagates; there is no retry here.

        Args:
            connection_id: Target connection
            message: Push model or plain JSON-serialisable dict

        Returns:
            bool: True when delivered, False when the connection was gone

        Raises:
            PushDeliveryError: Delivery failed for another reason
        """
        payload = message.to_payload() if hasattr(message, "to_payload") else dict(message)
        try:
            self._publisher.post(connection_id, payload)
        except ConnectionGoneError:
            logger.info("push - Connection is stale, removing", extra={"connection_id": connection_id})
            self._registry.remove(connection_id)
            return False

        logger.info(
            "push - Message sent",
            extra={"connection_id": connection_id, "message_type": payload.get("type")},
        )
        return True
