"""
Tests for the realtime gateway.

Covers connect/register/disconnect, the client message contract and
push delivery with reaping of gone connections.

Dependencies: pytest, tests.aws_fakes
System role: WebSocket connection lifecycle validation
"""

import json

import pytest

from support_backend.core.exceptions import PushDeliveryError
from support_backend.models.connection import ConnectionState
from support_backend.models.messages import ChatAgentConnectedMessage
from tests.aws_fakes import NOW, make_client_error


def sent_payloads(mock_apigw_client) -> list[dict]:
    return [
        json.loads(call.kwargs["Data"].decode("utf-8"))
        for call in mock_apigw_client.post_to_connection.call_args_list
    ]


class TestConnectAndDisconnect:
    def test_connect_stores_record_with_ttl(self, gateway, fake_table):
        response = gateway.connect("conn-1")

        assert response.status_code == 200
        assert response.body == "Connected"
        assert response.state == ConnectionState.OPEN
        assert fake_table.items["conn-1"]["ttl"] == int(NOW) + 86400

    def test_connect_with_session_query_parameter(self, gateway, registry, session_id):
        response = gateway.connect("conn-1", session_id=session_id)

        assert response.state == ConnectionState.REGISTERED
        assert registry.find_by_session(session_id).connection_id == "conn-1"

    def test_disconnect_removes_record(self, gateway, fake_table):
        gateway.connect("conn-1")

        response = gateway.disconnect("conn-1")

        assert response.status_code == 200
        assert response.state == ConnectionState.CLOSED
        assert "conn-1" not in fake_table.items


class TestRegister:
    """Test suite for the register action."""

    def test_register_attaches_session(self, gateway, registry, session_id):
        """
        Test register makes the connection discoverable by session.

        Arrange: Connected client
        Act: Send register with sessionId
        Assert: 200 with registration body, lookup resolves the connection
        """
        # Arrange
        gateway.connect("conn-1")

        # Act
        response = gateway.handle_message(
            "conn-1", json.dumps({"action": "register", "sessionId": session_id})
        )

        # Assert
        assert response.status_code == 200
        assert response.body == {"status": "Registered", "connectionId": "conn-1", "sessionId": session_id}
        assert response.state == ConnectionState.REGISTERED
        assert registry.find_by_session(session_id).connection_id == "conn-1"

    def test_register_after_record_deleted_is_rejected(self, gateway, registry, fake_table, session_id):
        """
        Test registration racing a disconnect.

        Arrange: Connect then disconnect
        Act: Send register for the deleted connection
        Assert: 410, no record resurrected, session lookup stays empty
        """
        # Arrange
        gateway.connect("conn-1")
        gateway.disconnect("conn-1")

        # Act
        response = gateway.handle_message(
            "conn-1", json.dumps({"action": "register", "sessionId": session_id})
        )

        # Assert
        assert response.status_code == 410
        assert fake_table.items == {}
        assert registry.find_by_session(session_id) is None

    def test_register_without_session_id(self, gateway):
        gateway.connect("conn-1")

        response = gateway.handle_message("conn-1", json.dumps({"action": "register"}))

        assert response.status_code == 400
        assert response.body == "sessionId required"

    def test_register_with_blank_session_id(self, gateway):
        gateway.connect("conn-1")

        response = gateway.handle_message("conn-1", json.dumps({"action": "register", "sessionId": "  "}))

        assert response.status_code == 400

    def test_register_with_legacy_voice_contact_id(self, gateway, registry):
        gateway.connect("conn-1")

        response = gateway.handle_message(
            "conn-1", json.dumps({"action": "register", "voiceContactId": "voice-1"})
        )

        assert response.status_code == 200
        assert response.body["voiceContactId"] == "voice-1"
        assert registry.find_by_voice_contact("voice-1").connection_id == "conn-1"

    def test_register_non_uuid_session_is_accepted(self, gateway, registry):
        gateway.connect("conn-1")

        response = gateway.handle_message(
            "conn-1", json.dumps({"action": "register", "sessionId": "legacy-format"})
        )

        assert response.status_code == 200
        assert registry.find_by_session("legacy-format") is not None


class TestMessageContract:
    @pytest.mark.parametrize("body", [None, ""])
    def test_empty_body(self, gateway, body):
        response = gateway.handle_message("conn-1", body)

        assert response.status_code == 400
        assert response.body == "Message body required"

    def test_invalid_json(self, gateway):
        response = gateway.handle_message("conn-1", "{not json")

        assert response.status_code == 400
        assert response.body == "Invalid JSON"

    def test_non_object_json(self, gateway):
        assert gateway.handle_message("conn-1", "[1, 2]").status_code == 400

    def test_unknown_action(self, gateway):
        response = gateway.handle_message("conn-1", json.dumps({"action": "dance"}))

        assert response.status_code == 400
        assert response.body == "Unknown action"

    def test_ping_replies_with_pong(self, gateway, mock_apigw_client):
        gateway.connect("conn-1")

        response = gateway.handle_message("conn-1", json.dumps({"action": "ping"}))

        assert response.status_code == 200
        assert sent_payloads(mock_apigw_client) == [{"type": "pong"}]

    def test_ping_to_gone_connection_reports_gone(self, gateway, fake_table, mock_apigw_client):
        """
        Test ping does not claim delivery when the pong never arrives.

        Arrange: Connected client the transport reports as gone
        Act: Send ping
        Assert: 410 with CLOSED state and the record is reaped
        """
        # Arrange
        gateway.connect("conn-1")
        mock_apigw_client.post_to_connection.side_effect = make_client_error("GoneException", "PostToConnection", 410)

        # Act
        response = gateway.handle_message("conn-1", json.dumps({"action": "ping"}))

        # Assert
        assert response.status_code == 410
        assert response.body == "Connection is gone"
        assert response.state == ConnectionState.CLOSED
        assert "conn-1" not in fake_table.items

    def test_lambda_response_serializes_dict_body(self, gateway, session_id):
        gateway.connect("conn-1")

        response = gateway.handle_message(
            "conn-1", json.dumps({"action": "register", "sessionId": session_id})
        ).to_lambda_response()

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["status"] == "Registered"


class TestPush:
    def test_push_delivers_payload(self, gateway, mock_apigw_client):
        delivered = gateway.push("conn-1", ChatAgentConnectedMessage(chat_contact_id="chat-1", session_id="s-1"))

        assert delivered is True
        assert sent_payloads(mock_apigw_client) == [
            {"type": "ChatAgentConnected", "chatContactId": "chat-1", "sessionId": "s-1"}
        ]

    def test_push_to_gone_connection_reaps_record(self, gateway, registry, fake_table, mock_apigw_client, session_id):
        """
        Test gone connections are removed from the registry.

        Arrange: Registered connection the transport reports as gone
        Act: Push a message
        Assert: Not delivered, record deleted, session lookup empty
        """
        # Arrange
        gateway.connect("conn-1", session_id=session_id)
        mock_apigw_client.post_to_connection.side_effect = make_client_error("GoneException", "PostToConnection", 410)

        # Act
        delivered = gateway.push("conn-1", {"type": "pong"})

        # Assert
        assert delivered is False
        assert "conn-1" not in fake_table.items
        assert registry.find_by_session(session_id) is None

    def test_push_twice_to_gone_connection_is_idempotent(self, gateway, fake_table, mock_apigw_client):
        gateway.connect("gone-123")
        mock_apigw_client.post_to_connection.side_effect = make_client_error("GoneException", "PostToConnection", 410)

        first = gateway.push("gone-123", {"type": "pong"})
        second = gateway.push("gone-123", {"type": "pong"})

        assert first is False
        assert second is False
        assert fake_table.items == {}

    def test_push_other_failure_propagates_and_keeps_record(self, gateway, fake_table, mock_apigw_client):
        gateway.connect("conn-1")
        mock_apigw_client.post_to_connection.side_effect = make_client_error(
            "InternalServerErrorException", "PostToConnection", 500
        )

        with pytest.raises(PushDeliveryError):
            gateway.push("conn-1", {"type": "pong"})

        assert "conn-1" in fake_table.items
