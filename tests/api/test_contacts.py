"""
Tests for the contact API endpoints.

Uses the real orchestrator over a mocked boto3 Connect client and
overrides the FastAPI dependency.

Dependencies: pytest, fastapi.testclient, tests.aws_fakes
System role: Contact API validation
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from support_backend.api.deps import get_contact_orchestrator
from support_backend.api.main import create_app
from support_backend.api.routers.contacts import router
from tests.aws_fakes import describe_response, make_client_error, start_contact_response


@pytest.fixture
def client(orchestrator):
    """Test client with the orchestrator dependency overridden."""
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    app.dependency_overrides[get_contact_orchestrator] = lambda: orchestrator
    return TestClient(app)


class TestStartChat:
    def test_start_chat(self, client, mock_connect_client, session_id):
        mock_connect_client.start_chat_contact.return_value = start_contact_response("chat-1")

        response = client.post("/api/v1/contacts/chat", json={"sessionId": session_id, "displayName": "Ada"})

        assert response.status_code == 200
        assert response.json() == {
            "contactId": "chat-1",
            "participantId": "participant-chat-1",
            "participantToken": "token-chat-1-secret",
        }

    def test_missing_session_id_is_rejected(self, client, mock_connect_client):
        response = client.post("/api/v1/contacts/chat", json={"displayName": "Ada"})

        assert response.status_code == 422
        mock_connect_client.start_chat_contact.assert_not_called()

    def test_upstream_failure_returns_502(self, client, mock_connect_client, session_id):
        mock_connect_client.start_chat_contact.side_effect = make_client_error("InternalServiceException", status=500)

        response = client.post("/api/v1/contacts/chat", json={"sessionId": session_id})

        assert response.status_code == 502
        assert response.json()["detail"]["errorCode"] == "CONTACT_CENTER_ERROR"


class TestStartVoice:
    """Test suite for POST /contacts/voice."""

    def test_direct_voice(self, client, mock_connect_client, session_id):
        mock_connect_client.start_web_rtc_contact.return_value = start_contact_response("voice-1", True)

        response = client.post("/api/v1/contacts/voice", json={"sessionId": session_id})

        assert response.status_code == 200
        body = response.json()
        assert body["contactId"] == "voice-1"
        assert body["interactionMode"] == "voice-chat"
        assert body["connectionData"]["Meeting"]["MeetingId"] == "m-1"

    def test_escalation(self, client, mock_connect_client, session_id):
        mock_connect_client.describe_contact.return_value = describe_response("chat-1", attributes={})
        mock_connect_client.start_web_rtc_contact.return_value = start_contact_response("voice-1", True)

        response = client.post(
            "/api/v1/contacts/voice", json={"sessionId": session_id, "relatedContactId": "chat-1"}
        )

        assert response.status_code == 200
        assert response.json()["interactionMode"] == "escalated"

    def test_escalation_of_ended_chat_returns_400(self, client, mock_connect_client, session_id):
        """
        Test the widget gets a machine-readable reason for a rejected escalation.

        Arrange: Related chat has ended
        Act: POST voice with relatedContactId
        Assert: 400 with INACTIVE_RELATED_CONTACT and no contact started
        """
        # Arrange
        mock_connect_client.describe_contact.return_value = describe_response(
            "chat-1", state="ENDED", attributes={}
        )

        # Act
        response = client.post(
            "/api/v1/contacts/voice", json={"sessionId": session_id, "relatedContactId": "chat-1"}
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["detail"] == {
            "error": "Related contact is not active",
            "errorCode": "INACTIVE_RELATED_CONTACT",
            "message": "The chat has ended. Start a new chat to talk to an agent",
        }
        mock_connect_client.start_web_rtc_contact.assert_not_called()

    def test_escalation_of_unknown_contact_returns_400(self, client, mock_connect_client, session_id):
        mock_connect_client.describe_contact.side_effect = make_client_error("ResourceNotFoundException")

        response = client.post(
            "/api/v1/contacts/voice", json={"sessionId": session_id, "relatedContactId": "chat-x"}
        )

        assert response.status_code == 400
        assert response.json()["detail"]["errorCode"] == "RELATED_CONTACT_NOT_FOUND"


class TestStopContact:
    def test_stop_contact(self, client, mock_connect_client):
        response = client.post("/api/v1/contacts/stop", json={"contactId": "chat-1"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "contactId": "chat-1",
            "alreadyEnded": False,
            "message": "Contact stopped successfully",
        }

    def test_stop_already_ended_contact_succeeds(self, client, mock_connect_client):
        mock_connect_client.stop_contact.side_effect = make_client_error("ResourceNotFoundException")

        response = client.post("/api/v1/contacts/stop", json={"contactId": "chat-1"})

        assert response.status_code == 200
        assert response.json()["alreadyEnded"] is True


def test_create_app_registers_routes_and_correlation_header(orchestrator):
    app = create_app()
    app.dependency_overrides[get_contact_orchestrator] = lambda: orchestrator
    client = TestClient(app)

    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "corr-1"})

    assert response.status_code == 200
    assert response.headers["X-Correlation-ID"] == "corr-1"
    for path in ("/api/v1/contacts/chat", "/api/v1/contacts/voice", "/api/v1/contacts/stop"):
        # Empty body fails validation, so a registered route answers 422
        assert client.post(path, json={}).status_code == 422
