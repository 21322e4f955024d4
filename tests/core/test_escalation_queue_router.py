"""
Tests for agent-continuity queue selection.

Dependencies: pytest, unittest.mock, tests.aws_fakes
System role: Escalation queue router validation
"""

from unittest.mock import MagicMock

import pytest

from support_backend.core.escalation_queue_router import EscalationQueueRouter, agent_queue_arn
from tests.aws_fakes import describe_response, make_client_error

DEFAULT_QUEUE = "arn:aws:connect:us-west-2:123456789012:instance/instance-1/queue/default"


@pytest.fixture
def router(connect_client):
    return EscalationQueueRouter(
        connect_client=connect_client,
        default_queue_arn=DEFAULT_QUEUE,
        region="us-west-2",
        account_id="123456789012",
        instance_id="instance-1",
    )


def test_agent_queue_arn():
    assert agent_queue_arn("us-west-2", "123456789012", "instance-1", "agent-7") == (
        "arn:aws:connect:us-west-2:123456789012:instance/instance-1/queue/agent-7"
    )


def test_contact_without_related_contact_uses_default(router, mock_connect_client):
    selection = router.select_queue("voice-1", "VOICE", {"sessionId": "s-1"})

    assert selection.is_default
    assert selection.queue_arn == DEFAULT_QUEUE
    mock_connect_client.describe_contact.assert_not_called()


def test_escalated_contact_routes_to_handling_agent(router, mock_connect_client):
    """
    Test escalated voice goes to the agent already on the chat.

    Arrange: Related chat handled by agent-7
    Act: Select queue for the voice contact
    Assert: Agent personal queue chosen, in both response keys
    """
    # Arrange
    mock_connect_client.describe_contact.return_value = describe_response("chat-1", agent_id="agent-7", attributes={})

    # Act
    selection = router.select_queue("voice-1", "VOICE", {"relatedContactId": "chat-1"})

    # Assert
    expected = "arn:aws:connect:us-west-2:123456789012:instance/instance-1/queue/agent-7"
    assert selection.is_default is False
    assert selection.agent_id == "agent-7"
    assert selection.to_flow_response() == {"queueSelector": expected, "queueArn": expected}


def test_related_contact_without_agent_uses_default(router, mock_connect_client):
    mock_connect_client.describe_contact.return_value = describe_response("chat-1", agent_id=None, attributes={})

    selection = router.select_queue("voice-1", "VOICE", {"relatedContactId": "chat-1"})

    assert selection.is_default


@pytest.mark.parametrize("code", ["ResourceNotFoundException", "ThrottlingException", "AccessDeniedException"])
def test_describe_failure_uses_default(router, mock_connect_client, code):
    mock_connect_client.describe_contact.side_effect = make_client_error(code)

    selection = router.select_queue("voice-1", "VOICE", {"relatedContactId": "chat-1"})

    assert selection.queue_arn == DEFAULT_QUEUE


def test_unexpected_exception_uses_default(mock_connect_client):
    broken_client = MagicMock()
    broken_client.describe_contact.side_effect = RuntimeError("boom")
    router = EscalationQueueRouter(broken_client, DEFAULT_QUEUE, "us-west-2", "123456789012", "instance-1")

    selection = router.select_queue("voice-1", "VOICE", {"relatedContactId": "chat-1"})

    assert selection.queue_arn == DEFAULT_QUEUE


def test_no_client_configured_uses_default():
    router = EscalationQueueRouter(None, DEFAULT_QUEUE, "us-west-2", "123456789012", "instance-1")

    selection = router.select_queue("voice-1", "VOICE", {"relatedContactId": "chat-1"})

    assert selection.queue_arn == DEFAULT_QUEUE


def test_missing_attributes_use_default(router):
    assert router.select_queue(None, None, None).queue_arn == DEFAULT_QUEUE
