"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory DynamoDB table, boto client mocks, wired
registry/gateway/orchestrator fixtures
Dependencies: pytest, tests.aws_fakes
System role: Test infrastructure and fixture management
"""

from unittest.mock import MagicMock

import pytest

from support_backend.boundary.aws.connect_client import ConnectContactClient
from support_backend.boundary.aws.connection_registry import ConnectionRegistry
from support_backend.boundary.aws.websocket_publisher import WebSocketPublisher
from support_backend.configs import get_settings
from support_backend.core.contact_orchestrator import ContactOrchestrator
from support_backend.core.realtime_gateway import RealtimeGateway
from tests.aws_fakes import FakeClock, FakeTable

ENDPOINT_URL = "https://abc123.execute-api.us-west-2.amazonaws.com/prod"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_table():
    return FakeTable()


@pytest.fixture
def registry(fake_table, clock):
    return ConnectionRegistry(fake_table, clock=clock)


@pytest.fixture
def mock_apigw_client():
    """Mocked boto3 apigatewaymanagementapi client."""
    return MagicMock()


@pytest.fixture
def publisher(mock_apigw_client):
    return WebSocketPublisher(ENDPOINT_URL, client=mock_apigw_client)


@pytest.fixture
def gateway(registry, publisher, clock):
    return RealtimeGateway(registry, publisher, connection_ttl_seconds=86400, clock=clock)


@pytest.fixture
def mock_connect_client():
    """Mocked boto3 connect client."""
    return MagicMock()


@pytest.fixture
def connect_client(mock_connect_client):
    return ConnectContactClient("instance-1", "flow-1", client=mock_connect_client)


@pytest.fixture
def orchestrator(connect_client):
    return ContactOrchestrator(connect_client)


@pytest.fixture
def session_id():
    """A generated-looking browser session ID."""
    return "3f2b8c1e-7d4a-4e9b-a1c6-5d8e2f0b9a17"
