"""
Tests for session identity generation and persistence.

Dependencies: pytest
System role: Session identifier validation
"""

import uuid

from support_backend.core import session_identity
from support_backend.core.session_identity import SESSION_KEY


class BrokenStore(dict):
    """Session storage that refuses every read and write."""

    def get(self, key, default=None):
        raise PermissionError("storage disabled")

    def __setitem__(self, key, value):
        raise PermissionError("storage disabled")


class TestGenerate:
    def test_generate_returns_uuid4(self):
        value = session_identity.generate()

        assert uuid.UUID(value).version == 4

    def test_generate_is_unique(self):
        assert len({session_identity.generate() for _ in range(100)}) == 100


class TestGetOrCreate:
    """Test suite for get_or_create."""

    def test_creates_and_persists_when_absent(self):
        """
        Test first call generates and stores an ID.

        Arrange: Empty store
        Act: get_or_create
        Assert: Returned ID stored under sessionId
        """
        # Arrange
        store = {}

        # Act
        session_id = session_identity.get_or_create(store)

        # Assert
        assert store[SESSION_KEY] == session_id
        assert session_identity.is_valid_session_id(session_id)

    def test_is_idempotent_within_session(self):
        store = {}

        first = session_identity.get_or_create(store)
        second = session_identity.get_or_create(store)

        assert first == second

    def test_returns_existing_value(self):
        store = {SESSION_KEY: "existing-session"}

        assert session_identity.get_or_create(store) == "existing-session"

    def test_storage_failure_still_returns_identifier(self):
        session_id = session_identity.get_or_create(BrokenStore())

        assert session_identity.is_valid_session_id(session_id)


class TestClear:
    def test_clear_forces_new_identifier(self):
        store = {}
        first = session_identity.get_or_create(store)

        session_identity.clear(store)
        second = session_identity.get_or_create(store)

        assert first != second

    def test_clear_on_empty_store(self):
        store = {}

        session_identity.clear(store)

        assert store == {}


def test_is_valid_session_id():
    assert session_identity.is_valid_session_id(str(uuid.uuid4()))
    assert not session_identity.is_valid_session_id("")
    assert not session_identity.is_valid_session_id(None)
    assert not session_identity.is_valid_session_id("not-a-uuid")


def test_start_interaction_binds_current_session():
    store = {}

    state = session_identity.start_interaction(store)

    assert state.session_id == store[SESSION_KEY]
    assert state.mode.value == "idle"
