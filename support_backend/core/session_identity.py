"""
Session identity for the browser widget.

One opaque identifier per browser session, persisted in session-scoped
client storage and attached to every contact and connection registration.

Dependencies: uuid
System role: Session identifier generation and persistence
"""

import logging
import re
import uuid
from typing import MutableMapping

from support_backend.models.session import InteractionState

logger = logging.getLogger(__name__)

SESSION_KEY = "sessionId"

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def generate() -> str:
    """Generate a new random session ID (UUID4, 122 random bits)."""
    return str(uuid.uuid4())


def is_valid_session_id(value: str | None) -> bool:
    """Check that a value looks like a generated session ID."""
    return bool(value) and bool(_UUID_PATTERN.match(value))


def get_or_create(store: MutableMapping[str, str]) -> str:
    """
    Return the session ID persisted in the store, creating it if absent.

    Storage failures are not fatal: the generated ID is still returned and
    stays valid for the in-memory lifetime of the caller.

    Args:
        store: Session-scoped client storage

    Returns:
        str: The current session ID
    """
    try:
        existing = store.get(SESSION_KEY)
    except Exception as e:  # pylint: disable=broad-except
        logger.warning("get_or_create - Session storage unreadable: %s", e)
        existing = None

    if existing:
        logger.debug("get_or_create - Retrieved existing session ID", extra={"session_id": existing})
        return existing

    session_id = generate()
    try:
        store[SESSION_KEY] = session_id
    except Exception as e:  # pylint: disable=broad-except
        logger.warning("get_or_create - Session storage unwritable, using in-memory ID: %s", e)
    logger.info("get_or_create - Generated new session ID", extra={"session_id": session_id})
    return session_id


def clear(store: MutableMapping[str, str]) -> None:
    """Remove the persisted session ID so the next call generates a fresh one."""
    store.pop(SESSION_KEY, None)
    logger.info("clear - Session ID cleared")


def start_interaction(store: MutableMapping[str, str]) -> InteractionState:
    """Idle widget state bound to the current session ID."""
    return InteractionState(session_id=get_or_create(store))
