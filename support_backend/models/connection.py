"""
Connection registry domain models.

ConnectionRecord mirrors one item of the DynamoDB connections table
(camelCase attribute names, epoch timestamps).

Dependencies: pydantic
System role: Connection registry data contract
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ConnectionState(str, Enum):
    """Lifecycle of one realtime connection."""

    CONNECTING = "CONNECTING"
    OPEN = "OPEN"
    REGISTERED = "REGISTERED"
    CLOSED = "CLOSED"


class ConnectionRecord(BaseModel):
    """One live WebSocket connection as stored in the registry."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    connection_id: str = Field(..., alias="connectionId")
    session_id: str | None = Field(default=None, alias="sessionId")
    voice_contact_id: str | None = Field(default=None, alias="voiceContactId")
    connected_at: int | None = Field(default=None, alias="connectedAt", description="Epoch ms")
    registered_at: int | None = Field(default=None, alias="registeredAt", description="Epoch ms")
    expires_at: int | None = Field(default=None, alias="ttl", description="Epoch seconds")

    @property
    def state(self) -> ConnectionState:
        """Registry-visible state; CLOSED records are deleted, never stored."""
        if self.session_id or self.voice_contact_id:
            return ConnectionState.REGISTERED
        return ConnectionState.OPEN

    def is_expired(self, now_seconds: float) -> bool:
        """True once the TTL has passed, even if DynamoDB has not reaped the item yet."""
        return self.expires_at is not None and self.expires_at <= now_seconds

    def to_item(self) -> dict:
        """Convert to a DynamoDB item, omitting unset attributes."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_item(cls, item: dict) -> "ConnectionRecord":
        """Create a record from a DynamoDB item (Decimal numbers allowed)."""
        normalized = {
            key: int(value) if key in ("connectedAt", "registeredAt", "ttl") and value is not None else value
            for key, value in item.items()
        }
        return cls.model_validate(normalized)
