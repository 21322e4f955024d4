"""
Contact domain models and schemas.

Contact results returned by the orchestrator and the decoded view of an
Amazon Connect DescribeContact response.

Dependencies: pydantic
System role: Contact-center data contracts
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SESSION_ID_ATTRIBUTE = "sessionId"
RELATED_CONTACT_ATTRIBUTE = "relatedContactId"
INITIATION_METHOD_ATTRIBUTE = "InitiationMethod"

# Contact states after which a contact can no longer be joined
ENDED_STATES = frozenset({"ENDED", "DISCONNECTED", "COMPLETED"})


class ContactChannel(str, Enum):
    """Amazon Connect channel of a contact."""

    CHAT = "CHAT"
    VOICE = "VOICE"
    TASK = "TASK"
    EMAIL = "EMAIL"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> "ContactChannel":
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.upper())
        except ValueError:
            return cls.UNKNOWN


class InitiationMethod(str, Enum):
    """Which widget action created the contact."""

    CHAT = "Chat"
    VOICE = "Voice"


class InteractionMode(str, Enum):
    """Interaction mode reported back to the widget after starting voice."""

    VOICE_CHAT = "voice-chat"
    ESCALATED = "escalated"


class ContactDetails(BaseModel):
    """Subset of a described contact the backend relies on."""

    contact_id: str
    channel: ContactChannel = ContactChannel.UNKNOWN
    state: str | None = None
    agent_id: str | None = None
    disconnected: bool = False
    attributes: dict[str, str] = Field(default_factory=dict)

    @property
    def is_active(self) -> bool:
        """A contact is active until it is disconnected or reaches an ended state."""
        if self.disconnected:
            return False
        return (self.state or "").upper() not in ENDED_STATES

    @property
    def session_id(self) -> str | None:
        return self.attributes.get(SESSION_ID_ATTRIBUTE) or None

    @property
    def related_contact_id(self) -> str | None:
        return self.attributes.get(RELATED_CONTACT_ATTRIBUTE) or None

    @classmethod
    def from_describe_response(cls, contact: dict[str, Any]) -> "ContactDetails":
        """
        Decode the "Contact" member of a DescribeContact response.

        Args:
            contact: response["Contact"]

        Returns:
            ContactDetails: Normalized contact view
        """
        agent_info = contact.get("AgentInfo") or {}
        attributes = contact.get("Attributes") or {}
        return cls(
            contact_id=contact.get("Id", ""),
            channel=ContactChannel.parse(contact.get("Channel")),
            state=contact.get("State"),
            agent_id=agent_info.get("Id") or None,
            disconnected=contact.get("DisconnectTimestamp") is not None,
            attributes={key: str(value) for key, value in attributes.items()},
        )


class ChatContactResult(BaseModel):
    """Result of starting a chat contact."""

    model_config = ConfigDict(populate_by_name=True)

    contact_id: str = Field(..., alias="contactId")
    participant_id: str = Field(..., alias="participantId")
    participant_token: str = Field(..., alias="participantToken")


class VoiceContactResult(ChatContactResult):
    """Result of starting a WebRTC voice contact."""

    connection_data: dict[str, Any] | None = Field(default=None, alias="connectionData")
    interaction_mode: InteractionMode = Field(
        default=InteractionMode.VOICE_CHAT, alias="interactionMode"
    )


class StopContactResult(BaseModel):
    """Result of stopping a contact."""

    model_config = ConfigDict(populate_by_name=True)

    contact_id: str = Field(..., alias="contactId")
    already_ended: bool = Field(default=False, alias="alreadyEnded")


class StartChatRequest(BaseModel):
    """Request schema for starting a chat contact."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", min_length=1)
    display_name: str | None = Field(default=None, alias="displayName")


class StartVoiceRequest(StartChatRequest):
    """Request schema for starting a voice contact, optionally escalating a chat."""

    related_contact_id: str | None = Field(default=None, alias="relatedContactId")


class StopContactRequest(BaseModel):
    """Request schema for stopping a contact."""

    model_config = ConfigDict(populate_by_name=True)

    contact_id: str = Field(..., alias="contactId", min_length=1)


class StopContactResponse(BaseModel):
    """Response schema for stopping a contact."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    contact_id: str = Field(..., alias="contactId")
    already_ended: bool = Field(default=False, alias="alreadyEnded")
    message: str
