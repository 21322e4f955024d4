"""
Realtime message schemas.

Client → server envelopes and server → client pushes exchanged over the
WebSocket API. Pushes are discriminated by "type".

Dependencies: pydantic
System role: WebSocket API contract
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ClientAction(str, Enum):
    """Actions a client may send in the {"action": ...} envelope."""

    REGISTER = "register"
    PING = "ping"


class ClientEnvelope(BaseModel):
    """Inbound client message; unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    action: str | None = None
    session_id: str | None = Field(default=None, alias="sessionId")
    voice_contact_id: str | None = Field(default=None, alias="voiceContactId")


class PushMessage(BaseModel):
    """Base class for server → client pushes."""

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class PongMessage(PushMessage):
    type: Literal["pong"] = "pong"


class ChatContactCreatedMessage(PushMessage):
    """Companion chat created for a voice contact that reached an agent."""

    type: Literal["ChatContactCreated"] = "ChatContactCreated"
    chat_contact_id: str = Field(..., alias="chatContactId")
    participant_id: str = Field(..., alias="participantId")
    participant_token: str = Field(..., alias="participantToken")
    voice_contact_id: str = Field(..., alias="voiceContactId")
    session_id: str = Field(..., alias="sessionId")


class ChatAgentConnectedMessage(PushMessage):
    type: Literal["ChatAgentConnected"] = "ChatAgentConnected"
    chat_contact_id: str = Field(..., alias="chatContactId")
    session_id: str = Field(..., alias="sessionId")


class EnableEscalationMessage(PushMessage):
    """Tells the widget it may offer the escalate-to-voice button."""

    type: Literal["EnableEscalation"] = "EnableEscalation"
    chat_contact_id: str = Field(..., alias="chatContactId")
