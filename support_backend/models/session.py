"""
Widget interaction state.

Explicit state object for the browser widget instead of scattered flags:
mode, the session identifier, and the active contact per channel.

Dependencies: dataclasses, enum
System role: Client session state model
"""

from dataclasses import dataclass, field
from enum import Enum


class WidgetMode(str, Enum):
    IDLE = "idle"
    CHAT = "chat"
    VOICE = "voice"
    ESCALATED = "escalated"


@dataclass
class ActiveContacts:
    chat: str | None = None
    voice: str | None = None


@dataclass
class InteractionState:
    """Mode and active contacts of one browser session."""

    session_id: str
    mode: WidgetMode = WidgetMode.IDLE
    active_contact_ids: ActiveContacts = field(default_factory=ActiveContacts)

    def start_chat(self, contact_id: str) -> None:
        self.active_contact_ids.chat = contact_id
        self.mode = WidgetMode.ESCALATED if self.active_contact_ids.voice else WidgetMode.CHAT

    def start_voice(self, contact_id: str) -> None:
        self.active_contact_ids.voice = contact_id
        self.mode = WidgetMode.ESCALATED if self.active_contact_ids.chat else WidgetMode.VOICE

    def end_chat(self) -> None:
        self.active_contact_ids.chat = None
        self.mode = WidgetMode.VOICE if self.active_contact_ids.voice else WidgetMode.IDLE

    def end_voice(self) -> None:
        self.active_contact_ids.voice = None
        self.mode = WidgetMode.CHAT if self.active_contact_ids.chat else WidgetMode.IDLE

    @property
    def can_escalate(self) -> bool:
        """Escalation to voice is offered only while a chat runs alone."""
        return self.mode == WidgetMode.CHAT
