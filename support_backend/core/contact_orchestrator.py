"""
Contact orchestrator.

Creates chat and voice contacts on Amazon Connect tagged with the
browser session ID, validates escalation targets before creating an
escalated voice contact, and stops contacts.

Dependencies: support_backend.boundary.aws.connect_client, support_backend.models.contact
System role: Contact creation and escalation validation
"""

import logging

from support_backend.boundary.aws.connect_client import ConnectContactClient
from support_backend.core.exceptions import (
    ContactNotFoundError,
    InactiveRelatedContactError,
    InvalidRelatedContactTypeError,
    RelatedContactNotFoundError,
)
from support_backend.models.contact import (
    INITIATION_METHOD_ATTRIBUTE,
    RELATED_CONTACT_ATTRIBUTE,
    SESSION_ID_ATTRIBUTE,
    ChatContactResult,
    ContactChannel,
    ContactDetails,
    InitiationMethod,
    InteractionMode,
    StopContactResult,
    VoiceContactResult,
)
from support_backend.observability.log_utils import redact_token

logger = logging.getLogger(__name__)


class ContactOrchestrator:
    """Creates, validates and stops contacts for one browser session at a time."""

    def __init__(
        self,
        connect_client: ConnectContactClient,
        default_display_name: str = "Customer",
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            connect_client: Amazon Connect boundary client
            default_display_name: Used when the widget sends no display name
        """
        self._connect = connect_client
        self._default_display_name = default_display_name

    def _display_name(self, display_name: str | None) -> str:
        return (display_name or "").strip() or self._default_display_name

    def create_chat(self, session_id: str, display_name: str | None = None) -> ChatContactResult:
        """
        Start a first-generation chat contact.

        Args:
            session_id: Browser session ID
            display_name: Customer display name

        Returns:
            ChatContactResult: Contact and participant credentials

        Raises:
            ContactCenterError: Connect call failed
        """
        attributes = {
            SESSION_ID_ATTRIBUTE: session_id,
            INITIATION_METHOD_ATTRIBUTE: InitiationMethod.CHAT.value,
        }
        result = self._connect.start_chat_contact(self._display_name(display_name), attributes)
        logger.info(
            "create_chat - Chat contact created",
            extra={
                "contact_id": result.contact_id,
                "session_id": session_id,
                "participant_token": redact_token(result.participant_token),
            },
        )
        return result

    def create_voice(
        self,
        session_id: str,
        display_name: str | None = None,
        related_contact_id: str | None = None,
    ) -> VoiceContactResult:
        """
        Start a WebRTC voice contact, escalated from a chat when related_contact_id is set.

        The related contact must exist, be a chat contact, and still be
        active. Creation is never attempted when any check fails.

        Args:
            session_id: Browser session ID
            display_name: Customer display name
            related_contact_id: Chat contact being escalated

        Returns:
            VoiceContactResult: Contact credentials, media connection data and interaction mode

        Raises:
            RelatedContactNotFoundError: Related contact does not exist
            InvalidRelatedContactTypeError: Related contact is not a chat
            InactiveRelatedContactError: Related contact has ended
            ContactCenterError: Connect call failed
        """
        attributes = {SESSION_ID_ATTRIBUTE: session_id}
        if related_contact_id:
            self.validate_related_contact(related_contact_id)
            attributes[RELATED_CONTACT_ATTRIBUTE] = related_contact_id
            attributes[INITIATION_METHOD_ATTRIBUTE] = InitiationMethod.CHAT.value
            mode = InteractionMode.ESCALATED
        else:
            attributes[INITIATION_METHOD_ATTRIBUTE] = InitiationMethod.VOICE.value
            mode = InteractionMode.VOICE_CHAT

        result = self._connect.start_web_rtc_contact(self._display_name(display_name), attributes)
        result.interaction_mode = mode
        logger.info(
            "create_voice - Voice contact created",
            extra={
                "contact_id": result.contact_id,
                "session_id": session_id,
                "related_contact_id": related_contact_id,
                "interaction_mode": mode.value,
            },
        )
        return result

    def validate_related_contact(self, related_contact_id: str) -> ContactDetails:
        """
        Check that a contact can be escalated to voice.

        Returns:
            ContactDetails: The described chat contact

        Raises:
            RelatedContactNotFoundError / InvalidRelatedContactTypeError /
            InactiveRelatedContactError: In that order of precedence
            ContactCenterError: Describe failed for another reason
        """
        try:
            contact = self._connect.describe_contact(related_contact_id)
        except ContactNotFoundError as e:
            raise RelatedContactNotFoundError(related_contact_id) from e

        if contact.channel != ContactChannel.CHAT:
            logger.warning(
                "validate_related_contact - Related contact is not a chat",
                extra={"related_contact_id": related_contact_id, "channel": contact.channel.value},
            )
            raise InvalidRelatedContactTypeError(related_contact_id, contact.channel.value)

        if not contact.is_active:
            logger.warning(
                "validate_related_contact - Related contact has ended",
                extra={"related_contact_id": related_contact_id, "state": contact.state},
            )
            raise InactiveRelatedContactError(related_contact_id, contact.state)

        return contact

    def create_companion_chat(
        self,
        session_id: str,
        voice_contact_id: str,
        display_name: str | None = None,
    ) -> ChatContactResult:
        """
        Start the chat that accompanies a voice contact once an agent answers.

        The voice contact has just been connected to an agent, so it is not
        re-validated here.
        """
        attributes = {
            SESSION_ID_ATTRIBUTE: session_id,
            RELATED_CONTACT_ATTRIBUTE: voice_contact_id,
            INITIATION_METHOD_ATTRIBUTE: InitiationMethod.VOICE.value,
        }
        result = self._connect.start_chat_contact(self._display_name(display_name), attributes)
        logger.info(
            "create_companion_chat - Companion chat created",
            extra={
                "contact_id": result.contact_id,
                "voice_contact_id": voice_contact_id,
                "session_id": session_id,
            },
        )
        return result

    def stop(self, contact_id: str) -> StopContactResult:
        """
        Stop a contact. A contact that already ended counts as stopped.

        Raises:
            ContactCenterError: Connect call failed for another reason
        """
        try:
            self._connect.stop_contact(contact_id)
        except ContactNotFoundError:
            logger.info("stop - Contact already ended", extra={"contact_id": contact_id})
            return StopContactResult(contact_id=contact_id, already_ended=True)

        logger.info("stop - Contact stopped", extra={"contact_id": contact_id})
        return StopContactResult(contact_id=contact_id)
