"""
Contact API endpoints.

Routes:
- POST /contacts/chat - Start chat contact
- POST /contacts/voice - Start voice contact (escalation when relatedContactId is set)
- POST /contacts/stop - Stop contact

Dependencies: support_backend.core.contact_orchestrator, support_backend.models.contact
System role: Contact management HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from support_backend.api.deps import get_contact_orchestrator
from support_backend.core.contact_orchestrator import ContactOrchestrator
from support_backend.models.contact import (
    ChatContactResult,
    StartChatRequest,
    StartVoiceRequest,
    StopContactRequest,
    StopContactResponse,
    VoiceContactResult,
)

from .contact_error_handling import handle_contact_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.post("/chat", response_model=ChatContactResult)
@handle_contact_errors
def start_chat_contact(
    request: StartChatRequest,
    orchestrator: ContactOrchestrator = Depends(get_contact_orchestrator),
) -> ChatContactResult:
    """
    Start a chat contact tagged with the browser session ID.

    Raises:
        HTTPException(502): Contact center failure
    """
    return orchestrator.create_chat(request.session_id, request.display_name)


@router.post("/voice", response_model=VoiceContactResult)
@handle_contact_errors
def start_voice_contact(
    request: StartVoiceRequest,
    orchestrator: ContactOrchestrator = Depends(get_contact_orchestrator),
) -> VoiceContactResult:
    """
    Start a voice contact.

    With relatedContactId the voice call escalates that chat and is routed
    to the agent already handling it.

    Raises:
        HTTPException(400): Related contact missing, not a chat, or ended
        HTTPException(502): Contact center failure
    """
    return orchestrator.create_voice(
        request.session_id,
        request.display_name,
        related_contact_id=request.related_contact_id,
    )


@router.post("/stop", response_model=StopContactResponse)
@handle_contact_errors
def stop_contact(
    request: StopContactRequest,
    orchestrator: ContactOrchestrator = Depends(get_contact_orchestrator),
) -> StopContactResponse:
    """
    Stop a contact. Stopping an already ended contact succeeds.

    Raises:
        HTTPException(502): Contact center failure
    """
    result = orchestrator.stop(request.contact_id)
    message = "Contact already ended" if result.already_ended else "Contact stopped successfully"
    return StopContactResponse(
        contact_id=result.contact_id,
        already_ended=result.already_ended,
        message=message,
    )
