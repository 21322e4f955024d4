"""
Amazon Connect client for contact operations.

Wraps the four Connect calls the backend depends on and translates boto
errors into the domain exception hierarchy.

Dependencies: boto3, botocore
System role: Contact-center boundary
"""

import logging
import time
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from support_backend.core.exceptions import ContactCenterError, ContactNotFoundError
from support_backend.models.contact import (
    ChatContactResult,
    ContactDetails,
    VoiceContactResult,
)

logger = logging.getLogger(__name__)

NOT_FOUND_ERROR_CODES = frozenset({"ResourceNotFoundException", "ContactNotFoundException"})


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "Unknown")


class ConnectContactClient:
    """Amazon Connect client bound to one instance and contact flow."""

    def __init__(
        self,
        instance_id: str,
        contact_flow_id: str,
        region: str | None = None,
        client: Any | None = None,
        config: Config | None = None,
    ) -> None:
        """
        Initialize Connect client.

        Args:
            instance_id: Amazon Connect instance ID
            contact_flow_id: Contact flow used when starting contacts
            region: AWS region of the instance
            client: Pre-built boto3 "connect" client (tests, shared sessions)
            config: botocore client config (timeouts, retries)
        """
        self._instance_id = instance_id
        self._contact_flow_id = contact_flow_id
        self._client = client or boto3.client("connect", region_name=region, config=config)

    @property
    def instance_id(self) -> str:
        return self._instance_id

    def _call(self, operation: str, contact_id: str | None = None, **params: Any) -> dict[str, Any]:
        start = time.monotonic()
        try:
            response = getattr(self._client, operation)(**params)
        except ClientError as e:
            code = _error_code(e)
            logger.warning(
                "%s - Connect call failed",
                operation,
                extra={"contact_id": contact_id, "error_code": code, "error_msg": str(e)},
            )
            if contact_id and code in NOT_FOUND_ERROR_CODES:
                raise ContactNotFoundError(contact_id, operation) from e
            raise ContactCenterError(
                f"Amazon Connect {operation} failed: {e}", operation, code
            ) from e
        except BotoCoreError as e:
            logger.error("%s - %s: %s", operation, type(e).__name__, e)
            raise ContactCenterError(f"Amazon Connect {operation} failed: {e}", operation) from e

        logger.debug(
            "%s - Connect call completed",
            operation,
            extra={"contact_id": contact_id, "duration_ms": round((time.monotonic() - start) * 1000, 2)},
        )
        return response

    def start_chat_contact(self, display_name: str, attributes: dict[str, str]) -> ChatContactResult:
        """
        Start a chat contact.

        Args:
            display_name: Customer display name shown to the agent
            attributes: Contact attributes (sessionId, relatedContactId, ...)

        Returns:
            ChatContactResult: Contact and participant identifiers

        Raises:
            ContactCenterError: Connect rejected the request
        """
        response = self._call(
            "start_chat_contact",
            InstanceId=self._instance_id,
            ContactFlowId=self._contact_flow_id,
            ParticipantDetails={"DisplayName": display_name},
            Attributes=attributes,
        )
        return ChatContactResult(
            contact_id=response["ContactId"],
            participant_id=response["ParticipantId"],
            participant_token=response["ParticipantToken"],
        )

    def start_web_rtc_contact(self, display_name: str, attributes: dict[str, str]) -> VoiceContactResult:
        """
        Start an in-browser (WebRTC) voice contact.

        Returns:
            VoiceContactResult: Identifiers plus media connection data

        Raises:
            ContactCenterError: Connect rejected the request
        """
        response = self._call(
            "start_web_rtc_contact",
            InstanceId=self._instance_id,
            ContactFlowId=self._contact_flow_id,
            ParticipantDetails={"DisplayName": display_name},
            Attributes=attributes,
        )
        return VoiceContactResult(
            contact_id=response["ContactId"],
            participant_id=response["ParticipantId"],
            participant_token=response["ParticipantToken"],
            connection_data=response.get("ConnectionData"),
        )

    def describe_contact(self, contact_id: str) -> ContactDetails:
        """
        Describe a contact, including its user-defined attributes.

        DescribeContact only carries attributes on newer API versions; when
        they are missing they are read with GetContactAttributes.

        Raises:
            ContactNotFoundError: Contact does not exist
            ContactCenterError: Any other Connect failure
        """
        response = self._call(
            "describe_contact",
            contact_id,
            InstanceId=self._instance_id,
            ContactId=contact_id,
        )
        contact = dict(response.get("Contact") or {})
        contact.setdefault("Id", contact_id)
        if "Attributes" not in contact:
            contact["Attributes"] = self.get_contact_attributes(contact_id)
        return ContactDetails.from_describe_response(contact)

    def get_contact_attributes(self, contact_id: str) -> dict[str, str]:
        """Read user-defined attributes; empty when they cannot be read."""
        try:
            response = self._call(
                "get_contact_attributes",
                contact_id,
                InstanceId=self._instance_id,
                InitialContactId=contact_id,
            )
        except ContactCenterError as e:
            logger.warning(
                "get_contact_attributes - Attributes unavailable",
                extra={"contact_id": contact_id, "error_msg": e.message},
            )
            return {}
        return response.get("Attributes") or {}

    def stop_contact(self, contact_id: str) -> None:
        """
        Stop (disconnect) a contact.

        Raises:
            ContactNotFoundError: Contact already ended or never existed
            ContactCenterError: Any other Connect failure
        """
        self._call(
            "stop_contact",
            contact_id,
            InstanceId=self._instance_id,
            ContactId=contact_id,
        )
