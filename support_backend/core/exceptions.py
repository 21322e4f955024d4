"""
Exception hierarchy for the support backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class SupportBackendException(Exception):
    """Base exception for all support backend errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class EscalationValidationError(SupportBackendException):
    """
    Raised when an escalation precondition on the related contact fails.

    Carries a machine-readable code, a short error title and a human
    message so the widget can show an actionable hint per kind.
    """

    error_code = "ESCALATION_VALIDATION_FAILED"
    error = "Escalation validation failed"

    def __init__(
        self,
        related_contact_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["related_contact_id"] = related_contact_id
        self.related_contact_id = related_contact_id
        super().__init__(message, details)

    def to_dict(self) -> dict[str, str]:
        """Serialize into the error body returned to the widget."""
        return {
            "error": self.error,
            "errorCode": self.error_code,
            "message": self.message,
        }


class RelatedContactNotFoundError(EscalationValidationError):
    """Raised when the related contact does not exist."""

    error_code = "RELATED_CONTACT_NOT_FOUND"
    error = "Related contact not found"

    def __init__(self, related_contact_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            related_contact_id,
            "The specified chat contact does not exist",
            details,
        )


class InvalidRelatedContactTypeError(EscalationValidationError):
    """Raised when the related contact is not a chat contact."""

    error_code = "INVALID_RELATED_CONTACT_TYPE"
    error = "Related contact must be a chat contact"

    def __init__(
        self,
        related_contact_id: str,
        channel: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if channel:
            details["channel"] = channel
        super().__init__(
            related_contact_id,
            f"Only chat contacts can be escalated to voice (got {channel or 'unknown'})",
            details,
        )


class InactiveRelatedContactError(EscalationValidationError):
    """Raised when the related contact has already ended."""

    error_code = "INACTIVE_RELATED_CONTACT"
    error = "Related contact is not active"

    def __init__(
        self,
        related_contact_id: str,
        state: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if state:
            details["state"] = state
        super().__init__(
            related_contact_id,
            "The chat has ended. Start a new chat to talk to an agent",
            details,
        )


class ContactCenterError(SupportBackendException):
    """Raised when an Amazon Connect call fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize contact center error.

        Args:
            message: Error message
            operation: Connect operation that failed
            error_code: AWS error code, when the service returned one
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if error_code:
            details["error_code"] = error_code
        self.error_code = error_code
        super().__init__(message, details)


class RegistryError(SupportBackendException):
    """Raised when the connection table cannot be read or written."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class ConnectionNotFoundError(RegistryError):
    """Raised when registering against a connection record that no longer exists."""

    def __init__(self, connection_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["connection_id"] = connection_id
        self.connection_id = connection_id
        super().__init__(f"Connection not found: {connection_id}", "update", details)


class PushDeliveryError(SupportBackendException):
    """Raised when a push to a client connection fails."""

    def __init__(
        self,
        connection_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["connection_id"] = connection_id
        self.connection_id = connection_id
        super().__init__(message, details)


class MessageParseError(SupportBackendException):
    """Raised when an inbound Lambda event cannot be parsed."""

    pass


class ContactNotFoundError(ContactCenterError):
    """Raised when Amazon Connect reports that a contact does not exist."""

    def __init__(
        self,
        contact_id: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["contact_id"] = contact_id
        self.contact_id = contact_id
        super().__init__(f"Contact not found: {contact_id}", operation, "ResourceNotFoundException", details)


class ConnectionGoneError(PushDeliveryError):
    """Raised by the publisher when the transport reports the target connection is gone."""

    def __init__(self, connection_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(connection_id, f"Connection is gone: {connection_id}", details)
