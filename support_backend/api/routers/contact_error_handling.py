"""
Contact error handling utilities.

Decorator mapping domain exceptions raised by the contact orchestrator to
HTTP errors with a machine-readable code the widget can branch on.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from support_backend.core.exceptions import ContactCenterError, EscalationValidationError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_contact_errors(func: F) -> F:
    """
    Decorator to transform contact errors into HTTPExceptions.

    - EscalationValidationError → 400 with {error, errorCode, message}
    - ContactCenterError → 502 (upstream failure, caller may retry)
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)

        except EscalationValidationError as e:
            logger.warning(
                "Escalation validation failed",
                extra={"error_code": e.error_code, "related_contact_id": e.related_contact_id},
            )
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_dict())

        except ContactCenterError as e:
            logger.error(
                "Contact center call failed",
                extra={"error_code": e.error_code, "error_msg": e.message},
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={
                    "error": "Contact center request failed",
                    "errorCode": "CONTACT_CENTER_ERROR",
                    "message": e.message,
                },
            )

    return wrapper  # type: ignore[return-value]
