"""
Helpers for structured log context.

Values attached through "extra" are flattened to short strings so that a
contact attribute map or a pydantic model never floods the log line, and
participant tokens are never logged in full.

Dependencies: logging (stdlib), pydantic
System role: Logging helper functions
"""

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a value for a log record.

    Enums log their value, models and collections log a summary, long
    strings are truncated.
    """
    if value is None:
        return "None"
    if isinstance(value, Enum):
        text = str(value.value)
    elif isinstance(value, BaseModel):
        text = f"{type(value).__name__}({len(type(value).model_fields)} fields)"
    elif isinstance(value, (list, tuple, set, frozenset)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    elif isinstance(value, bytes):
        text = f"bytes({len(value)})"
    else:
        text = str(value)

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def redact_token(token: str | None) -> str:
    """Show only the tail of a participant token."""
    if not token:
        return "None"
    return f"***{token[-4:]}" if len(token) > 8 else "***"


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """Log with every context value passed through safe_log_value."""
    logger.log(level, message, extra={key: safe_log_value(val) for key, val in context.items()})


def log_exception_with_context(logger: logging.Logger, message: str, exc: Exception, **context: Any) -> None:
    """
    Log an exception with traceback and flattened context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being handled
        **context: Identifiers of the failing request (connection, contact)
    """
    extra = {key: safe_log_value(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.exception(message, extra=extra)
