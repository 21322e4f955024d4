"""
Lambda handler for contact flow queue selection.

Invoked synchronously by the contact flow for each queued contact and
returns the queue ARN to transfer to. Never raises: any failure,
including missing configuration, yields the default queue.

Environment variables:
- CONNECT_INSTANCE_ID: Amazon Connect instance
- DEFAULT_QUEUE_ARN: Fallback queue
- AWS_ACCOUNT_ID, AWS_REGION: Used to build personal queue ARNs
- LOG_LEVEL: Logging level

Dependencies: support_backend.core.escalation_queue_router, lambda_utils
System role: Lambda entry point for agent-continuity routing
"""

import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()

from support_backend.configs import get_settings
from support_backend.core.escalation_queue_router import EscalationQueueRouter
from support_backend.lambdas.lambda_utils.config import build_connect_client
from support_backend.lambdas.lambda_utils.event_parser import parse_flow_event
from support_backend.models.events import QueueSelection
from support_backend.observability.correlation import bind_lambda_context
from support_backend.observability.log_utils import log_with_context
from support_backend.observability.logger import configure_logging

logger = logging.getLogger(__name__)


def get_router() -> EscalationQueueRouter:
    """Queue router built once per container."""
    if not hasattr(get_router, "_router"):
        settings = get_settings()
        connect_client = build_connect_client(settings) if settings.connect.instance_id else None
        get_router._router = EscalationQueueRouter(
            connect_client=connect_client,
            default_queue_arn=settings.routing.default_queue_arn,
            region=settings.routing.aws_region,
            account_id=settings.routing.aws_account_id,
            instance_id=settings.connect.instance_id,
        )
    return get_router._router


def _check_queue_arn(selection: QueueSelection) -> None:
    """An empty queue ARN makes the contact flow transfer fail."""
    if not selection.queue_arn:
        logger.error("%s:handler - No queue ARN to return, DEFAULT_QUEUE_ARN is not configured", __name__)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, str]:
    """
    Lambda handler for queue selection.

    Args:
        event: Contact flow event with Details.ContactData
        context: Lambda context object

    Returns:
        Dict with queueSelector and queueArn (same value)
    """
    try:
        configure_logging(os.getenv("LOG_LEVEL", "INFO"))
        bind_lambda_context(context)
        contact = parse_flow_event(event)
        router = get_router()
    except Exception as e:  # pylint: disable=broad-except
        logger.error("%s:handler - %s: %s, using default queue", __name__, type(e).__name__, e)
        selection = QueueSelection(queue_arn=os.getenv("DEFAULT_QUEUE_ARN", ""))
        _check_queue_arn(selection)
        return selection.to_flow_response()

    selection = router.select_queue(contact.contact_id, contact.channel, contact.attributes)
    _check_queue_arn(selection)
    log_with_context(
        logger,
        logging.INFO,
        f"{__name__}:handler - Queue selected",
        contact_id=contact.contact_id,
        queue_arn=selection.queue_arn,
        is_default=selection.is_default,
    )
    return selection.to_flow_response()
