"""
Escalation queue router.

Invoked by the contact flow while a new contact is being queued. When the
contact back-references another contact, it is sent to the personal queue
of the agent already handling that contact. Every failure falls back to
the default queue: blocking queueing is worse than losing continuity.

Dependencies: support_backend.boundary.aws.connect_client
System role: Agent-continuity queue selection
"""

import logging
from typing import Any, Mapping

from support_backend.boundary.aws.connect_client import ConnectContactClient
from support_backend.models.contact import RELATED_CONTACT_ATTRIBUTE
from support_backend.models.events import QueueSelection

logger = logging.getLogger(__name__)


def agent_queue_arn(region: str, account_id: str, instance_id: str, agent_id: str) -> str:
    """
    Personal queue ARN of an agent.

    Each agent owns a reserved queue whose ID equals the agent ID.
    """
    return f"arn:aws:connect:{region}:{account_id}:instance/{instance_id}/queue/{agent_id}"


class EscalationQueueRouter:
    """Selects the queue for a contact at queueing time."""

    def __init__(
        self,
        connect_client: ConnectContactClient | None,
        default_queue_arn: str,
        region: str,
        account_id: str,
        instance_id: str,
    ) -> None:
        """
        Initialize router.

        Args:
            connect_client: Amazon Connect client (None routes everything to default)
            default_queue_arn: Fallback queue
            region: Region of the Connect instance
            account_id: Account owning the instance
            instance_id: Connect instance ID
        """
        self._connect = connect_client
        self._default_queue_arn = default_queue_arn
        self._region = region
        self._account_id = account_id
        self._instance_id = instance_id

    @property
    def default_selection(self) -> QueueSelection:
        return QueueSelection(queue_arn=self._default_queue_arn)

    def select_queue(
        self,
        contact_id: str | None,
        channel: str | None,
        attributes: Mapping[str, Any] | None,
    ) -> QueueSelection:
        """
        Choose a queue for a contact. Never raises.

        Args:
            contact_id: Contact being queued
            channel: Its channel (logged only)
            attributes: Its contact attributes

        Returns:
            QueueSelection: Agent personal queue, or the default queue
        """
        try:
            return self._select(contact_id, channel, attributes or {})
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "select_queue - %s: %s, falling back to default queue",
                type(e).__name__,
                e,
                extra={"contact_id": contact_id},
            )
            return self.default_selection

    def _select(self, contact_id: str | None, channel: str | None, attributes: Mapping[str, Any]) -> QueueSelection:
        related_contact_id = attributes.get(RELATED_CONTACT_ATTRIBUTE)
        if not related_contact_id:
            logger.info(
                "select_queue - No related contact, using default queue",
                extra={"contact_id": contact_id, "channel": channel},
            )
            return self.default_selection

        if self._connect is None:
            logger.warning("select_queue - No Connect client configured, using default queue")
            return self.default_selection

        try:
            related = self._connect.describe_contact(str(related_contact_id))
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(
                "select_queue - Failed to describe related contact, using default queue",
                extra={
                    "contact_id": contact_id,
                    "related_contact_id": related_contact_id,
                    "error_type": type(e).__name__,
                    "error_msg": str(e),
                },
            )
            return self.default_selection

        if not related.agent_id:
            logger.info(
                "select_queue - Related contact has no agent, using default queue",
                extra={"contact_id": contact_id, "related_contact_id": related_contact_id},
            )
            return self.default_selection

        queue_arn = agent_queue_arn(self._region, self._account_id, self._instance_id, related.agent_id)
        logger.info(
            "select_queue - Routing to agent personal queue",
            extra={"contact_id": contact_id, "agent_id": related.agent_id, "queue_arn": queue_arn},
        )
        return QueueSelection(queue_arn=queue_arn, agent_id=related.agent_id, is_default=False)
