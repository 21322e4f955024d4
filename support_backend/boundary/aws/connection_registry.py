"""
Connection registry backed by DynamoDB.

Maps API Gateway WebSocket connection IDs to browser session IDs (and,
for older widgets, to a voice contact ID). Records expire through the
table's "ttl" attribute.

Dependencies: boto3, botocore
System role: Durable connection-to-session store
"""

import logging
import time
from typing import Any, Callable

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from support_backend.core.exceptions import ConnectionNotFoundError, RegistryError
from support_backend.models.connection import ConnectionRecord

logger = logging.getLogger(__name__)


def _newest_first(record: ConnectionRecord) -> tuple:
    return (record.registered_at or 0, record.connected_at or 0, record.connection_id)


class ConnectionRegistry:
    """DynamoDB-backed registry of live WebSocket connections."""

    def __init__(
        self,
        table: Any,
        session_index_name: str = "sessionIdIndex",
        voice_contact_index_name: str = "voiceContactIdIndex",
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize registry.

        Args:
            table: boto3 DynamoDB Table resource
            session_index_name: GSI keyed by sessionId
            voice_contact_index_name: Legacy GSI keyed by voiceContactId
            clock: Returns current epoch seconds
        """
        self._table = table
        self._session_index_name = session_index_name
        self._voice_contact_index_name = voice_contact_index_name
        self._clock = clock

    @classmethod
    def from_table_name(
        cls,
        table_name: str,
        region: str | None = None,
        **kwargs: Any,
    ) -> "ConnectionRegistry":
        """Build a registry from a table name using the default boto3 session."""
        table = boto3.resource("dynamodb", region_name=region).Table(table_name)
        return cls(table, **kwargs)

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def put(self, connection_id: str, expires_at: int, session_id: str | None = None) -> ConnectionRecord:
        """
        Create a bare record at connect time, overwriting any previous one.

        Args:
            connection_id: API Gateway connection ID
            expires_at: Absolute expiry in epoch seconds
            session_id: Session ID when the client supplied it on connect

        Returns:
            ConnectionRecord: Stored record

        Raises:
            RegistryError: Table write failed
        """
        record = ConnectionRecord(
            connection_id=connection_id,
            session_id=session_id or None,
            connected_at=self._now_ms(),
            expires_at=expires_at,
        )
        try:
            self._table.put_item(Item=record.to_item())
        except (ClientError, BotoCoreError) as e:
            logger.error("put - %s: %s", type(e).__name__, e, extra={"connection_id": connection_id})
            raise RegistryError(f"Failed to store connection {connection_id}: {e}", "put") from e

        logger.info(
            "put - Connection stored",
            extra={"connection_id": connection_id, "session_id": session_id, "ttl": expires_at},
        )
        return record

    def attach_session(self, connection_id: str, session_id: str) -> None:
        """
        Attach a session ID to an existing connection record.

        Raises:
            ConnectionNotFoundError: Record was already deleted (stale connection)
            RegistryError: Table write failed
        """
        self._attach(connection_id, "sessionId", session_id)

    def attach_voice_contact(self, connection_id: str, voice_contact_id: str) -> None:
        """Legacy registration keyed by voice contact ID; same semantics as attach_session."""
        self._attach(connection_id, "voiceContactId", voice_contact_id)

    def _attach(self, connection_id: str, attribute: str, value: str) -> None:
        try:
            self._table.update_item(
                Key={"connectionId": connection_id},
                UpdateExpression=f"SET {attribute} = :value, registeredAt = :registeredAt",
                ConditionExpression="attribute_exists(connectionId)",
                ExpressionAttributeValues={
                    ":value": value,
                    ":registeredAt": self._now_ms(),
                },
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                logger.warning(
                    "attach - Connection record no longer exists",
                    extra={"connection_id": connection_id, "attribute": attribute},
                )
                raise ConnectionNotFoundError(connection_id) from e
            logger.error("attach - ClientError: %s", e, extra={"connection_id": connection_id})
            raise RegistryError(f"Failed to register connection {connection_id}: {e}", "update") from e
        except BotoCoreError as e:
            logger.error("attach - %s: %s", type(e).__name__, e, extra={"connection_id": connection_id})
            raise RegistryError(f"Failed to register connection {connection_id}: {e}", "update") from e

        logger.info(
            "attach - Connection registered",
            extra={"connection_id": connection_id, "attribute": attribute, "value": value},
        )

    def find_by_session(self, session_id: str) -> ConnectionRecord | None:
        """
        Resolve a session to its live connection.

        Expired records are skipped. When several records match (reconnect
        before the old record expired) the most recently registered wins.

        Returns:
            ConnectionRecord | None: Matching connection, if any

        Raises:
            RegistryError: Index query failed
        """
        return self._find(self._session_index_name, "sessionId", session_id)

    def find_by_voice_contact(self, voice_contact_id: str) -> ConnectionRecord | None:
        """Legacy lookup by voice contact ID."""
        return self._find(self._voice_contact_index_name, "voiceContactId", voice_contact_id)

    def _find(self, index_name: str, attribute: str, value: str) -> ConnectionRecord | None:
        records = self._query(index_name, attribute, value)
        now = self._clock()
        live = [record for record in records if not record.is_expired(now)]

        if len(live) > 1:
            logger.warning(
                "find - Multiple connections match, using most recent registration",
                extra={attribute: value, "match_count": len(live)},
            )
        if not live:
            logger.info("find - No connection found", extra={attribute: value})
            return None

        record = max(live, key=_newest_first)
        logger.info("find - Found connection", extra={attribute: value, "connection_id": record.connection_id})
        return record

    def _query(self, index_name: str, attribute: str, value: str) -> list[ConnectionRecord]:
        params: dict[str, Any] = {
            "IndexName": index_name,
            "KeyConditionExpression": Key(attribute).eq(value),
        }
        records: list[ConnectionRecord] = []
        try:
            while True:
                response = self._table.query(**params)
                records.extend(ConnectionRecord.from_item(item) for item in response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    return records
                params["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            logger.error("query - %s: %s", type(e).__name__, e, extra={"index": index_name})
            raise RegistryError(f"Failed to query {index_name}: {e}", "query") from e

    def remove(self, connection_id: str) -> None:
        """
        Delete a connection record. Deleting a missing record is not an error.

        Raises:
            RegistryError: Table delete failed
        """
        try:
            self._table.delete_item(Key={"connectionId": connection_id})
        except (ClientError, BotoCoreError) as e:
            logger.error("remove - %s: %s", type(e).__name__, e, extra={"connection_id": connection_id})
            raise RegistryError(f"Failed to remove connection {connection_id}: {e}", "delete") from e

        logger.info("remove - Connection removed", extra={"connection_id": connection_id})
