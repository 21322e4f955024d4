"""
API Gateway WebSocket publisher.

Posts JSON payloads to a single client connection through the API Gateway
Management API.

Dependencies: boto3, botocore
System role: Realtime transport boundary
"""

import json
import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from support_backend.core.exceptions import ConnectionGoneError, PushDeliveryError

logger = logging.getLogger(__name__)


def management_endpoint(domain_name: str, stage: str) -> str:
    """Management API endpoint for a WebSocket API stage."""
    return f"https://{domain_name}/{stage}"


class WebSocketPublisher:
    """Publisher bound to one WebSocket API endpoint."""

    def __init__(
        self,
        endpoint_url: str,
        client: Any | None = None,
        config: Config | None = None,
    ) -> None:
        """
        Initialize publisher.

        Args:
            endpoint_url: https://{domain}/{stage} of the WebSocket API
            client: Pre-built boto3 "apigatewaymanagementapi" client
            config: botocore client config (timeouts, retries)
        """
        self._endpoint_url = endpoint_url
        self._client = client or boto3.client(
            "apigatewaymanagementapi",
            endpoint_url=endpoint_url,
            config=config,
        )

    @property
    def endpoint_url(self) -> str:
        return self._endpoint_url

    def post(self, connection_id: str, payload: dict[str, Any]) -> None:
        """
        Send a JSON payload to one connection.

        Raises:
            ConnectionGoneError: Transport reports the connection no longer exists (HTTP 410)
            PushDeliveryError: Any other delivery failure
        """
        data = json.dumps(payload).encode("utf-8")
        try:
            self._client.post_to_connection(ConnectionId=connection_id, Data=data)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            if code == "GoneException" or status == 410:
                raise ConnectionGoneError(connection_id) from e
            raise PushDeliveryError(
                connection_id, f"Failed to post to connection {connection_id}: {e}", {"error_code": code}
            ) from e
        except BotoCoreError as e:
            raise PushDeliveryError(connection_id, f"Failed to post to connection {connection_id}: {e}") from e

        logger.debug(
            "post - Message delivered",
            extra={"connection_id": connection_id, "message_type": payload.get("type")},
        )
