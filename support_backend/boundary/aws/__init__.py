"""
AWS boundary modules.

Exports: ConnectContactClient, ConnectionRegistry, WebSocketPublisher
"""

from .connect_client import ConnectContactClient
from .connection_registry import ConnectionRegistry
from .websocket_publisher import WebSocketPublisher, management_endpoint

__all__ = [
    "ConnectContactClient",
    "ConnectionRegistry",
    "WebSocketPublisher",
    "management_endpoint",
]
