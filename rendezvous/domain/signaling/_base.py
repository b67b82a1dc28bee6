"""Base class for signaling operations."""

from typing import Any

from loguru import logger

from ._registry import ConnectionRegistry, SessionRegistry
from .signaling_models import OutboundMessage


class BaseOperations:
    """Shared access to the registries owned by SignalingService."""

    def __init__(self, connections: ConnectionRegistry, sessions: SessionRegistry):
        self.connections = connections
        self.sessions = sessions

    def _send(self, connection_id: str, message: OutboundMessage | dict[str, Any]) -> bool:
        """
        Send to a connection by id, dropping the message if it is gone.

        Returns:
            True if the message was handed to the connection's handle
        """
        connection = self.connections.get(connection_id)
        if connection is None:
            logger.debug(f"Dropping message for unknown connection {connection_id}")
            return False
        return connection.send(message)
