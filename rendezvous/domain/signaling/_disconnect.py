"""Reconciliation of shared state after a connection is lost."""

from loguru import logger

from rendezvous.schemas import ClientRole

from ._base import BaseOperations
from ._registry import ConnectionRegistry, SessionRegistry
from ._streams import StreamOperations


class DisconnectOperations(BaseOperations):
    """Restores registry invariants when a transport closes or errors."""

    def __init__(
        self,
        connections: ConnectionRegistry,
        sessions: SessionRegistry,
        streams: StreamOperations,
    ):
        super().__init__(connections, sessions)
        self._streams = streams

    def disconnect(self, connection_id: str) -> bool:
        """Clean up after a connection and forget it.

        Session-side cleanup runs first because it reads the connection's
        recorded role and session_id.

        Returns:
            False if the connection was already gone
        """
        connection = self.connections.get(connection_id)
        if connection is None:
            logger.debug(f"Disconnect for unknown connection {connection_id}, nothing to do")
            return False

        if connection.role == ClientRole.STREAMER:
            self._streams.stop_stream(connection_id, owned_only=True)
        elif connection.role == ClientRole.VIEWER:
            # The streamer is not told about departures
            self._streams.remove_viewer(connection.session_id, connection_id)

        self.connections.remove(connection_id)
        connection.handle.close()

        logger.info(
            f"Client disconnected: {connection_id} (role={connection.role}, "
            f"stream={connection.session_id})"
        )
        return True
