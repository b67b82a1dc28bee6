"""Signaling domain service - single owner of the connection and session registries."""

from loguru import logger

from rendezvous.api.utils import format_error
from rendezvous.app_config import get_app_environ_config
from rendezvous.domain.utils.idgen import new_client_id

from ._disconnect import DisconnectOperations
from ._handles import ConnectionHandle
from ._registry import ConnectionRegistry, SessionRegistry
from ._relay import RelayOperations
from ._router import MessageRouter, decode_message
from ._streams import StreamOperations
from .signaling_errors import SignalingError
from .signaling_models import ConnectedMessage, Connection, ErrorMessage, Session

INTERNAL_ERROR_MESSAGE = "Internal server error"


class SignalingService:
    """Coordination unit for all signaling state.

    Every mutation of the registries goes through this class. Its methods
    are synchronous and never await, so when called from the event loop
    each one runs to completion before the next message is handled. Callers
    running on other threads must hop onto the loop first.
    """

    def __init__(self, web_client_url: str | None = None):
        if web_client_url is None:
            web_client_url = get_app_environ_config().WEB_CLIENT_URL

        self._connections = ConnectionRegistry()
        self._sessions = SessionRegistry()

        self._streams = StreamOperations(self._connections, self._sessions, web_client_url)
        self._relay = RelayOperations(self._connections, self._sessions)
        self._disconnect = DisconnectOperations(self._connections, self._sessions, self._streams)
        self._router = MessageRouter(self._streams, self._relay)

    # ==================== CONNECTIONS ====================

    def connect(self, handle: ConnectionHandle) -> Connection:
        """Register a new transport link and greet it with its id."""
        connection = Connection(id=new_client_id(), handle=handle)
        self._connections.add(connection)

        connection.send(ConnectedMessage(client_id=connection.id))

        logger.info(f"Client connected: {connection.id}")
        return connection

    def receive(self, connection_id: str, raw: str | bytes) -> None:
        """Handle one inbound frame from a connection.

        Protocol errors are answered with `error{message}` to the sender
        only. Messages from unknown connections are dropped.
        """
        connection = self._connections.get(connection_id)
        if connection is None:
            logger.debug(f"Dropping frame from unknown connection {connection_id}")
            return

        try:
            data = decode_message(raw)
            self._router.dispatch(connection_id, data)
        except SignalingError as e:
            logger.debug(f"Replying error to {connection_id}: {e.message}")
            connection.send(ErrorMessage(message=e.message))
        except Exception as e:
            logger.error(
                f"Unhandled error for connection {connection_id}\n"
                f"Traceback:\n{format_error(e)}"
            )
            connection.send(ErrorMessage(message=INTERNAL_ERROR_MESSAGE))

    def disconnect(self, connection_id: str) -> bool:
        """Reconcile state after transport close or error. Idempotent."""
        return self._disconnect.disconnect(connection_id)

    # ==================== READ-ONLY VIEWS ====================

    def get_connection(self, connection_id: str) -> Connection | None:
        return self._connections.get(connection_id)

    def get_stream(self, stream_id: str) -> Session | None:
        return self._sessions.get(stream_id)

    def list_streams(self) -> list[Session]:
        return self._sessions.snapshot()

    @property
    def client_count(self) -> int:
        return len(self._connections)

    @property
    def stream_count(self) -> int:
        return len(self._sessions)
