"""Stream lifecycle operations: register, join, stop."""

from urllib.parse import quote

from loguru import logger

from rendezvous.domain.utils.idgen import new_stream_id
from rendezvous.schemas import ClientRole

from ._base import BaseOperations
from ._registry import ConnectionRegistry, SessionRegistry
from .signaling_errors import DuplicateSessionError, OwnSessionError, SessionNotFoundError
from .signaling_models import (
    Connection,
    RegisteredMessage,
    Session,
    StreamEndedMessage,
    ViewerJoinedMessage,
)


class StreamOperations(BaseOperations):
    """Operations that create, join and terminate sessions."""

    def __init__(
        self,
        connections: ConnectionRegistry,
        sessions: SessionRegistry,
        web_client_url: str,
    ):
        super().__init__(connections, sessions)
        self.web_client_url = web_client_url

    def build_embed_url(self, stream_id: str) -> str:
        """Shareable viewing link for a stream."""
        return f"{self.web_client_url}?streamId={quote(stream_id, safe='')}"

    def register_streamer(
        self,
        connection_id: str,
        stream_id: str | None = None,
    ) -> Session | None:
        """Publish a new session owned by the connection.

        A connection that already takes part in another session leaves it
        first: as owner its session is stopped, as viewer it is detached.

        Args:
            connection_id: Connection registering as streamer
            stream_id: Requested stream id; generated when omitted

        Returns:
            The created Session, or None if the connection is unknown

        Raises:
            DuplicateSessionError: If a session with this id already exists
        """
        connection = self.connections.get(connection_id)
        if connection is None:
            return None

        stream_id = stream_id or new_stream_id()

        # First writer wins; nothing is touched on conflict
        if stream_id in self.sessions:
            logger.info(f"Streamer {connection_id} rejected, stream {stream_id} already exists")
            raise DuplicateSessionError()

        self._leave_current_session(connection)

        session = self.sessions.create(stream_id, connection_id)
        connection.role = ClientRole.STREAMER
        connection.session_id = stream_id

        connection.send(
            RegisteredMessage(
                role=ClientRole.STREAMER,
                stream_id=stream_id,
                embed_url=self.build_embed_url(stream_id),
            )
        )

        logger.info(f"Streamer {connection_id} -> {stream_id}")
        return session

    def register_viewer(
        self,
        connection_id: str,
        stream_id: str | None,
    ) -> Session | None:
        """Attach the connection to an existing session as a viewer.

        The streamer is notified with `viewer-joined`; the notification is
        dropped if the streamer connection is already gone.

        Raises:
            SessionNotFoundError: If no session exists for stream_id
            OwnSessionError: If the connection owns that session
        """
        connection = self.connections.get(connection_id)
        if connection is None:
            return None

        session = self.sessions.get(stream_id) if stream_id else None
        if session is None:
            logger.info(f"Viewer {connection_id} rejected, stream {stream_id} not found")
            raise SessionNotFoundError()

        if session.owner_id == connection_id:
            raise OwnSessionError()

        if connection.session_id != session.id:
            self._leave_current_session(connection)

        connection.role = ClientRole.VIEWER
        connection.session_id = session.id
        self.add_viewer(session, connection_id)

        connection.send(RegisteredMessage(role=ClientRole.VIEWER, stream_id=session.id))

        self._send(session.owner_id, ViewerJoinedMessage(viewer_id=connection_id))

        logger.info(
            f"Viewer {connection_id} joined {session.id} ({len(session.viewers)} watching)"
        )
        return session

    def stop_stream(self, connection_id: str, *, owned_only: bool = False) -> bool:
        """End the session associated with the connection.

        Every viewer still connected receives `stream-ended` before the
        session is deleted. The connection's own role and session_id are
        left untouched; they go away with the connection.

        Args:
            connection_id: Connection requesting the stop
            owned_only: Only stop the session if this connection owns it

        Returns:
            True if a session was stopped
        """
        connection = self.connections.get(connection_id)
        if connection is None or not connection.session_id:
            return False

        session = self.sessions.get(connection.session_id)
        if session is None:
            return False

        if owned_only and session.owner_id != connection_id:
            logger.debug(
                f"Connection {connection_id} no longer owns {session.id}, skipping stop"
            )
            return False

        notified = 0
        for viewer_id in list(session.viewers):
            if self._send(viewer_id, StreamEndedMessage()):
                notified += 1

        self.sessions.delete(session.id)

        logger.info(
            f"Stream {session.id} stopped by {connection_id}, "
            f"notified {notified}/{len(session.viewers)} viewers"
        )
        return True

    def add_viewer(self, session: Session, connection_id: str) -> None:
        session.viewers.add(connection_id)

    def remove_viewer(self, session_id: str | None, connection_id: str) -> bool:
        """Detach a viewer from a session if that session still exists."""
        session = self.sessions.get(session_id) if session_id else None
        if session is None or connection_id not in session.viewers:
            return False

        session.viewers.discard(connection_id)
        logger.info(f"Viewer {connection_id} left {session_id} ({len(session.viewers)} watching)")
        return True

    def _leave_current_session(self, connection: Connection) -> None:
        """Release whatever session the connection is associated with."""
        if not connection.session_id:
            return

        session = self.sessions.get(connection.session_id)
        if session is None:
            return

        if session.owner_id == connection.id:
            self.stop_stream(connection.id, owned_only=True)
        else:
            self.remove_viewer(session.id, connection.id)
