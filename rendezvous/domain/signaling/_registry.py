"""In-memory registries of live connections and active sessions."""

from .signaling_errors import DuplicateSessionError
from .signaling_models import Connection, Session


class ConnectionRegistry:
    """Every live connection, keyed by connection id."""

    def __init__(self):
        self._connections: dict[str, Connection] = {}

    def add(self, connection: Connection) -> None:
        if connection.id in self._connections:
            raise ValueError(f"Connection already registered: {connection.id}")
        self._connections[connection.id] = connection

    def get(self, connection_id: str) -> Connection | None:
        return self._connections.get(connection_id)

    def remove(self, connection_id: str) -> Connection | None:
        """Remove and return the connection; unknown ids are a no-op."""
        return self._connections.pop(connection_id, None)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._connections

    def __len__(self) -> int:
        return len(self._connections)


class SessionRegistry:
    """Every active session, keyed by stream id.

    Viewer membership is not mutated here; see StreamOperations.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create(self, session_id: str, owner_id: str) -> Session:
        """
        Create a session owned by `owner_id`.

        Raises:
            DuplicateSessionError: If a session with this id already exists
        """
        if session_id in self._sessions:
            raise DuplicateSessionError()

        session = Session(id=session_id, owner_id=owner_id)
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def delete(self, session_id: str) -> Session | None:
        return self._sessions.pop(session_id, None)

    def snapshot(self) -> list[Session]:
        """Snapshot of the active sessions in creation order."""
        return list(self._sessions.values())

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
