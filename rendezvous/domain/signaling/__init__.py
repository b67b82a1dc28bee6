from ._handles import ConnectionHandle, QueueHandle
from .signaling_domain import SignalingService
from .signaling_errors import (
    DuplicateSessionError,
    MalformedMessageError,
    OwnSessionError,
    SessionNotFoundError,
    SignalingError,
)
from .signaling_models import Connection, Session

__all__ = [
    "Connection",
    "ConnectionHandle",
    "DuplicateSessionError",
    "MalformedMessageError",
    "OwnSessionError",
    "QueueHandle",
    "Session",
    "SessionNotFoundError",
    "SignalingError",
    "SignalingService",
]
