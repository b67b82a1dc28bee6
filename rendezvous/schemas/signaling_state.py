"""Common enums used across the signaling protocol."""

from enum import Enum


class ClientRole(str, Enum):
    """Role a connection takes on when it registers.

    Every connection starts as UNSET and picks STREAMER or VIEWER with its
    register message. The role is what the disconnect path uses to decide
    which session-side state has to be cleaned up.
    """

    UNSET = "unset"
    STREAMER = "streamer"
    VIEWER = "viewer"

    def __str__(self) -> str:
        return self.value


class MessageType(str, Enum):
    """Values of the `type` discriminator on the wire."""

    # Inbound
    REGISTER_STREAMER = "register-streamer"
    REGISTER_VIEWER = "register-viewer"
    OFFER = "offer"
    ANSWER = "answer"
    ICE_CANDIDATE = "ice-candidate"
    STOP_STREAM = "stop-stream"

    # Outbound
    CONNECTED = "connected"
    REGISTERED = "registered"
    ERROR = "error"
    VIEWER_JOINED = "viewer-joined"
    STREAM_ENDED = "stream-ended"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def relay_types(cls) -> list["MessageType"]:
        """Negotiation messages forwarded between peers."""
        return [
            MessageType.OFFER,
            MessageType.ANSWER,
            MessageType.ICE_CANDIDATE,
        ]


__all__ = ["ClientRole", "MessageType"]
