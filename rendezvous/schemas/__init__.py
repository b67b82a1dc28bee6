"""Protocol enums shared by the domain and API layers."""

from .signaling_state import ClientRole, MessageType

__all__ = [
    "ClientRole",
    "MessageType",
]
