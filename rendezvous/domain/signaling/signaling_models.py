"""Signaling domain models."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from rendezvous.domain.utils.clock import utc_now
from rendezvous.schemas import ClientRole, MessageType

from ._handles import ConnectionHandle


class OutboundMessage(BaseModel):
    """Base for server-to-client messages."""

    model_config = ConfigDict(populate_by_name=True)

    type: MessageType

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ConnectedMessage(OutboundMessage):
    type: Literal[MessageType.CONNECTED] = MessageType.CONNECTED
    client_id: str = Field(..., alias="clientId")


class RegisteredMessage(OutboundMessage):
    type: Literal[MessageType.REGISTERED] = MessageType.REGISTERED
    role: ClientRole
    stream_id: str = Field(..., alias="streamId")

    # Only streamers receive a shareable link
    embed_url: str | None = Field(None, alias="embedUrl")


class ErrorMessage(OutboundMessage):
    type: Literal[MessageType.ERROR] = MessageType.ERROR
    message: str


class ViewerJoinedMessage(OutboundMessage):
    type: Literal[MessageType.VIEWER_JOINED] = MessageType.VIEWER_JOINED
    viewer_id: str = Field(..., alias="viewerId")


class StreamEndedMessage(OutboundMessage):
    type: Literal[MessageType.STREAM_ENDED] = MessageType.STREAM_ENDED


class Connection(BaseModel):
    """One live transport link."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    handle: ConnectionHandle
    role: ClientRole = ClientRole.UNSET
    session_id: str | None = None
    connected_at: datetime = Field(default_factory=utc_now)

    def send(self, message: OutboundMessage | dict[str, Any]) -> bool:
        """Best-effort send; returns False when the message was dropped."""
        if isinstance(message, OutboundMessage):
            message = message.to_wire()
        return self.handle.send(message)


class Session(BaseModel):
    """One active stream: its owner and the viewers attached to it."""

    id: str
    owner_id: str
    created_at: datetime = Field(default_factory=utc_now)
    viewers: set[str] = Field(default_factory=set)
