"""Inbound message decoding and dispatch."""

from collections.abc import Callable
from typing import Any

import orjson
from loguru import logger

from rendezvous.schemas import MessageType

from ._relay import RelayOperations
from ._streams import StreamOperations
from .signaling_errors import MalformedMessageError

Handler = Callable[[str, dict[str, Any]], Any]


def decode_message(raw: str | bytes) -> dict[str, Any]:
    """
    Parse one inbound frame.

    Raises:
        MalformedMessageError: If the frame is not a JSON object
    """
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise MalformedMessageError() from e

    if not isinstance(data, dict):
        raise MalformedMessageError()

    return data


def _stream_id_param(value: Any) -> str | None:
    """Normalize a client supplied streamId; empty values count as absent."""
    if not value or isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    return str(value)


class MessageRouter:
    """Maps a decoded message to its handler by `type`.

    Unknown or missing types are ignored on purpose.
    """

    def __init__(self, streams: StreamOperations, relay: RelayOperations):
        self._streams = streams
        self._relay = relay
        self._handlers: dict[str, Handler] = {
            MessageType.REGISTER_STREAMER.value: self._on_register_streamer,
            MessageType.REGISTER_VIEWER.value: self._on_register_viewer,
            MessageType.STOP_STREAM.value: self._on_stop_stream,
        }
        for kind in MessageType.relay_types():
            self._handlers[kind.value] = self._on_relay

    def dispatch(self, connection_id: str, data: dict[str, Any]) -> bool:
        """
        Run the handler for `data["type"]`.

        Returns:
            False if the message type is not handled
        """
        msg_type = data.get("type")
        handler = self._handlers.get(msg_type) if isinstance(msg_type, str) else None
        if handler is None:
            logger.debug(f"Ignoring message type {msg_type!r} from {connection_id}")
            return False

        handler(connection_id, data)
        return True

    def _on_register_streamer(self, connection_id: str, data: dict[str, Any]):
        return self._streams.register_streamer(connection_id, _stream_id_param(data.get("streamId")))

    def _on_register_viewer(self, connection_id: str, data: dict[str, Any]):
        return self._streams.register_viewer(connection_id, _stream_id_param(data.get("streamId")))

    def _on_stop_stream(self, connection_id: str, data: dict[str, Any]):
        return self._streams.stop_stream(connection_id)

    def _on_relay(self, connection_id: str, data: dict[str, Any]):
        return self._relay.relay(connection_id, data, data["type"])
