"""Outbound send capabilities attached to each connection."""

import asyncio
import contextlib
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

import orjson
from loguru import logger


class ConnectionHandle(ABC):
    """Capability to send a message to a connection's remote peer.

    `send` must never block: handlers call it while mutating the registries.
    """

    @abstractmethod
    def send(self, message: dict[str, Any]) -> bool:
        """Queue a message for delivery. Returns False if it was dropped."""

    @abstractmethod
    def close(self) -> None:
        """Stop accepting messages. Safe to call more than once."""


class QueueHandle(ConnectionHandle):
    """Bounded outbound mailbox drained by a per-connection writer task."""

    def __init__(self, maxsize: int = 256, label: str = "-"):
        self._queue: asyncio.Queue[dict[str, Any] | None] = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self.label = label

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, message: dict[str, Any]) -> bool:
        if self._closed:
            return False

        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning(
                "Outbound queue full, dropping {} message for {}",
                message.get("type"),
                self.label,
            )
            return False

        return True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # A full queue is left to the transport, which cancels the writer
        with contextlib.suppress(asyncio.QueueFull):
            self._queue.put_nowait(None)

    async def pump(self, send_text: Callable[[str], Awaitable[None]]) -> None:
        """Write queued messages in order until the handle is closed."""
        while True:
            message = await self._queue.get()
            if message is None:
                return

            try:
                await send_text(orjson.dumps(message).decode())
            except Exception as e:
                logger.warning("Send to {} failed, closing handle: {!r}", self.label, e)
                self._closed = True
                return
