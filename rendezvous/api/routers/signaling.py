"""WebSocket transport for the signaling protocol."""

import asyncio

from fastapi import APIRouter, Depends, WebSocket
from loguru import logger

from rendezvous.api.dependency import get_signaling_service
from rendezvous.app_config import get_app_environ_config
from rendezvous.domain.signaling import QueueHandle, SignalingService

router = APIRouter()


@router.websocket("/")
@router.websocket("/ws")
async def signaling_socket(
    websocket: WebSocket,
    service: SignalingService = Depends(get_signaling_service),
):
    """One signaling connection.

    Inbound frames are handed to the service in arrival order. Outbound
    messages are written by a separate task so that handlers never wait on
    the socket.
    """
    await websocket.accept()

    handle = QueueHandle(maxsize=get_app_environ_config().SEND_QUEUE_SIZE)
    connection = service.connect(handle)
    handle.label = connection.id

    writer = asyncio.create_task(
        handle.pump(websocket.send_text),
        name=f"signaling-writer:{connection.id}",
    )

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.debug(f"Socket closed for {connection.id} (code={message.get('code')})")
                break

            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            service.receive(connection.id, raw)
    except Exception as e:
        # Transport errors are reconciled exactly like a close
        logger.warning(f"Socket error for {connection.id}: {e!r}")
    finally:
        service.disconnect(connection.id)
        handle.close()
        writer.cancel()
        await asyncio.gather(writer, return_exceptions=True)
