"""Read-only HTTP views over the signaling state."""

from html import escape

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from rendezvous.api.dependency import get_signaling_service
from rendezvous.api.schemas.status import HealthOut, StreamListOut, StreamSummary
from rendezvous.app_config import get_app_environ_config
from rendezvous.domain.signaling import SignalingService
from rendezvous.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def status_page(
    request: Request,
    service: SignalingService = Depends(get_signaling_service),
) -> HTMLResponse:
    """Human readable status page with counts and the client link."""
    web_client_url = escape(get_app_environ_config().WEB_CLIENT_URL)
    host = escape(request.headers.get("host", ""))

    return HTMLResponse(
        f"""
    <h1>WebRTC Signaling Server</h1>
    <p>Status: Running ✓</p>
    <p>Active Clients: {service.client_count}</p>
    <p>Active Streams: {service.stream_count}</p>
    <p><strong>Open Web Client:</strong>
      <a href="{web_client_url}" target="_blank">
        {web_client_url}
      </a>
    </p>
    <p>WebSocket endpoint: <strong>wss://{host}</strong></p>
  """
    )


@router.get("/api/health")
async def health(
    service: SignalingService = Depends(get_signaling_service),
) -> HealthOut:
    return HealthOut(
        active_clients=service.client_count,
        active_streams=service.stream_count,
    )


@router.get("/api/streams")
async def list_streams(
    service: SignalingService = Depends(get_signaling_service),
) -> StreamListOut:
    return StreamListOut(
        streams=[StreamSummary.from_session(s) for s in service.list_streams()],
    )


@router.get("/api/streams/{stream_id}")
async def get_stream(
    stream_id: str,
    service: SignalingService = Depends(get_signaling_service),
) -> StreamSummary:
    """Summary of a single active stream.

    Raises:
        404: No active stream with this id
    """
    session = service.get_stream(stream_id)
    if session is None:
        raise AppError(
            errcode=AppErrorCode.E_STREAM_NOT_FOUND,
            errmesg=f"Stream not found: {stream_id}",
            status_code=HttpStatusCode.NOT_FOUND,
        )

    return StreamSummary.from_session(session)
