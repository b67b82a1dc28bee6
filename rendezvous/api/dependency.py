from fastapi.requests import HTTPConnection

from rendezvous.domain.signaling import SignalingService


def get_signaling_service(conn: HTTPConnection) -> SignalingService:
    """SignalingService owned by the running application (set in lifespan)."""
    return conn.app.state.signaling_service
