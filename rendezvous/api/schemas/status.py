from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rendezvous.domain.signaling import Session


class HealthOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "ok"
    active_clients: int = Field(..., alias="activeClients")
    active_streams: int = Field(..., alias="activeStreams")


class StreamSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    streamer_id: str = Field(..., alias="streamerId")
    created_at: datetime = Field(..., alias="createdAt")
    viewer_count: int = Field(..., alias="viewerCount")

    @classmethod
    def from_session(cls, session: Session) -> "StreamSummary":
        return cls(
            id=session.id,
            streamer_id=session.owner_id,
            created_at=session.created_at,
            viewer_count=len(session.viewers),
        )


class StreamListOut(BaseModel):
    streams: list[StreamSummary]
