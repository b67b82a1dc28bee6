"""End-to-end scenarios against SignalingService with recording handles."""

import orjson

from rendezvous.domain.signaling import SignalingService
from tests.fixtures.signaling_fixtures import RecordingHandle


def send(service, connection_id, **message):
    service.receive(connection_id, orjson.dumps(message))


class TestConnect:
    def test_connect_greets_with_client_id(self, service):
        handle = RecordingHandle()

        connection = service.connect(handle)

        assert handle.messages == [{"type": "connected", "clientId": connection.id}]
        assert service.client_count == 1

    def test_client_ids_are_unique(self, service, connect):
        ids = {connect()[0] for _ in range(50)}

        assert len(ids) == 50

    def test_default_web_client_url_comes_from_config(self):
        from rendezvous.app_config import get_app_environ_config

        service = SignalingService()
        handle = RecordingHandle()
        connection = service.connect(handle)

        send(service, connection.id, type="register-streamer", streamId="s1")

        assert handle.last["embedUrl"] == f"{get_app_environ_config().WEB_CLIENT_URL}?streamId=s1"


class TestScenarios:
    def test_streamer_and_viewer_handshake(self, service, connect):
        """A publishes s1, B joins, then offer/answer/candidates flow both ways."""
        # Arrange
        a_id, a = connect()
        b_id, b = connect()

        # Act
        send(service, a_id, type="register-streamer", streamId="s1")
        send(service, b_id, type="register-viewer", streamId="s1")
        send(service, a_id, type="offer", targetId=b_id, offer={"type": "offer", "sdp": "o"})
        send(service, b_id, type="answer", targetId=a_id, answer={"type": "answer", "sdp": "a"})
        send(service, b_id, type="ice-candidate", targetId=a_id, **{"ice-candidate": {"candidate": "c"}})

        # Assert
        assert a.messages[1]["type"] == "registered"
        assert a.messages[1]["role"] == "streamer"
        assert a.messages[1]["streamId"] == "s1"
        assert a.messages[2:] == [
            {"type": "viewer-joined", "viewerId": b_id},
            {"type": "answer", "senderId": b_id, "answer": {"type": "answer", "sdp": "a"}},
            {"type": "ice-candidate", "senderId": b_id, "candidate": {"candidate": "c"}},
        ]
        assert b.messages[1:] == [
            {"type": "registered", "role": "viewer", "streamId": "s1"},
            {"type": "offer", "senderId": a_id, "offer": {"type": "offer", "sdp": "o"}},
        ]

    def test_viewer_of_missing_stream(self, service, connect):
        c_id, c = connect()

        send(service, c_id, type="register-viewer", streamId="nope")

        assert c.last == {"type": "error", "message": "Stream not found"}

    def test_streamer_disconnect_ends_stream(self, service, connect):
        a_id, _ = connect()
        b_id, b = connect()
        c_id, c = connect()
        send(service, a_id, type="register-streamer", streamId="s1")
        send(service, b_id, type="register-viewer", streamId="s1")

        service.disconnect(a_id)
        send(service, c_id, type="register-viewer", streamId="s1")

        assert b.last == {"type": "stream-ended"}
        assert c.last == {"type": "error", "message": "Stream not found"}

    def test_duplicate_stream_id_conflict(self, service, connect):
        a_id, _ = connect()
        a2_id, a2 = connect()
        send(service, a_id, type="register-streamer", streamId="s1")

        send(service, a2_id, type="register-streamer", streamId="s1")

        assert a2.last == {"type": "error", "message": "Stream ID already exists"}
        assert service.get_stream("s1").owner_id == a_id

    def test_viewer_can_stop_the_stream_it_watches(self, service, connect):
        """stop-stream carries no ownership check."""
        a_id, a = connect()
        b_id, b = connect()
        send(service, a_id, type="register-streamer", streamId="s1")
        send(service, b_id, type="register-viewer", streamId="s1")

        send(service, b_id, type="stop-stream")

        assert service.get_stream("s1") is None
        assert b.last == {"type": "stream-ended"}
        assert a.of_type("stream-ended") == []
