"""Tests for disconnect reconciliation."""

import orjson

from rendezvous.schemas import ClientRole


def send(service, connection_id, **message):
    service.receive(connection_id, orjson.dumps(message))


class TestDisconnect:
    def test_streamer_disconnect_cascades_stream_ended(self, service, connect):
        """Owner loss ends the stream for every viewer and frees the id."""
        # Arrange
        streamer_id, streamer = connect()
        viewer_id, viewer = connect()
        late_id, late = connect()
        send(service, streamer_id, type="register-streamer", streamId="s1")
        send(service, viewer_id, type="register-viewer", streamId="s1")

        # Act
        result = service.disconnect(streamer_id)

        # Assert
        assert result is True
        assert viewer.of_type("stream-ended") == [{"type": "stream-ended"}]
        assert service.get_stream("s1") is None
        assert service.get_connection(streamer_id) is None
        assert streamer.closed is True

        # The stream is no longer resolvable
        send(service, late_id, type="register-viewer", streamId="s1")
        assert late.last == {"type": "error", "message": "Stream not found"}

    def test_viewer_disconnect_removes_membership_silently(self, service, connect):
        streamer_id, streamer = connect()
        viewer_id, _ = connect()
        send(service, streamer_id, type="register-streamer", streamId="s1")
        send(service, viewer_id, type="register-viewer", streamId="s1")
        streamer_before = list(streamer.messages)

        service.disconnect(viewer_id)

        assert service.get_stream("s1").viewers == set()
        assert service.get_connection(viewer_id) is None
        # No departure notice for the streamer
        assert streamer.messages == streamer_before

    def test_unregistered_disconnect_only_removes_connection(self, service, connect):
        connection_id, _ = connect()
        streamer_id, _ = connect()
        send(service, streamer_id, type="register-streamer", streamId="s1")

        service.disconnect(connection_id)

        assert service.client_count == 1
        assert service.stream_count == 1

    def test_disconnect_twice_is_noop(self, service, connect):
        streamer_id, _ = connect()
        viewer_id, viewer = connect()
        send(service, streamer_id, type="register-streamer", streamId="s1")
        send(service, viewer_id, type="register-viewer", streamId="s1")

        assert service.disconnect(streamer_id) is True
        assert service.disconnect(streamer_id) is False

        assert len(viewer.of_type("stream-ended")) == 1
        assert service.client_count == 1

    def test_disconnect_unknown_id_is_noop(self, service):
        assert service.disconnect("never-connected") is False

    def test_stale_owner_does_not_end_reused_stream(self, service, connect):
        """An owner whose stream was stopped cannot end a newer stream with the same id."""
        # Arrange
        old_id, _ = connect()
        new_id, _ = connect()
        viewer_id, viewer = connect()
        send(service, old_id, type="register-streamer", streamId="s1")
        send(service, old_id, type="stop-stream")
        send(service, new_id, type="register-streamer", streamId="s1")
        send(service, viewer_id, type="register-viewer", streamId="s1")

        # Act
        service.disconnect(old_id)

        # Assert
        assert service.get_stream("s1").owner_id == new_id
        assert viewer.of_type("stream-ended") == []

    def test_viewer_of_ended_stream_disconnects_cleanly(self, service, connect):
        streamer_id, _ = connect()
        viewer_id, _ = connect()
        send(service, streamer_id, type="register-streamer", streamId="s1")
        send(service, viewer_id, type="register-viewer", streamId="s1")
        send(service, streamer_id, type="stop-stream")

        assert service.get_connection(viewer_id).role == ClientRole.VIEWER
        assert service.disconnect(viewer_id) is True
        assert service.client_count == 1

    def test_messages_after_disconnect_are_ignored(self, service, connect):
        connection_id, handle = connect()
        service.disconnect(connection_id)

        send(service, connection_id, type="register-streamer", streamId="s1")

        assert service.stream_count == 0


class TestReferentialIntegrity:
    def test_viewers_always_point_back_to_their_session(self, service, connect):
        """After any sequence of handled messages, viewer ids resolve to members."""
        streamers = {name: connect() for name in ("a", "b")}
        viewers = [connect() for _ in range(4)]
        for name, (cid, _) in streamers.items():
            send(service, cid, type="register-streamer", streamId=name)

        steps = [
            (viewers[0][0], "a"),
            (viewers[1][0], "a"),
            (viewers[2][0], "b"),
            (viewers[0][0], "b"),
            (viewers[3][0], "a"),
            (viewers[1][0], "b"),
        ]
        for viewer_id, stream_id in steps:
            send(service, viewer_id, type="register-viewer", streamId=stream_id)
            self._assert_integrity(service)

        service.disconnect(viewers[2][0])
        self._assert_integrity(service)
        service.disconnect(streamers["a"][0])
        self._assert_integrity(service)

    @staticmethod
    def _assert_integrity(service):
        for session in service.list_streams():
            assert service.get_connection(session.owner_id) is not None
            for viewer_id in session.viewers:
                connection = service.get_connection(viewer_id)
                assert connection is not None
                assert connection.session_id == session.id
