"""Tests for offer/answer/ice-candidate relaying."""

import orjson
import pytest

from rendezvous.domain.signaling._relay import RELAY_PAYLOAD_FIELDS


def send(service, connection_id, **message):
    service.receive(connection_id, orjson.dumps(message))


class TestRelay:
    @pytest.mark.parametrize(
        ("kind", "field"),
        [
            ("offer", "offer"),
            ("answer", "answer"),
            ("ice-candidate", "candidate"),
        ],
    )
    def test_forwards_payload_under_wire_field(self, service, connect, kind, field):
        # Arrange
        sender_id, sender = connect()
        target_id, target = connect()
        payload = {"sdp": "v=0...", "nested": [1, 2, {"x": None}]}
        sent_before = len(sender.messages)

        # Act
        send(service, sender_id, type=kind, targetId=target_id, **{kind: payload})

        # Assert
        assert target.last == {"type": kind, "senderId": sender_id, field: payload}
        assert len(sender.messages) == sent_before

    def test_unknown_target_is_dropped_silently(self, service, connect):
        sender_id, sender = connect()
        other_id, other = connect()
        before = (list(sender.messages), list(other.messages))

        send(service, sender_id, type="offer", targetId="nobody", offer={"sdp": "x"})

        assert (sender.messages, other.messages) == before

    @pytest.mark.parametrize("target", [None, 42, ["a"], {"id": "a"}])
    def test_non_string_target_is_dropped(self, service, connect, target):
        sender_id, sender = connect()
        before = list(sender.messages)

        send(service, sender_id, type="answer", targetId=target, answer="x")

        assert sender.messages == before

    def test_missing_payload_is_not_invented(self, service, connect):
        sender_id, _ = connect()
        target_id, target = connect()

        send(service, sender_id, type="ice-candidate", targetId=target_id)

        assert target.last == {"type": "ice-candidate", "senderId": sender_id}

    def test_null_payload_is_forwarded(self, service, connect):
        """End-of-candidates is signalled with a null candidate."""
        sender_id, _ = connect()
        target_id, target = connect()

        send(service, sender_id, type="ice-candidate", targetId=target_id, **{"ice-candidate": None})

        assert target.last == {"type": "ice-candidate", "senderId": sender_id, "candidate": None}

    def test_relay_needs_no_registration(self, service, connect):
        """Relay is addressed by connection id alone; roles do not matter."""
        sender_id, _ = connect()
        target_id, target = connect()

        send(service, sender_id, type="offer", targetId=target_id, offer="sdp")

        assert target.last["senderId"] == sender_id

    def test_payload_fields_cover_relay_types(self):
        assert RELAY_PAYLOAD_FIELDS == {
            "offer": "offer",
            "answer": "answer",
            "ice-candidate": "candidate",
        }
