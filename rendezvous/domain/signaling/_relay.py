"""Negotiation message relay between two connections."""

from typing import Any

from loguru import logger

from rendezvous.schemas import MessageType

from ._base import BaseOperations

# Outbound payload key per relayed type; ice candidates travel as `candidate`
RELAY_PAYLOAD_FIELDS: dict[str, str] = {
    MessageType.OFFER.value: "offer",
    MessageType.ANSWER.value: "answer",
    MessageType.ICE_CANDIDATE.value: "candidate",
}


class RelayOperations(BaseOperations):
    """Address-based forwarding of opaque offer/answer/candidate payloads."""

    def relay(self, sender_id: str, data: dict[str, Any], kind: MessageType | str) -> bool:
        """Forward `data[kind]` to the connection named by `data["targetId"]`.

        Unknown targets are dropped without telling the sender. The payload
        is not inspected.

        Returns:
            True if the message was handed to the target's handle
        """
        kind = str(kind)
        target_id = data.get("targetId")
        target = self.connections.get(target_id) if isinstance(target_id, str) else None
        if target is None:
            logger.debug(f"Dropping {kind} from {sender_id}: unknown target {target_id!r}")
            return False

        message: dict[str, Any] = {"type": kind, "senderId": sender_id}
        # An absent payload stays absent
        if kind in data:
            message[RELAY_PAYLOAD_FIELDS[kind]] = data[kind]

        return target.send(message)
