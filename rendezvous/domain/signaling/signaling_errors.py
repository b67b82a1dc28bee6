"""Signaling errors reported back to the originating connection."""


class SignalingError(Exception):
    """Base error; `message` is sent to the client as `error{message}`."""

    message = "Signaling error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class MalformedMessageError(SignalingError):
    message = "Invalid JSON"


class DuplicateSessionError(SignalingError):
    message = "Stream ID already exists"


class SessionNotFoundError(SignalingError):
    message = "Stream not found"


class OwnSessionError(SignalingError):
    message = "Cannot view own stream"
