"""Transport error taxonomy.

Callers decide what is fatal: a failed dial aborts the program, everything
after the subscription degrades to a closed stream.
"""


class TransportError(Exception):
    """Base class for transport errors."""


class ChatConnectionError(TransportError):
    """Dial or subscribe handshake failed (fatal)."""

    def __init__(self, message: str):
        super().__init__(f"Connection failed: {message}")


class ReadError(TransportError):
    """The connection broke or closed while reading."""

    def __init__(self, message: str):
        super().__init__(f"Read failed: {message}")


class SendError(TransportError):
    """An outbound frame could not be written."""

    def __init__(self, message: str, room: str | None = None):
        msg = f"Send failed: {message}"
        if room:
            msg += f" (room: {room})"
        super().__init__(msg)
        self.room = room


class DecodeError(TransportError):
    """An inbound frame did not match any known shape."""

    def __init__(self, message: str):
        super().__init__(f"Decode failed: {message}")
