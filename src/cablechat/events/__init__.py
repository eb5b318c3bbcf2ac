"""Room events: the typed view of what arrives on the wire."""

from .decoder import EventDecoder
from .models import (
    BACKLOG_SENDER,
    ChatEvent,
    EventKind,
    MessagePosted,
    UserJoined,
    UserLeft,
)

__all__ = [
    "BACKLOG_SENDER",
    "ChatEvent",
    "EventDecoder",
    "EventKind",
    "MessagePosted",
    "UserJoined",
    "UserLeft",
]
