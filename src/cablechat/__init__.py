"""
Cablechat: a terminal client for ActionCable chat rooms.

One room subscription at a time, rendered as an append-only, scrollable
transcript with vi-style view and compose modes.
"""

__version__ = "0.1.0"

from .events import ChatEvent, EventDecoder, MessagePosted, UserJoined, UserLeft
from .transcript import TranscriptLog
from .transport import (
    ChatSession,
    ChatTransport,
    ServerConfig,
    SessionState,
    create_transport,
)

__all__ = [
    "ChatEvent",
    "ChatSession",
    "ChatTransport",
    "EventDecoder",
    "MessagePosted",
    "ServerConfig",
    "SessionState",
    "TranscriptLog",
    "UserJoined",
    "UserLeft",
    "create_transport",
]
