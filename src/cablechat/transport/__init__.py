"""Transport module for cablechat.

Owns the duplex connection to the chat server: dialing, the subscribe
handshake, outbound sends and the inbound frame stream.
"""

from .backlog import BacklogClient, StaticBacklog
from .base import ChatSession, ChatTransport
from .errors import ChatConnectionError, DecodeError, ReadError, SendError, TransportError
from .factory import create_transport
from .models import RawFrame, ServerConfig, SessionState

__all__ = [
    "BacklogClient",
    "ChatConnectionError",
    "ChatSession",
    "ChatTransport",
    "DecodeError",
    "RawFrame",
    "ReadError",
    "SendError",
    "ServerConfig",
    "SessionState",
    "StaticBacklog",
    "TransportError",
    "create_transport",
]
