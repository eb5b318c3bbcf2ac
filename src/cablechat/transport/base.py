"""Abstract base classes for chat transports.

This module hides the design decision of how a room subscription reaches
the server. Implementations must handle:
- Dialing and the subscribe handshake
- Outbound frame serialization
- Turning connection teardown into a clean end of the event stream

Usage:
    session = await transport.connect("lobby", token)
    async for frame in session.events():
        ...
    await session.close()
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from .errors import SendError, TransportError
from .models import RawFrame, SessionState


class ChatSession(ABC):
    """One live subscription to one room.

    State machine: DISCONNECTED -> CONNECTING -> SUBSCRIBED -> CLOSING -> CLOSED.
    Only SUBSCRIBED permits send() and events() consumption.
    """

    def __init__(self, room: str, token: str) -> None:
        self.room = room
        self.token = token
        self._state = SessionState.DISCONNECTED
        self._events_started = False
        self._debug_callback: Any | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state == SessionState.SUBSCRIBED

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for connection tracing.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Transport", message)

    def _transition(self, state: SessionState) -> None:
        if self._state == SessionState.CLOSED:
            return
        self._debug("debug", f"{self.room}: {self._state.value} -> {state.value}")
        self._state = state

    def _require_subscribed(self) -> None:
        if self._state != SessionState.SUBSCRIBED:
            raise SendError(f"session is {self._state.value}", room=self.room)

    def _claim_events(self) -> None:
        if self._events_started:
            raise TransportError("event stream already consumed")
        self._events_started = True

    @abstractmethod
    async def send(self, content: str) -> None:
        """Send a chat message to the current room.

        Raises:
            SendError: If the session is not subscribed or the write fails
        """

    @abstractmethod
    def events(self) -> AsyncIterator[RawFrame]:
        """Iterate inbound frames until close, read error or interrupt.

        The stream is not restartable; a second call raises TransportError.
        """

    @abstractmethod
    async def close(self) -> None:
        """Send a normal-closure frame (best effort) and release the connection.

        Calling it again is a no-op.
        """


class ChatTransport(ABC):
    """Dials the server and produces subscribed sessions."""

    def __init__(self) -> None:
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback, propagated to every session this transport opens."""
        self._debug_callback = callback

    @abstractmethod
    async def connect(self, room: str, token: str) -> ChatSession:
        """Dial, subscribe to the room, and return the live session.

        Raises:
            ChatConnectionError: If the dial or the handshake fails
        """

    @property
    @abstractmethod
    def transport_type(self) -> str:
        """Get the transport type identifier."""
