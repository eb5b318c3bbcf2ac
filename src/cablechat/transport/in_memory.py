"""In-memory transport.

Queue-backed sessions with no network. Frames are pushed with feed() and
outbound frames are recorded, which makes it suitable for tests and for
running the UI offline.
"""

import asyncio
from collections.abc import AsyncIterator

from .base import ChatSession, ChatTransport
from .errors import ChatConnectionError, ReadError, SendError
from .models import RawFrame, SessionState
from .protocol import message_frame, subscribe_frame

# Queue marker that ends the event stream
_END = object()


class InMemorySession(ChatSession):
    """Session whose inbound frames come from an asyncio.Queue."""

    def __init__(self, room: str, token: str, channel: str = "ChatRoomChannel") -> None:
        super().__init__(room, token)
        self._channel = channel
        self._frames: asyncio.Queue = asyncio.Queue()
        self.frames_out: list[str] = []
        self.sent: list[str] = []
        self.close_frames = 0
        self.fail_sends = False
        self.last_error: ReadError | None = None

    async def open(self) -> None:
        self._transition(SessionState.CONNECTING)
        self.frames_out.append(subscribe_frame(self._channel, self.room))
        self._transition(SessionState.SUBSCRIBED)

    def feed(self, frame: RawFrame) -> None:
        """Deliver an inbound frame."""
        self._frames.put_nowait(frame)

    def drop(self, reason: str = "peer went away") -> None:
        """Simulate a broken connection: the stream ends with a read error."""
        self.last_error = ReadError(reason)
        self._frames.put_nowait(_END)

    async def send(self, content: str) -> None:
        self._require_subscribed()
        if self.fail_sends:
            await self.close()
            raise SendError("connection is broken", room=self.room)
        self.frames_out.append(message_frame(self._channel, self.room, content))
        self.sent.append(content)

    def events(self) -> AsyncIterator[RawFrame]:
        self._claim_events()
        return self._read_frames()

    async def _read_frames(self) -> AsyncIterator[RawFrame]:
        if self._state != SessionState.SUBSCRIBED:
            return
        try:
            while True:
                frame = await self._frames.get()
                if frame is _END:
                    break
                yield frame
        finally:
            await self.close()

    async def close(self) -> None:
        if self._state in (SessionState.CLOSING, SessionState.CLOSED):
            return
        self._transition(SessionState.CLOSING)
        self.close_frames += 1
        self._frames.put_nowait(_END)
        self._transition(SessionState.CLOSED)


class InMemoryTransport(ChatTransport):
    """Transport producing InMemorySession objects.

    Example:
        transport = InMemoryTransport()
        session = await transport.connect("lobby", "token")
        transport.sessions[-1].feed('{"type": "welcome"}')
    """

    def __init__(self, refuse: bool = False) -> None:
        super().__init__()
        self._refuse = refuse
        self.sessions: list[InMemorySession] = []

    async def connect(self, room: str, token: str) -> ChatSession:
        if self._refuse:
            raise ChatConnectionError("connection refused")
        session = InMemorySession(room, token)
        if self._debug_callback:
            session.set_debug_callback(self._debug_callback)
        await session.open()
        self.sessions.append(session)
        return session

    @property
    def transport_type(self) -> str:
        return "memory"
