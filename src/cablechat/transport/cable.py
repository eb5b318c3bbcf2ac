"""ActionCable transport over WebSockets.

Dials the cable endpoint with the auth token as the Authorization header,
subscribes to one room topic and exposes the inbound frames as an async
iterator. Closing the connection from another task unblocks a pending read,
which is how an interrupt ends the event stream.
"""

from collections.abc import AsyncIterator

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedError, WebSocketException

from .base import ChatSession, ChatTransport
from .errors import ChatConnectionError, ReadError, SendError
from .models import RawFrame, ServerConfig, SessionState
from .protocol import message_frame, subscribe_frame

NORMAL_CLOSURE = 1000


class CableSession(ChatSession):
    """A subscription to one room over one WebSocket connection."""

    def __init__(self, room: str, token: str, config: ServerConfig) -> None:
        super().__init__(room, token)
        self._config = config
        self._connection: ClientConnection | None = None
        self._close_started = False
        self.last_error: ReadError | None = None

    async def open(self) -> None:
        """Dial the endpoint and send the subscribe frame.

        Raises:
            ChatConnectionError: If either step fails
        """
        self._transition(SessionState.CONNECTING)
        url = self._config.ws_url
        self._debug("info", f"connecting to {url}")

        try:
            self._connection = await connect(
                url,
                additional_headers={"Authorization": self.token},
                open_timeout=self._config.open_timeout,
            )
        except (OSError, TimeoutError, WebSocketException) as e:
            self._state = SessionState.CLOSED
            raise ChatConnectionError(f"{url}: {e}") from e

        try:
            await self._connection.send(subscribe_frame(self._config.channel, self.room))
        except (OSError, WebSocketException) as e:
            await self.close()
            raise ChatConnectionError(f"subscribe to {self.room}: {e}") from e
        except BaseException:
            # Cancelled mid-handshake: nobody else holds this connection
            await self.close()
            raise

        self._transition(SessionState.SUBSCRIBED)
        self._debug("info", f"subscribed to {self._config.channel}:{self.room}")

    async def send(self, content: str) -> None:
        self._require_subscribed()
        frame = message_frame(self._config.channel, self.room, content)
        try:
            await self._connection.send(frame)
        except (ConnectionClosed, OSError) as e:
            self._debug("error", f"write failed: {e}")
            await self.close()
            raise SendError(str(e), room=self.room) from e
        self._debug("debug", f"sent {len(content)} chars to {self.room}")

    def events(self) -> AsyncIterator[RawFrame]:
        self._claim_events()
        return self._read_frames()

    async def _read_frames(self) -> AsyncIterator[RawFrame]:
        if self._state != SessionState.SUBSCRIBED or self._connection is None:
            return
        try:
            async for frame in self._connection:
                yield frame
        except ConnectionClosedError as e:
            self.last_error = ReadError(str(e))
            self._debug("warning", f"connection lost: {e}")
        except OSError as e:
            self.last_error = ReadError(str(e))
            self._debug("error", f"read failed: {e}")
        finally:
            await self.close()
        self._debug("info", f"event stream for {self.room} ended")

    async def close(self) -> None:
        if self._state == SessionState.CLOSED or self._close_started:
            return
        self._close_started = True
        self._transition(SessionState.CLOSING)
        if self._connection is not None:
            try:
                await self._connection.close(code=NORMAL_CLOSURE)
            except (OSError, WebSocketException) as e:
                self._debug("warning", f"close frame not delivered: {e}")
        self._transition(SessionState.CLOSED)


class CableTransport(ChatTransport):
    """Opens CableSession instances against one server."""

    def __init__(self, config: ServerConfig | None = None) -> None:
        super().__init__()
        self._config = config or ServerConfig()

    @property
    def config(self) -> ServerConfig:
        return self._config

    async def connect(self, room: str, token: str) -> ChatSession:
        session = CableSession(room, token, self._config)
        if self._debug_callback:
            session.set_debug_callback(self._debug_callback)
        await session.open()
        return session

    @property
    def transport_type(self) -> str:
        return "cable"
