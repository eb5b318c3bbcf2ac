"""Data models for the transport layer."""

from enum import Enum
from urllib.parse import quote

from pydantic import BaseModel, Field

# One discrete unit received over the duplex connection
RawFrame = str | bytes


class SessionState(str, Enum):
    """Lifecycle of a room session. CLOSED is terminal."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    SUBSCRIBED = "subscribed"
    CLOSING = "closing"
    CLOSED = "closed"


class ServerConfig(BaseModel):
    """Where the chat server lives and how its channels are named."""

    host: str = Field(default="localhost:3000", description="Host and optional port")
    secure: bool = Field(default=False, description="Use wss/https instead of ws/http")
    cable_path: str = Field(default="/cable", description="WebSocket endpoint path")
    channel: str = Field(default="ChatRoomChannel", description="Server-side channel name")
    backlog_path: str = Field(
        default="/chat_rooms/{room}/messages",
        description="HTTP path of the recent-messages endpoint"
    )
    open_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for the dial; None blocks indefinitely"
    )

    @property
    def ws_url(self) -> str:
        scheme = "wss" if self.secure else "ws"
        return f"{scheme}://{self.host}{self.cable_path}"

    @property
    def http_url(self) -> str:
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.host}"

    def backlog_url_path(self, room: str) -> str:
        """Path of the backlog endpoint for a room."""
        return self.backlog_path.format(room=quote(room, safe=""))
