"""Main Textual TUI application.

Orchestrates the room session: a background worker reads the connection and
posts events to the app's message queue; the app consumes them in order and
routes keystrokes through the input mode controller.
"""

import asyncio
import contextlib
from typing import Any

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.events import Key
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Footer, Header

from ..events import ChatEvent, EventDecoder
from ..transport import ChatConnectionError, ChatSession, ChatTransport, ReadError, SendError, SessionState
from .callbacks import TUICallback
from .config import APP_NAME, LogLevel
from .models import KeyAction, KeyPress
from .screens import RoomPromptScreen
from .session import RoomSession
from .styles import APP_CSS
from .widgets import DebugPanel, StatusLine, TranscriptView


class BacklogLoaded(Message):
    """The backlog for a newly selected room is ready."""

    def __init__(self, room: str, events: list[ChatEvent]) -> None:
        super().__init__()
        self.room = room
        self.events = events


class SessionOpened(Message):
    """The room subscription is live."""

    def __init__(self, room: str) -> None:
        super().__init__()
        self.room = room


class ChatEventArrived(Message):
    """A live event decoded from the room stream."""

    def __init__(self, room: str, event: ChatEvent) -> None:
        super().__init__()
        self.room = room
        self.event = event


class StreamEnded(Message):
    """The room's event stream finished (close, read error or interrupt)."""

    def __init__(self, room: str, reason: str | None = None) -> None:
        super().__init__()
        self.room = room
        self.reason = reason


class ChatRoomApp(App):
    """Textual TUI for one chat room at a time."""

    CSS = APP_CSS
    TITLE = APP_NAME

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        transport: ChatTransport,
        backlog: Any,
        token: str,
        room: str | None = None,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._transport = transport
        self._backlog = backlog
        self._token = token
        self._initial_room = room
        self._log_level = log_level
        self._decoder = EventDecoder()
        self._chat_session: ChatSession | None = None
        self._selected_room: str | None = None
        self._send_lock = asyncio.Lock()
        self._quitting = False
        self.fatal_error: ChatConnectionError | None = None
        self.room_session = RoomSession(
            send=self._submit_message,
            navigate=self._request_room_navigation,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield TranscriptView(self.room_session, id="transcript")
        yield DebugPanel(id="debug-panel")
        yield StatusLine(id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        """Wire tracing and join the first room."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        callback = TUICallback(log_panel)
        self._transport.set_debug_callback(callback)
        self._decoder.set_debug_callback(callback)
        if hasattr(self._backlog, "set_debug_callback"):
            self._backlog.set_debug_callback(callback)

        self._refresh_status()
        if self._initial_room:
            self.select_room(self._initial_room)
        else:
            self._request_room_navigation()

    async def on_unmount(self) -> None:
        """Release the connection and the backlog client."""
        if self._chat_session is not None:
            await self._chat_session.close()
        with contextlib.suppress(Exception):
            await self._backlog.close()

    @property
    def chat_session(self) -> ChatSession | None:
        return self._chat_session

    def _log(self, level: str, message: str) -> None:
        panel = self.query_one("#debug-panel", DebugPanel)
        panel.log("TUI", message, LogLevel.from_string(level))

    # Room lifecycle

    def select_room(self, room: str) -> None:
        """Room-selected signal: fetch the backlog and subscribe."""
        self._selected_room = room
        self.sub_title = room
        self.room_session.link_state = SessionState.CONNECTING
        self._refresh_status()
        self._run_room(room)

    @work(exclusive=True, group="room")
    async def _run_room(self, room: str) -> None:
        """Read activity for one room. Posts messages in arrival order."""
        previous = self._chat_session
        if previous is not None:
            self._chat_session = None
            await previous.close()

        try:
            payload = await self._backlog.fetch(room, self._token)
        except ReadError as e:
            self._log("warning", f"{e}; starting with an empty transcript")
            payload = []
        self.post_message(BacklogLoaded(room, self._decoder.decode_backlog(payload)))

        try:
            session = await self._transport.connect(room, self._token)
        except ChatConnectionError as e:
            self.fatal_error = e
            self.exit(return_code=1, message=str(e))
            return

        self._chat_session = session
        self.post_message(SessionOpened(room))

        async for frame in session.events():
            event = self._decoder.decode(frame)
            if event is not None:
                self.post_message(ChatEventArrived(room, event))

        last_error = getattr(session, "last_error", None)
        self.post_message(StreamEnded(room, str(last_error) if last_error else None))

    def on_backlog_loaded(self, message: BacklogLoaded) -> None:
        if message.room != self._selected_room:
            return
        self.room_session.activate(message.room, message.events)
        self._log("info", f"joined {message.room} with {len(message.events)} backlog message(s)")
        self._refresh_view()

    def on_session_opened(self, message: SessionOpened) -> None:
        if message.room != self._selected_room:
            return
        self.room_session.link_state = SessionState.SUBSCRIBED
        self._refresh_status()

    def on_chat_event_arrived(self, message: ChatEventArrived) -> None:
        if message.room != self.room_session.room:
            return
        self.room_session.apply_event(message.event)
        self._refresh_view()

    def on_stream_ended(self, message: StreamEnded) -> None:
        if message.room != self._selected_room:
            return
        self.room_session.link_state = SessionState.CLOSED
        self._refresh_status()
        if message.reason:
            self._log("error", message.reason)
        if not self._quitting:
            self.notify(
                f"Disconnected from {message.room}. Press h to pick a room.",
                severity="warning",
                timeout=5,
            )

    def _request_room_navigation(self) -> None:
        self.push_screen(RoomPromptScreen(current=self._selected_room), self._on_room_chosen)

    def _on_room_chosen(self, room: str | None) -> None:
        if room is None:
            if self._selected_room is None:
                self.exit()
            return
        if room == self._selected_room and self.room_session.link_state == SessionState.SUBSCRIBED:
            return
        self.select_room(room)

    # Outbound

    def _submit_message(self, content: str) -> None:
        self._send_message(content)

    @work(group="send")
    async def _send_message(self, content: str) -> None:
        async with self._send_lock:
            session = self._chat_session
            if session is None or not session.is_open:
                self.notify("Not connected to a room", severity="error", timeout=3)
                return
            try:
                await session.send(content)
            except SendError as e:
                self._log("error", str(e))
                self.notify(str(e), severity="error", timeout=5)

    # Input

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        action = self.room_session.handle_key(KeyPress(event.key, event.character))
        if action != KeyAction.IGNORED:
            event.stop()
            event.prevent_default()
        self._refresh_view()

    # Rendering

    def _refresh_view(self) -> None:
        self.query_one("#transcript", TranscriptView).refresh_window()
        self._refresh_status()

    def _refresh_status(self) -> None:
        self.query_one("#status-line", StatusLine).update_status(self.room_session)

    # Actions

    async def action_quit(self) -> None:
        """Interrupt: close the session, let the stream end, then exit."""
        self._quitting = True
        if self._chat_session is not None:
            await self._chat_session.close()
        self.exit()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    transport: ChatTransport,
    backlog: Any,
    token: str,
    room: str | None = None,
    log_level: str | None = None,
) -> int:
    """Run the Textual TUI.

    Args:
        transport: Transport used to subscribe to rooms
        backlog: Backlog source with an async fetch(room, token)
        token: Auth token, sent verbatim as the Authorization header
        room: Room to join on start; None opens the room prompt
        log_level: Log level for panel (debug/info/warning/error), None to hide

    Returns:
        Process return code (1 when the connection could not be established)
    """
    app = ChatRoomApp(
        transport=transport,
        backlog=backlog,
        token=token,
        room=room,
        log_level=log_level,
    )
    try:
        await app.run_async()
    except KeyboardInterrupt:
        pass
    finally:
        if app.chat_session is not None:
            await app.chat_session.close()
    return app.return_code or 0
