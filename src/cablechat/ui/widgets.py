"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Transcript window rendering from the viewport
- Status line with mode hint and compose buffer
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual.events import Resize
from textual.widget import Widget
from textual.widgets import RichLog, Static

from ..transport.models import SessionState
from .config import (
    APP_NAME,
    COMPOSE_HINT,
    COMPOSE_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    VIEW_HINT,
    LogLevel,
)
from .models import InputMode
from .session import RoomSession


class TranscriptView(Widget):
    """The visible window into the room transcript.

    Every resize is forwarded to the viewport; rendering reads the window
    the viewport computes and never scrolls on its own.
    """

    BORDER_TITLE = "Room"

    def __init__(self, session: RoomSession, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._session = session

    def on_resize(self, event: Resize) -> None:
        size = self.content_size
        self._session.resize(size.width, size.height)
        self.refresh_window()

    def refresh_window(self) -> None:
        """Repaint after the viewport or the transcript changed."""
        if self._session.viewport.ready:
            self.border_subtitle = self._position_label()
        self.refresh()

    def render(self) -> Text:
        viewport = self._session.viewport
        if not viewport.ready:
            return Text("\n  Initializing...", style="dim")
        return Text(viewport.view(), no_wrap=True, overflow="crop")

    def _position_label(self) -> str:
        viewport = self._session.viewport
        total = viewport.state.content_height
        if total <= viewport.state.height:
            return f"{total} lines"
        return f"{viewport.offset}/{viewport.excess}"


class StatusLine(Static):
    """Mode hint, compose buffer and connection state."""

    def update_status(self, session: RoomSession) -> None:
        buffer = session.input.buffer
        text = Text()

        if session.mode == InputMode.COMPOSE:
            text.append(f" {COMPOSE_HINT} ", style="bold reverse")
        else:
            text.append(f" {VIEW_HINT} ", style="reverse")
        text.append("  ")

        if buffer.value:
            before, after = buffer.value[:buffer.cursor], buffer.value[buffer.cursor:]
            text.append(before)
            if buffer.focused:
                text.append(after[:1] or " ", style="reverse")
                text.append(after[1:])
            else:
                text.append(after)
        elif buffer.focused:
            text.append(" ", style="reverse")
            text.append(COMPOSE_PLACEHOLDER, style="dim italic")
        else:
            text.append(COMPOSE_PLACEHOLDER, style="dim italic")

        state_styles = {
            SessionState.SUBSCRIBED: "green",
            SessionState.CONNECTING: "yellow",
            SessionState.CLOSING: "yellow",
            SessionState.CLOSED: "red",
        }
        text.append("  ")
        text.append(f"[{session.link_state.value}]", style=state_styles.get(session.link_state, "dim"))
        text.append(f" {APP_NAME}", style="bold")
        self.update(text)


class DebugPanel(RichLog):
    """Log panel for connection tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Transport, Decoder, Backlog)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        component_colors = {
            "TUI": "cyan",
            "Transport": "green",
            "Decoder": "magenta",
            "Backlog": "bright_blue",
        }
        level_color = level_colors.get(level, "white")
        comp_color = component_colors.get(component, "white")

        line = Text()
        line.append(f"{timestamp} ", style="dim")
        line.append(f"{LogLevel.name(level):<5} ", style=level_color)
        line.append(f"[{component}]", style=comp_color)
        line.append(f" {message}")
        self.write(line)

    def info(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.INFO)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
