"""Modal screens for the TUI.

This module hides the design decisions about:
- How the user names the room to join
- Keyboard shortcuts for dialogs

Room discovery lives outside this package; the prompt only collects a room
identifier and hands it back as the room-selected signal.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Static


class RoomPromptScreen(ModalScreen[str | None]):
    """Modal dialog asking for a room identifier.

    Dismisses with the entered room, or None when cancelled.
    """

    CSS = """
    RoomPromptScreen {
        align: center middle;
        background: $background 70%;
    }

    #room-dialog {
        width: 50;
        height: auto;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #room-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 0 0 1 0;
    }

    #room-hint {
        width: 100%;
        color: $text-muted;
        padding: 1 0 0 0;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, current: str | None = None) -> None:
        super().__init__()
        self._current = current

    def compose(self) -> ComposeResult:
        with Vertical(id="room-dialog"):
            yield Static("Join Room", id="room-title")
            yield Input(value=self._current or "", placeholder="room name", id="room-input")
            yield Static("enter to join, esc to cancel", id="room-hint")

    def on_mount(self) -> None:
        self.query_one("#room-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        room = event.value.strip()
        self.dismiss(room or None)

    def action_cancel(self) -> None:
        self.dismiss(None)
