"""Terminal UI module for cablechat.

Provides a Textual-based TUI for one chat room.

Module structure (each module hides a design decision):
- models.py: Keystrokes, input modes, viewport geometry
- viewport.py: Offset arithmetic over the transcript
- input_mode.py: VIEW/COMPOSE keystroke routing
- session.py: The room's transcript/viewport/input aggregate
- widgets.py: Transcript window, status line, log panel
- styles.py: CSS styling (layout decisions)
- screens.py: Room prompt dialog
- callbacks.py: How the TUI receives transport tracing
- app.py: Application orchestration (connection and input flow)
"""

from .app import ChatRoomApp, run_textual_tui
from .callbacks import TUICallback
from .config import LogLevel
from .input_mode import ComposeBuffer, InputModeController
from .models import InputMode, KeyAction, KeyPress, ViewportState
from .session import RoomSession
from .viewport import Viewport
from .widgets import DebugPanel, StatusLine, TranscriptView

__all__ = [
    "ChatRoomApp",
    "ComposeBuffer",
    "DebugPanel",
    "InputMode",
    "InputModeController",
    "KeyAction",
    "KeyPress",
    "LogLevel",
    "RoomSession",
    "StatusLine",
    "TUICallback",
    "TranscriptView",
    "Viewport",
    "ViewportState",
    "run_textual_tui",
]
