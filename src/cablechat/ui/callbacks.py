"""Callback interface for transport tracing.

Hides the details of how the TUI receives log records from the transport,
the decoder and the backlog client. All of them run on the app's event
loop, so records go straight to the panel.
"""

from typing import TYPE_CHECKING

from .config import LogLevel

if TYPE_CHECKING:
    from .widgets import DebugPanel


class TUICallback:
    """Routes debug callbacks into the log panel.

    Matches the debug callback signature used across the package:
    Callable(level: str, component: str, message: str).
    """

    def __init__(self, panel: "DebugPanel") -> None:
        self.panel = panel

    def __call__(self, level: str, component: str, message: str) -> None:
        self.panel.log(component, message, LogLevel.from_string(level))
