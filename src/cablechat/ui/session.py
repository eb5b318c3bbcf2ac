"""Room session state.

One owned aggregate for the active room: transcript, viewport and input
controller, mutated in place by the app. Widgets only read from it.
"""

from collections.abc import Callable, Iterable
from typing import Any

from ..events.models import ChatEvent, MessagePosted
from ..transcript.log import TranscriptLog
from ..transport.models import SessionState
from .input_mode import InputModeController
from .models import InputMode, KeyAction, KeyPress
from .viewport import Viewport


class RoomSession:
    """Transcript, viewport and input state of the active room.

    Args:
        send: Callable(content) forwarding a submitted message to the transport
        navigate: Callable() requesting room navigation
    """

    def __init__(
        self,
        send: Callable[[str], Any],
        navigate: Callable[[], Any] | None = None,
    ) -> None:
        self.room: str | None = None
        self.link_state = SessionState.DISCONNECTED
        self.transcript = TranscriptLog()
        self.viewport = Viewport()
        self.input = InputModeController(self.viewport, send=send, navigate=navigate)

    @property
    def mode(self) -> InputMode:
        return self.input.mode

    def activate(self, room: str, backlog: Iterable[ChatEvent] = ()) -> None:
        """Start a room: replace the transcript with its backlog, view from the top."""
        self.room = room
        self.transcript.reset(backlog)
        self.viewport.on_content_changed(self.transcript.render())
        self.viewport.scroll_to_top()

    def apply_event(self, event: ChatEvent) -> None:
        """Append a live event.

        New messages always pin the view to the bottom. Presence events keep
        it pinned only if the user was already at the bottom.
        """
        follow = isinstance(event, MessagePosted) or self.viewport.at_bottom
        self.transcript.append(event)
        self.viewport.on_content_changed(self.transcript.render(), autoscroll=follow)

    def resize(self, width: int, height: int) -> None:
        self.viewport.resize(width, height)

    def handle_key(self, keypress: KeyPress) -> KeyAction:
        return self.input.handle_key(keypress)
