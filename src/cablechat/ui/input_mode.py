"""Input mode controller.

Two-state machine routing keystrokes either to scroll commands (VIEW) or to
a bounded line-editing buffer (COMPOSE). Each keystroke is first matched
against the active mode's command table; unmatched keystrokes fall through
to the mode's generic handler (line editor or scroll handler).

The keystroke that enters COMPOSE is remembered so the fall-through does not
insert it into the buffer.
"""

from collections.abc import Callable
from typing import Any

from .config import (
    COMPOSE_CHAR_LIMIT,
    KEY_ENTER_COMPOSE,
    KEY_LEAVE_COMPOSE,
    KEY_SCROLL_BOTTOM,
    KEY_SCROLL_TOP,
    KEY_SUBMIT,
    KEYS_LINE_DOWN,
    KEYS_LINE_UP,
    KEYS_NAVIGATE_ROOMS,
)
from .models import InputMode, KeyAction, KeyPress
from .viewport import Viewport

VIEW_COMMANDS = {
    KEY_ENTER_COMPOSE: KeyAction.ENTER_COMPOSE,
    KEY_SCROLL_TOP: KeyAction.SCROLL_TOP,
    KEY_SCROLL_BOTTOM: KeyAction.SCROLL_BOTTOM,
    **{key: KeyAction.NAVIGATE_ROOMS for key in KEYS_NAVIGATE_ROOMS},
}

VIEW_SCROLL_KEYS = {
    **{key: KeyAction.SCROLL_DOWN for key in KEYS_LINE_DOWN},
    **{key: KeyAction.SCROLL_UP for key in KEYS_LINE_UP},
    "pagedown": KeyAction.PAGE_DOWN,
    "pageup": KeyAction.PAGE_UP,
}

COMPOSE_COMMANDS = {
    KEY_LEAVE_COMPOSE: KeyAction.LEAVE_COMPOSE,
    KEY_SUBMIT: KeyAction.SUBMIT,
}

EDIT_KEYS = frozenset({"backspace", "delete", "left", "right", "home", "end"})

# Actions fully handled by a command table (no fall-through)
TABLE_ACTIONS = frozenset({
    KeyAction.SCROLL_TOP,
    KeyAction.SCROLL_BOTTOM,
    KeyAction.NAVIGATE_ROOMS,
    KeyAction.LEAVE_COMPOSE,
    KeyAction.SUBMIT,
})


class ComposeBuffer:
    """Single-line text buffer with a cursor and a character cap."""

    def __init__(self, limit: int = COMPOSE_CHAR_LIMIT) -> None:
        self.limit = limit
        self._value = ""
        self._cursor = 0
        self.focused = False

    @property
    def value(self) -> str:
        return self._value

    @property
    def cursor(self) -> int:
        return self._cursor

    def insert(self, text: str) -> bool:
        """Insert at the cursor, truncated to the remaining room."""
        room = self.limit - len(self._value)
        if room <= 0 or not text:
            return False
        text = text[:room]
        self._value = self._value[:self._cursor] + text + self._value[self._cursor:]
        self._cursor += len(text)
        return True

    def backspace(self) -> None:
        if self._cursor > 0:
            self._value = self._value[:self._cursor - 1] + self._value[self._cursor:]
            self._cursor -= 1

    def delete(self) -> None:
        self._value = self._value[:self._cursor] + self._value[self._cursor + 1:]

    def move(self, delta: int) -> None:
        self._cursor = min(max(0, self._cursor + delta), len(self._value))

    def home(self) -> None:
        self._cursor = 0

    def end(self) -> None:
        self._cursor = len(self._value)

    def clear(self) -> None:
        self._value = ""
        self._cursor = 0


class InputModeController:
    """Routes keystrokes according to the active InputMode.

    Args:
        viewport: Viewport receiving scroll commands
        send: Callable(content) issuing one outbound send on the room session
        navigate: Callable() asking for the room list; optional
    """

    def __init__(
        self,
        viewport: Viewport,
        send: Callable[[str], Any],
        navigate: Callable[[], Any] | None = None,
        limit: int = COMPOSE_CHAR_LIMIT,
    ) -> None:
        self._viewport = viewport
        self._send = send
        self._navigate = navigate
        self.mode = InputMode.VIEW
        self.buffer = ComposeBuffer(limit)
        self._entry_keystroke: KeyPress | None = None

    def classify(self, keypress: KeyPress) -> KeyAction:
        """Map a keystroke to its action in the current mode."""
        token = keypress.token
        if self.mode == InputMode.VIEW:
            if token in VIEW_COMMANDS:
                return VIEW_COMMANDS[token]
            return VIEW_SCROLL_KEYS.get(token, KeyAction.IGNORED)

        if keypress.key in COMPOSE_COMMANDS:
            return COMPOSE_COMMANDS[keypress.key]
        if keypress.is_printable:
            return KeyAction.INSERT_TEXT
        if keypress.key in EDIT_KEYS:
            return KeyAction.EDIT
        return KeyAction.IGNORED

    def handle_key(self, keypress: KeyPress) -> KeyAction:
        """Apply one keystroke; returns the action it resolved to."""
        action = self.classify(keypress)

        if action == KeyAction.ENTER_COMPOSE:
            self._enter_compose(keypress)
        elif action == KeyAction.SCROLL_TOP:
            self._viewport.scroll_to_top()
        elif action == KeyAction.SCROLL_BOTTOM:
            self._viewport.scroll_to_bottom()
        elif action == KeyAction.NAVIGATE_ROOMS:
            if self._navigate is not None:
                self._navigate()
        elif action == KeyAction.LEAVE_COMPOSE:
            self._leave_compose()
        elif action == KeyAction.SUBMIT:
            self._submit()

        if action in TABLE_ACTIONS:
            return action

        # Fall through to the active mode's generic handler
        if keypress is self._entry_keystroke:
            self._entry_keystroke = None
            return action
        self._entry_keystroke = None
        if self.mode == InputMode.COMPOSE:
            self._edit(keypress)
        else:
            self._scroll(action)
        return action

    def _enter_compose(self, keypress: KeyPress) -> None:
        self.mode = InputMode.COMPOSE
        self.buffer.focused = True
        self._entry_keystroke = keypress

    def _leave_compose(self) -> None:
        self.mode = InputMode.VIEW
        self.buffer.focused = False
        self.buffer.clear()

    def _submit(self) -> None:
        content = self.buffer.value
        if not content:
            return
        self._send(content)
        self.buffer.clear()

    def _edit(self, keypress: KeyPress) -> None:
        if keypress.is_printable:
            self.buffer.insert(keypress.character)
        elif keypress.key == "backspace":
            self.buffer.backspace()
        elif keypress.key == "delete":
            self.buffer.delete()
        elif keypress.key == "left":
            self.buffer.move(-1)
        elif keypress.key == "right":
            self.buffer.move(1)
        elif keypress.key == "home":
            self.buffer.home()
        elif keypress.key == "end":
            self.buffer.end()

    def _scroll(self, action: KeyAction) -> None:
        if action == KeyAction.SCROLL_DOWN:
            self._viewport.scroll_by(1)
        elif action == KeyAction.SCROLL_UP:
            self._viewport.scroll_by(-1)
        elif action == KeyAction.PAGE_DOWN:
            self._viewport.scroll_by(self._viewport.page_size())
        elif action == KeyAction.PAGE_UP:
            self._viewport.scroll_by(-self._viewport.page_size())
