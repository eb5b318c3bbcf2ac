"""Data models for the TUI.

Hides the representation of keystrokes, input modes and viewport geometry.
"""

from dataclasses import dataclass
from enum import Enum


class InputMode(str, Enum):
    """Who owns keystrokes: the scroll handler or the compose buffer."""

    VIEW = "view"
    COMPOSE = "compose"


class KeyAction(str, Enum):
    """What a keystroke means in the active mode."""

    ENTER_COMPOSE = "enter_compose"
    SCROLL_TOP = "scroll_top"
    SCROLL_BOTTOM = "scroll_bottom"
    NAVIGATE_ROOMS = "navigate_rooms"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    LEAVE_COMPOSE = "leave_compose"
    SUBMIT = "submit"
    INSERT_TEXT = "insert_text"
    EDIT = "edit"
    IGNORED = "ignored"


@dataclass(frozen=True)
class KeyPress:
    """A keystroke as delivered by the terminal."""

    key: str
    character: str | None = None

    @property
    def is_printable(self) -> bool:
        return bool(self.character) and self.character.isprintable()

    @property
    def token(self) -> str:
        """The typed character for printable keys, the key name otherwise."""
        return self.character if self.is_printable else self.key


@dataclass
class ViewportState:
    """Geometry of the visible window into the transcript."""

    width: int = 0
    height: int = 0
    offset: int = 0
    content_height: int = 0

    @property
    def excess(self) -> int:
        return max(0, self.content_height - self.height)
