"""Viewport engine.

Owns the visible window into the transcript and all offset arithmetic:

    excess = max(0, content_height - visible_height)
    0 <= offset <= excess

The offset is clamped after every change, never allowed to go negative or
past the excess.
"""

from .models import ViewportState


class Viewport:
    """Scrollable window over newline-separated content."""

    def __init__(self) -> None:
        self.state = ViewportState()
        self._content = ""
        self._lines: list[str] = []
        self._ready = False

    @property
    def ready(self) -> bool:
        """True once the first resize has bound the content."""
        return self._ready

    @property
    def offset(self) -> int:
        return self.state.offset

    @property
    def excess(self) -> int:
        return self.state.excess

    @property
    def content(self) -> str:
        return self._content

    @property
    def at_top(self) -> bool:
        return self.state.offset == 0

    @property
    def at_bottom(self) -> bool:
        return self.state.offset >= self.state.excess

    def resize(self, width: int, height: int) -> None:
        """Apply new terminal dimensions.

        The first resize performs the initial content binding and starts at
        the top. Later ones keep a bottom-pinned view pinned and clamp any
        other offset to the new excess.
        """
        pinned = self._ready and self.at_bottom
        self.state.width = max(0, width)
        self.state.height = max(0, height)
        if not self._ready:
            self._ready = True
            self._bind(self._content)
            self.state.offset = 0
        elif pinned:
            self.state.offset = self.state.excess
        else:
            self._clamp()

    def on_content_changed(self, content: str, autoscroll: bool = False) -> None:
        """Rebind content; with autoscroll the offset is pinned to the bottom."""
        self._bind(content)
        if autoscroll:
            self.state.offset = self.state.excess
        else:
            self._clamp()

    def scroll_to_top(self) -> bool:
        """Jump to offset 0. Returns False if already there."""
        if self.at_top:
            return False
        self.state.offset = 0
        return True

    def scroll_to_bottom(self) -> bool:
        """Jump to offset == excess. Returns False if already there."""
        if self.state.offset == self.state.excess:
            return False
        self.state.offset = self.state.excess
        return True

    def scroll_by(self, delta: int) -> bool:
        """Move the offset by delta lines, clamped. Returns True if it moved."""
        before = self.state.offset
        self.state.offset = before + delta
        self._clamp()
        return self.state.offset != before

    def page_size(self) -> int:
        return max(1, self.state.height)

    def visible_lines(self) -> list[str]:
        """Lines inside the window, cropped to the visible width."""
        start = self.state.offset
        window = self._lines[start:start + self.state.height]
        if self.state.width:
            return [line[:self.state.width] for line in window]
        return window

    def view(self) -> str:
        return "\n".join(self.visible_lines())

    def _bind(self, content: str) -> None:
        self._content = content
        self._lines = content.split("\n") if content else []
        self.state.content_height = len(self._lines)

    def _clamp(self) -> None:
        self.state.offset = min(max(0, self.state.offset), self.state.excess)
