"""Append-only transcript of one room session.

Hides how events become display lines. Each event renders through a fixed
per-kind template; the log keeps the lines in arrival order and is replaced
wholesale when a new room is activated.
"""

from dataclasses import dataclass
from typing import Iterable

from ..events.models import ChatEvent, EventKind, MessagePosted, UserJoined, UserLeft

LINE_SEPARATOR = "\n"


@dataclass(frozen=True)
class TranscriptLine:
    """One rendered line and the kind of event it came from."""

    text: str
    kind: EventKind


def format_message(username: str, content: str) -> str:
    return f"[{username}] {content}"


def format_joined(username: str) -> str:
    return f"{username} just joined!"


def format_left(username: str) -> str:
    return f"{username} just left!"


def render_event(event: ChatEvent) -> TranscriptLine:
    """Render an event with its kind's template."""
    if isinstance(event, MessagePosted):
        return TranscriptLine(format_message(event.username, event.content), event.kind)
    elif isinstance(event, UserJoined):
        return TranscriptLine(format_joined(event.username), event.kind)
    elif isinstance(event, UserLeft):
        return TranscriptLine(format_left(event.username), event.kind)
    raise TypeError(f"Unsupported event: {type(event).__name__}")


class TranscriptLog:
    """Ordered, append-only sequence of transcript lines."""

    def __init__(self) -> None:
        self._lines: list[TranscriptLine] = []

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> tuple[TranscriptLine, ...]:
        return tuple(self._lines)

    def append(self, event: ChatEvent) -> TranscriptLine:
        """Render the event and append it."""
        line = render_event(event)
        self._lines.append(line)
        return line

    def reset(self, backlog: Iterable[ChatEvent] = ()) -> None:
        """Replace the whole log with the rendered backlog."""
        self._lines = [render_event(event) for event in backlog]

    def render(self) -> str:
        """All lines joined by a single newline."""
        return LINE_SEPARATOR.join(line.text for line in self._lines)
