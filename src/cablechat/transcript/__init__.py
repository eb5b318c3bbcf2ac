"""Transcript module: the rendered history of the active room."""

from .log import (
    TranscriptLine,
    TranscriptLog,
    format_joined,
    format_left,
    format_message,
    render_event,
)

__all__ = [
    "TranscriptLine",
    "TranscriptLog",
    "format_joined",
    "format_left",
    "format_message",
    "render_event",
]
