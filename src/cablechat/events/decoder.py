"""Inbound frame decoding.

Maps ActionCable envelopes onto ChatEvent variants. Decoding never halts
the stream: anything unrecognized is logged through the debug callback and
dropped.

Frame shapes:
- Control: {"type": "welcome" | "ping" | "confirm_subscription", ...}
- Refusal: {"type": "reject_subscription" | "disconnect", "reason": ...}
- Payload: {"identifier": "...", "message": {"type": "new_message", "from": ..., "content": ...}}
- Backlog (HTTP): [{"content": ..., "user": {"username": ...}}, ...]
"""

import json
from typing import Any

from ..transport.errors import DecodeError
from ..transport.models import RawFrame
from .models import BACKLOG_SENDER, ChatEvent, MessagePosted, UserJoined, UserLeft

CONTROL_TYPES = frozenset({"welcome", "ping", "confirm_subscription"})
REFUSAL_TYPES = frozenset({"reject_subscription", "disconnect"})

PREVIEW_LENGTH = 120


def _preview(frame: Any) -> str:
    text = frame.decode("utf-8", "replace") if isinstance(frame, bytes) else str(frame)
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


def _text_field(payload: dict, name: str) -> str:
    value = payload.get(name)
    if not isinstance(value, str):
        raise DecodeError(f"missing or non-string field '{name}'")
    return value


class EventDecoder:
    """Turns raw frames into ChatEvent instances."""

    def __init__(self) -> None:
        self._debug_callback: Any | None = None
        self.dropped = 0

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Decoder", message)

    def decode(self, frame: RawFrame) -> ChatEvent | None:
        """Decode one frame; None for control frames and anything unrecognized."""
        try:
            return self._decode(frame)
        except DecodeError as e:
            self.dropped += 1
            self._debug("warning", f"{e}; dropped {_preview(frame)}")
            return None

    def _decode(self, frame: RawFrame) -> ChatEvent | None:
        try:
            envelope = json.loads(frame)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"invalid JSON ({e})") from e
        if not isinstance(envelope, dict):
            raise DecodeError("envelope is not an object")

        frame_type = envelope.get("type")
        if frame_type is not None and not isinstance(frame_type, str):
            raise DecodeError(f"non-string frame type {type(frame_type).__name__}")
        if frame_type in CONTROL_TYPES:
            if frame_type != "ping":
                self._debug("debug", f"control frame: {frame_type}")
            return None
        if frame_type in REFUSAL_TYPES:
            reason = envelope.get("reason") or "no reason given"
            self._debug("warning", f"server sent {frame_type}: {reason}")
            return None

        message = envelope.get("message")
        if not isinstance(message, dict):
            raise DecodeError("no message payload")
        return self._event_from(message)

    def _event_from(self, message: dict) -> ChatEvent:
        kind = message.get("type")
        if kind == "new_message":
            username = _text_field(message, "from")
            sender = message.get("sender")
            return MessagePosted(
                username=username,
                content=_text_field(message, "content"),
                sender=str(sender) if sender is not None else username,
            )
        elif kind == "user_joined":
            return UserJoined(username=_text_field(message, "username"))
        elif kind == "user_left":
            return UserLeft(username=_text_field(message, "username"))
        raise DecodeError(f"unknown message type '{kind}'")

    def decode_backlog(self, payload: Any) -> list[MessagePosted]:
        """Decode the backlog payload into messages, oldest first.

        Accepts a JSON list (or raw JSON text of one), or an object with a
        "messages" list. Malformed entries are logged and skipped.
        """
        if isinstance(payload, (str, bytes)):
            try:
                payload = json.loads(payload)
            except ValueError:
                self._debug("warning", "backlog is not valid JSON")
                return []
        if isinstance(payload, dict):
            payload = payload.get("messages")
        if not isinstance(payload, list):
            self._debug("warning", "backlog is not a list of messages")
            return []

        events = []
        for index, entry in enumerate(payload):
            try:
                if not isinstance(entry, dict) or not isinstance(entry.get("user"), dict):
                    raise DecodeError("entry has no user object")
                events.append(MessagePosted(
                    username=_text_field(entry["user"], "username"),
                    content=_text_field(entry, "content"),
                    sender=BACKLOG_SENDER,
                ))
            except DecodeError as e:
                self.dropped += 1
                self._debug("warning", f"backlog entry {index}: {e}")

        self._debug("info", f"decoded {len(events)} backlog message(s)")
        return events
