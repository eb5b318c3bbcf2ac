"""ActionCable frame construction.

Hides the wire encoding of outbound control and message frames. The
identifier is itself a JSON string nested inside the outer JSON object.
"""

import json

SEND_ACTION = "send_message"


def channel_identifier(channel: str, room: str) -> str:
    """Identifier naming the room-scoped topic on a channel."""
    return json.dumps({"channel": channel, "topic": room})


def subscribe_frame(channel: str, room: str) -> str:
    """Subscribe control frame, sent once right after the dial."""
    return json.dumps({
        "command": "subscribe",
        "identifier": channel_identifier(channel, room),
    })


def message_frame(channel: str, room: str, content: str) -> str:
    """Outbound chat message for the current room."""
    data = {"action": SEND_ACTION, "room": room, "content": content}
    return json.dumps({
        "command": "message",
        "identifier": channel_identifier(channel, room),
        "data": json.dumps(data),
    })
