"""Pytest configuration and shared fixtures."""
import json

import pytest

from cablechat.events import EventDecoder
from cablechat.transport import ServerConfig
from cablechat.transport.protocol import channel_identifier


def _payload_frame(message: dict, room: str = "lobby") -> str:
    return json.dumps({
        "identifier": channel_identifier("ChatRoomChannel", room),
        "message": message,
    })


@pytest.fixture
def payload_frame():
    """Return a builder wrapping a channel message the way the server broadcasts it."""
    return _payload_frame


@pytest.fixture
def decoder():
    """Return a decoder collecting its log records."""
    decoder = EventDecoder()
    decoder.records = []
    decoder.set_debug_callback(lambda level, component, message: decoder.records.append((level, message)))
    return decoder


@pytest.fixture
def server_config():
    """Return a config pointing at a local server."""
    return ServerConfig(host="127.0.0.1:3000")


@pytest.fixture
def new_message_frame():
    """Return a builder for new_message frames."""
    def _build(username: str, content: str, room: str = "lobby") -> str:
        return _payload_frame({"type": "new_message", "from": username, "content": content}, room)
    return _build


@pytest.fixture
def sample_backlog():
    """Return a backlog payload as served by the HTTP API."""
    return [
        {"content": "hi", "user": {"username": "alice"}},
        {"content": "hello alice", "user": {"username": "carol"}},
    ]
