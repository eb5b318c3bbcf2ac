"""Domain events decoded from the room stream.

ChatEvent is a tagged union discriminated on `kind`. Events are immutable
once built; the only ordering between them is arrival order.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# Sender identity carried by every message replayed from the backlog
BACKLOG_SENDER = "backlog"


class EventKind(str, Enum):
    """Kinds of room activity."""

    MESSAGE_POSTED = "message_posted"
    USER_JOINED = "user_joined"
    USER_LEFT = "user_left"


class MessagePosted(BaseModel):
    """A user posted a message to the room."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.MESSAGE_POSTED] = EventKind.MESSAGE_POSTED
    username: str = Field(description="Display name of the author")
    content: str = Field(description="Message text")
    sender: str = Field(description="Opaque sender identity")


class UserJoined(BaseModel):
    """A user entered the room."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.USER_JOINED] = EventKind.USER_JOINED
    username: str


class UserLeft(BaseModel):
    """A user left the room."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.USER_LEFT] = EventKind.USER_LEFT
    username: str


ChatEvent = Annotated[
    MessagePosted | UserJoined | UserLeft,
    Field(discriminator="kind"),
]
