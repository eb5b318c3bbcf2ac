"""Unit tests for the input mode controller."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from cablechat.ui import ComposeBuffer, InputMode, InputModeController, KeyAction, KeyPress, Viewport


def char(c: str) -> KeyPress:
    return KeyPress(key=c, character=c)


ESCAPE = KeyPress(key="escape", character="\x1b")
ENTER = KeyPress(key="enter", character="\r")


@pytest.fixture
def viewport():
    viewport = Viewport()
    viewport.resize(80, 10)
    viewport.on_content_changed("\n".join(str(i) for i in range(25)), autoscroll=True)
    return viewport


@pytest.fixture
def sent():
    return []


@pytest.fixture
def navigations():
    return []


@pytest.fixture
def controller(viewport, sent, navigations):
    return InputModeController(viewport, send=sent.append, navigate=lambda: navigations.append("rooms"))


def type_text(controller: InputModeController, text: str) -> None:
    for c in text:
        controller.handle_key(char(c))


class TestViewMode:
    """Tests for the VIEW command table."""

    def test_starts_in_view_mode(self, controller):
        assert controller.mode == InputMode.VIEW
        assert not controller.buffer.focused

    def test_scroll_commands(self, controller, viewport):
        assert controller.handle_key(char("g")) == KeyAction.SCROLL_TOP
        assert viewport.offset == 0
        assert controller.handle_key(char("G")) == KeyAction.SCROLL_BOTTOM
        assert viewport.offset == 15

    def test_line_scroll_fallback(self, controller, viewport):
        controller.handle_key(char("g"))
        controller.handle_key(char("j"))
        controller.handle_key(KeyPress(key="down"))
        assert viewport.offset == 2
        controller.handle_key(char("k"))
        assert viewport.offset == 1
        controller.handle_key(KeyPress(key="pagedown"))
        assert viewport.offset == 11

    def test_navigate_rooms(self, controller, viewport, navigations):
        offset = viewport.offset
        assert controller.handle_key(char("h")) == KeyAction.NAVIGATE_ROOMS
        controller.handle_key(char("H"))

        assert navigations == ["rooms", "rooms"]
        assert controller.mode == InputMode.VIEW
        assert viewport.offset == offset

    def test_printable_keys_do_not_type_in_view_mode(self, controller):
        assert controller.handle_key(char("x")) == KeyAction.IGNORED
        assert controller.buffer.value == ""


class TestComposeMode:
    """Tests for COMPOSE transitions and the line editor."""

    def test_entry_key_is_suppressed(self, controller):
        """Entering compose with 'i' does not type 'i'."""
        assert controller.handle_key(char("i")) == KeyAction.ENTER_COMPOSE

        assert controller.mode == InputMode.COMPOSE
        assert controller.buffer.focused
        assert controller.buffer.value == ""

    def test_keystroke_after_entry_is_inserted(self, controller):
        controller.handle_key(char("i"))
        controller.handle_key(char("i"))
        controller.handle_key(char("x"))

        assert controller.buffer.value == "ix"

    def test_view_keys_type_in_compose_mode(self, controller, viewport, navigations):
        controller.handle_key(char("i"))
        offset = viewport.offset
        type_text(controller, "gGhjk")

        assert controller.buffer.value == "gGhjk"
        assert viewport.offset == offset
        assert navigations == []

    def test_escape_returns_to_view_and_clears(self, controller):
        controller.handle_key(char("i"))
        type_text(controller, "draft")

        assert controller.handle_key(ESCAPE) == KeyAction.LEAVE_COMPOSE
        assert controller.mode == InputMode.VIEW
        assert not controller.buffer.focused
        assert controller.buffer.value == ""

    def test_submit_sends_once_and_clears(self, controller, sent):
        controller.handle_key(char("i"))
        type_text(controller, "hello")

        assert controller.handle_key(ENTER) == KeyAction.SUBMIT
        assert sent == ["hello"]
        assert controller.buffer.value == ""
        assert controller.mode == InputMode.COMPOSE

    def test_submit_empty_buffer_sends_nothing(self, controller, sent):
        controller.handle_key(char("i"))
        controller.handle_key(ENTER)
        controller.handle_key(ENTER)

        assert sent == []

    def test_enter_in_view_mode_does_not_send(self, controller, sent):
        controller.handle_key(ENTER)
        assert sent == []

    def test_buffer_capped_at_80_characters(self, controller, sent):
        controller.handle_key(char("i"))
        type_text(controller, "x" * 100)

        assert len(controller.buffer.value) == 80
        controller.handle_key(ENTER)
        assert sent == ["x" * 80]

    def test_line_editing_keys(self, controller):
        controller.handle_key(char("i"))
        type_text(controller, "helo")
        controller.handle_key(KeyPress(key="left"))
        type_text(controller, "l")
        assert controller.buffer.value == "hello"

        controller.handle_key(KeyPress(key="home"))
        controller.handle_key(KeyPress(key="delete"))
        controller.handle_key(KeyPress(key="end"))
        controller.handle_key(KeyPress(key="backspace"))
        assert controller.buffer.value == "ell"
        assert controller.handle_key(KeyPress(key="right")) == KeyAction.EDIT

    def test_space_is_printable(self, controller):
        controller.handle_key(char("i"))
        controller.handle_key(KeyPress(key="space", character=" "))
        assert controller.buffer.value == " "

    @given(st.text(alphabet=st.characters(categories=("L", "N", "P")), min_size=1, max_size=30))
    def test_entry_then_text_types_exactly_text(self, text: str):
        """Property test: 'i' followed by text leaves exactly text in the buffer."""
        viewport = Viewport()
        sent: list[str] = []
        controller = InputModeController(viewport, send=sent.append)

        controller.handle_key(char("i"))
        type_text(controller, text)
        controller.handle_key(ENTER)

        assert sent == [text[:80]]


class TestComposeBuffer:
    """Tests for the bounded buffer itself."""

    def test_insert_truncates_to_room(self):
        buffer = ComposeBuffer(limit=5)
        assert buffer.insert("abc")
        assert buffer.insert("defg")
        assert buffer.value == "abcde"
        assert not buffer.insert("z")

    def test_cursor_bounds(self):
        buffer = ComposeBuffer()
        buffer.insert("ab")
        buffer.move(-10)
        assert buffer.cursor == 0
        buffer.backspace()
        assert buffer.value == "ab"
        buffer.move(10)
        assert buffer.cursor == 2
        buffer.delete()
        assert buffer.value == "ab"
