"""Unit and property-based tests for the viewport engine."""
from hypothesis import given
from hypothesis import strategies as st

from cablechat.ui import Viewport


def content_of(lines: int) -> str:
    return "\n".join(f"line {i}" for i in range(lines))


class TestViewport:
    """Tests for offset arithmetic."""

    def test_not_ready_until_first_resize(self):
        viewport = Viewport()
        viewport.on_content_changed(content_of(3))

        assert not viewport.ready
        viewport.resize(80, 10)
        assert viewport.ready
        assert viewport.offset == 0

    def test_first_resize_binds_content_at_top(self):
        viewport = Viewport()
        viewport.on_content_changed(content_of(25), autoscroll=True)
        viewport.resize(80, 10)

        assert viewport.state.content_height == 25
        assert viewport.offset == 0
        assert viewport.visible_lines()[0] == "line 0"

    def test_scroll_top_and_bottom(self):
        """Scenario: height 10, content 25, offset at excess 15."""
        viewport = Viewport()
        viewport.resize(80, 10)
        viewport.on_content_changed(content_of(25), autoscroll=True)
        assert viewport.offset == 15

        assert viewport.scroll_to_top() is True
        assert viewport.offset == 0
        assert viewport.scroll_to_bottom() is True
        assert viewport.offset == 15

    def test_scroll_at_boundary_is_noop(self):
        viewport = Viewport()
        viewport.resize(80, 10)
        viewport.on_content_changed(content_of(25))

        assert viewport.scroll_to_top() is False
        viewport.scroll_to_bottom()
        assert viewport.scroll_to_bottom() is False

    def test_short_content_has_no_excess(self):
        viewport = Viewport()
        viewport.resize(80, 10)
        viewport.on_content_changed(content_of(4), autoscroll=True)

        assert viewport.excess == 0
        assert viewport.offset == 0
        assert viewport.scroll_by(-5) is False
        assert viewport.scroll_to_bottom() is False
        assert len(viewport.visible_lines()) == 4

    def test_autoscroll_stays_pinned(self):
        viewport = Viewport()
        viewport.resize(80, 10)
        viewport.on_content_changed(content_of(25), autoscroll=True)
        viewport.on_content_changed(content_of(26), autoscroll=True)

        assert viewport.offset == viewport.excess == 16
        assert viewport.visible_lines()[-1] == "line 25"

    def test_content_change_without_autoscroll_keeps_offset(self):
        viewport = Viewport()
        viewport.resize(80, 10)
        viewport.on_content_changed(content_of(25))
        viewport.scroll_by(3)
        viewport.on_content_changed(content_of(30))

        assert viewport.offset == 3

    def test_shrinking_terminal_clamps_offset(self):
        viewport = Viewport()
        viewport.resize(80, 10)
        viewport.on_content_changed(content_of(25), autoscroll=True)
        viewport.resize(80, 30)

        assert viewport.excess == 0
        assert viewport.offset == 0

    def test_shrinking_terminal_keeps_bottom_pinned(self):
        viewport = Viewport()
        viewport.resize(80, 10)
        viewport.on_content_changed(content_of(30), autoscroll=True)
        assert viewport.offset == 20

        viewport.resize(80, 5)

        assert viewport.offset == viewport.excess == 25
        assert viewport.visible_lines()[-1] == "line 29"

    def test_resize_keeps_scrolled_up_offset(self):
        viewport = Viewport()
        viewport.resize(80, 10)
        viewport.on_content_changed(content_of(30), autoscroll=True)
        viewport.scroll_by(-4)

        viewport.resize(80, 5)

        assert viewport.offset == 16
        assert not viewport.at_bottom

    def test_visible_lines_cropped_to_width(self):
        viewport = Viewport()
        viewport.resize(4, 2)
        viewport.on_content_changed("abcdefgh\nxy")

        assert viewport.visible_lines() == ["abcd", "xy"]
        assert viewport.view() == "abcd\nxy"

    def test_page_scroll(self):
        viewport = Viewport()
        viewport.resize(80, 10)
        viewport.on_content_changed(content_of(25))

        viewport.scroll_by(viewport.page_size())
        assert viewport.offset == 10
        viewport.scroll_by(viewport.page_size())
        assert viewport.offset == 15

    @given(
        st.lists(
            st.one_of(
                st.tuples(st.just("resize"), st.integers(0, 200), st.integers(0, 100)),
                st.tuples(st.just("content"), st.integers(0, 300), st.booleans()),
                st.tuples(st.just("scroll"), st.integers(-50, 50), st.just(0)),
                st.tuples(st.just("top"), st.just(0), st.just(0)),
                st.tuples(st.just("bottom"), st.just(0), st.just(0)),
            ),
            max_size=40,
        )
    )
    def test_offset_invariant(self, operations):
        """Property test: 0 <= offset <= excess after any operation."""
        viewport = Viewport()
        for op, a, b in operations:
            if op == "resize":
                viewport.resize(a, b)
            elif op == "content":
                viewport.on_content_changed(content_of(a), autoscroll=b)
            elif op == "scroll":
                viewport.scroll_by(a)
            elif op == "top":
                viewport.scroll_to_top()
            else:
                viewport.scroll_to_bottom()

            state = viewport.state
            assert state.excess == max(0, state.content_height - state.height)
            assert 0 <= viewport.offset <= viewport.excess
            assert len(viewport.visible_lines()) <= max(state.height, 0)

    @given(st.integers(0, 200), st.integers(1, 100))
    def test_autoscroll_pins_to_bottom(self, lines, height):
        """Property test: a live message at bottom leaves offset == new excess."""
        viewport = Viewport()
        viewport.resize(80, height)
        viewport.on_content_changed(content_of(lines), autoscroll=True)
        viewport.on_content_changed(content_of(lines + 1), autoscroll=True)

        assert viewport.offset == max(0, lines + 1 - height)
