"""Tests for the view state and key translation."""

import curses
import random

import pytest

from omp_browser.state import ViewState
from omp_browser.keys import Key, KeyEvent, translate_key


class TestViewState:
    """Test cursor, scrolling and search buffer handling."""

    def test_move_up_clamps_at_zero(self):
        view = ViewState(page_size=5)
        view.move_up()
        assert view.selected_index == 0
        assert view.offset == 0

    def test_move_down_on_empty_list(self):
        view = ViewState(page_size=5)
        view.move_down(0)
        assert view.selected_index == 0
        assert view.offset == 0

    def test_move_down_clamps_at_last(self):
        view = ViewState(page_size=5)
        for _ in range(10):
            view.move_down(3)
        assert view.selected_index == 2

    def test_move_down_scrolls(self):
        view = ViewState(page_size=3)
        for _ in range(4):
            view.move_down(10)

        assert view.selected_index == 4
        assert view.offset == 2
        assert list(view.visible_range(10)) == [2, 3, 4]

    def test_move_up_scrolls(self):
        view = ViewState(selected_index=4, offset=4, page_size=3)
        view.move_up()
        assert view.selected_index == 3
        assert view.offset == 3

    def test_visible_range_short_list(self):
        view = ViewState(page_size=10)
        assert list(view.visible_range(3)) == [0, 1, 2]
        assert list(view.visible_range(0)) == []

    def test_random_navigation_stays_in_bounds(self):
        rng = random.Random(1234)
        for count in (0, 1, 2, 7, 40):
            view = ViewState(page_size=5)
            for _ in range(300):
                if rng.random() < 0.5:
                    view.move_up()
                else:
                    view.move_down(count)
                assert 0 <= view.selected_index <= max(0, count - 1)
                assert view.offset <= view.selected_index < view.offset + view.page_size

    def test_clamp_after_list_shrinks(self):
        view = ViewState(selected_index=8, offset=6, page_size=3)
        view.clamp(4)
        assert view.selected_index == 3
        assert view.offset == 3

    def test_clamp_empty(self):
        view = ViewState(selected_index=8, offset=6, page_size=3)
        view.clamp(0)
        assert view.selected_index == 0
        assert view.offset == 0

    def test_clamp_after_page_shrinks(self):
        view = ViewState(selected_index=9, offset=0, page_size=20)
        view.set_page_size(4)
        view.clamp(30)
        assert view.offset == 6
        assert 9 in view.visible_range(30)

    def test_set_page_size_minimum(self):
        view = ViewState()
        view.set_page_size(-2)
        assert view.page_size == 1

    def test_type_char_resets_cursor(self):
        view = ViewState(selected_index=5, offset=3, page_size=3)
        assert view.type_char("a")
        assert view.search_term == "a"
        assert view.selected_index == 0
        assert view.offset == 0

    def test_leading_space_ignored(self):
        view = ViewState(selected_index=2, page_size=5)
        assert not view.type_char(" ")
        assert view.search_term == ""
        assert view.selected_index == 2

    def test_space_after_text(self):
        view = ViewState()
        view.type_char("l")
        view.type_char("s")
        assert view.type_char(" ")
        assert view.search_term == "ls "

    @pytest.mark.parametrize("char", ["\t", "\x7f", "é", "ab", ""])
    def test_non_printable_rejected(self, char):
        view = ViewState()
        assert not view.type_char(char)
        assert view.search_term == ""

    def test_backspace(self):
        view = ViewState(search_term="alp")
        assert view.backspace()
        assert view.search_term == "al"

    def test_backspace_empty(self):
        view = ViewState()
        assert not view.backspace()
        assert view.search_term == ""

    def test_reset(self):
        view = ViewState(search_term="x", selected_index=3, offset=2, page_size=4)
        view.reset()
        assert view == ViewState(page_size=4)


class TestTranslateKey:
    """Test curses key code mapping."""

    @pytest.mark.parametrize("code,key", [
        (curses.KEY_F1, Key.HELP),
        (curses.KEY_F2, Key.REFRESH),
        (curses.KEY_RIGHT, Key.FAVORITE_ADD),
        (curses.KEY_LEFT, Key.FAVORITE_REMOVE),
        (curses.KEY_UP, Key.UP),
        (curses.KEY_DOWN, Key.DOWN),
        (curses.KEY_ENTER, Key.ENTER),
        (10, Key.ENTER),
        (13, Key.ENTER),
        (27, Key.ESCAPE),
        (curses.KEY_BACKSPACE, Key.BACKSPACE),
        (127, Key.BACKSPACE),
        (8, Key.BACKSPACE),
    ])
    def test_special_keys(self, code, key):
        assert translate_key(code) == KeyEvent(key)

    @pytest.mark.parametrize("char", ["a", "Z", "0", " ", "~", ":", "."])
    def test_printable(self, char):
        assert translate_key(ord(char)) == KeyEvent(Key.CHAR, char)

    @pytest.mark.parametrize("code", [curses.KEY_F3, curses.KEY_RESIZE, 9, 0, 200])
    def test_other(self, code):
        assert translate_key(code).key is Key.OTHER
