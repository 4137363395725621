"""Tests for pi.readline.line_buffer.LineBuffer."""

from __future__ import annotations

import random

from pi.readline.line_buffer import LineBuffer


def make_buffer(text: str) -> LineBuffer:
    buf = LineBuffer()
    for ch in text:
        buf.insert(ch)
    return buf


class TestInsert:
    def test_starts_empty(self) -> None:
        buf = LineBuffer()
        assert buf.text == ""
        assert buf.cursor == 0
        assert buf.at_end

    def test_appends_and_advances(self) -> None:
        buf = make_buffer("abc")
        assert buf.text == "abc"
        assert buf.cursor == 3
        assert len(buf) == 3

    def test_inserts_at_cursor(self) -> None:
        buf = make_buffer("ac")
        buf.move_left()
        buf.insert("b")
        assert buf.text == "abc"
        assert buf.cursor == 2
        assert not buf.at_end


class TestDelete:
    def test_delete_left_removes_before_cursor(self) -> None:
        buf = make_buffer("abc")
        buf.move_left()
        assert buf.delete_left() is True
        assert buf.text == "ac"
        assert buf.cursor == 1

    def test_delete_left_at_start_is_noop(self) -> None:
        buf = make_buffer("abc")
        for _ in range(3):
            buf.move_left()
        assert buf.delete_left() is False
        assert buf.text == "abc"
        assert buf.cursor == 0

    def test_delete_left_on_empty_is_noop(self) -> None:
        assert LineBuffer().delete_left() is False

    def test_delete_right_keeps_cursor(self) -> None:
        buf = make_buffer("abc")
        buf.move_left()
        buf.move_left()
        assert buf.delete_right() is True
        assert buf.text == "ac"
        assert buf.cursor == 1

    def test_delete_right_at_end_is_noop(self) -> None:
        buf = make_buffer("abc")
        assert buf.delete_right() is False
        assert buf.text == "abc"


class TestMovement:
    def test_moves_report_change(self) -> None:
        buf = make_buffer("ab")
        assert buf.move_left() is True
        assert buf.move_right() is True

    def test_right_at_end_is_noop(self) -> None:
        buf = make_buffer("ab")
        assert buf.move_right() is False
        assert buf.cursor == 2

    def test_left_at_start_is_noop(self) -> None:
        buf = LineBuffer()
        assert buf.move_left() is False
        assert buf.cursor == 0

    def test_cursor_stays_in_bounds(self) -> None:
        rng = random.Random(1234)
        buf = make_buffer("hello world")
        for _ in range(500):
            rng.choice([buf.move_left, buf.move_right])()
            assert 0 <= buf.cursor <= len(buf)
        assert buf.text == "hello world"


class TestWholeLine:
    def test_replace_puts_cursor_at_end(self) -> None:
        buf = make_buffer("draft")
        buf.move_left()
        buf.replace("recalled line")
        assert buf.text == "recalled line"
        assert buf.cursor == len("recalled line")

    def test_replace_with_empty(self) -> None:
        buf = make_buffer("draft")
        buf.replace("")
        assert buf.text == ""
        assert buf.cursor == 0

    def test_take_and_clear(self) -> None:
        buf = make_buffer("submit me")
        buf.move_left()
        assert buf.take_and_clear() == "submit me"
        assert buf.text == ""
        assert buf.cursor == 0
