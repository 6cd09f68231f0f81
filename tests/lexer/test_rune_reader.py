# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the rune reader underlying the marker lexer."""

import io

import pytest

from markerscan.lexer import Position, RuneReader

# ###############
# Reading
# ###############


class TestReading:
    def test_next_returns_runes_in_order(self) -> None:
        reader = RuneReader("ab")
        assert reader.next() == "a"
        assert reader.next() == "b"
        assert reader.next() == ""

    def test_next_appends_to_buffer(self) -> None:
        reader = RuneReader("abc")
        reader.next()
        reader.next()
        assert reader.buffer == "ab"

    def test_backup_undoes_last_next(self) -> None:
        reader = RuneReader("abc")
        reader.next()
        reader.backup()
        assert reader.buffer == ""
        assert reader.pos == Position(line=1, column=1)
        assert reader.peek() == "a"

    def test_backup_over_eof_is_a_no_op(self) -> None:
        reader = RuneReader("a")
        reader.next()
        reader.next()
        reader.backup()
        assert reader.buffer == "a"

    def test_peek_does_not_consume(self) -> None:
        reader = RuneReader("xy")
        assert reader.peek() == "x"
        assert reader.peek() == "x"
        assert reader.buffer == ""

    def test_peek_n_pads_with_eof(self) -> None:
        assert RuneReader("abc").peek_n(5) == ["a", "b", "c", "", ""]

    def test_is_empty(self) -> None:
        assert RuneReader("").is_empty()
        assert not RuneReader("a").is_empty()

    def test_small_chunks_are_stitched_together(self) -> None:
        reader = RuneReader(io.StringIO("hello world"), chunk_size=2)
        assert reader.has_prefix("hello w")
        assert reader.consume_until(" ")
        assert reader.buffer == "hello"
        assert reader.peek() == " "


# ###############
# Positions
# ###############


class TestPositions:
    def test_newline_starts_a_new_line(self) -> None:
        reader = RuneReader("a\nb")
        reader.next()
        reader.next()
        assert reader.pos == Position(line=2, column=1)

    def test_backup_over_newline_restores_previous_line(self) -> None:
        reader = RuneReader("a\nb")
        reader.next()
        reader.next()
        reader.backup()
        assert reader.pos == Position(line=1, column=2)

    @pytest.mark.parametrize(
        ("text", "column"),
        [
            ("a", 2),
            ("é", 3),
            ("€", 4),
            ("😀", 5),
        ],
    )
    def test_columns_advance_by_utf8_width(self, text: str, column: int) -> None:
        reader = RuneReader(text)
        reader.next()
        assert reader.pos == Position(line=1, column=column)

    def test_flush_moves_start_to_current_position(self) -> None:
        reader = RuneReader("abc")
        reader.next()
        reader.next()
        reader.flush()
        assert reader.buffer == ""
        assert reader.start == Position(line=1, column=3)


# ###############
# Look-ahead Predicates
# ###############


class TestPredicates:
    def test_peeked_matches_prefix(self) -> None:
        assert RuneReader("//x").peeked("//")
        assert not RuneReader("/x").peeked("//")

    def test_peeked_respects_exceptions(self) -> None:
        assert not RuneReader("//").peeked("/", "/")
        assert RuneReader("/a").peeked("/", "/")

    def test_peeked_one_of(self) -> None:
        assert RuneReader("-1").peeked_one_of(".", "-")
        assert not RuneReader("1").peeked_one_of(".", "-")

    def test_peeked_whitespaced_skips_whitespace(self) -> None:
        assert RuneReader("   # x").peeked_whitespaced("#", "//")
        assert not RuneReader("   x").peeked_whitespaced("#")

    def test_peeked_whitespaced_fails_on_whitespace_only(self) -> None:
        assert not RuneReader("   ").peeked_whitespaced("#")


# ###############
# Consuming and Discarding
# ###############


class TestConsuming:
    def test_consumed_advances_only_on_match(self) -> None:
        reader = RuneReader("+abc")
        assert not reader.consumed(":")
        assert reader.consumed("+")
        assert reader.buffer == "+"

    def test_consumed_whitespaced_includes_leading_whitespace(self) -> None:
        reader = RuneReader("  #x")
        assert reader.consumed_whitespaced("//", "#")
        assert reader.buffer == "  #"
        assert reader.peek() == "x"

    def test_consume_until_stops_before_exception(self) -> None:
        reader = RuneReader("scope:arg")
        assert reader.consume_until(":", "=")
        assert reader.buffer == "scope"
        assert reader.peek() == ":"

    def test_consume_until_reports_nothing_consumed(self) -> None:
        reader = RuneReader(":arg")
        assert not reader.consume_until(":")
        assert reader.buffer == ""

    def test_consume_until_stops_at_eof(self) -> None:
        reader = RuneReader("tail")
        assert reader.consume_until(":")
        assert reader.buffer == "tail"
        assert reader.is_empty()


class TestDiscarding:
    def test_discard_skips_without_buffering(self) -> None:
        reader = RuneReader("ab")
        reader.discard()
        assert reader.buffer == ""
        assert reader.start == Position(line=1, column=2)
        assert reader.peek() == "b"

    def test_discard_keeps_start_of_pending_buffer(self) -> None:
        reader = RuneReader("abc")
        reader.next()
        reader.discard()
        assert reader.buffer == "a"
        assert reader.start == Position(line=1, column=1)

    def test_discard_until_stops_at_token(self) -> None:
        reader = RuneReader("  text # comment")
        reader.discard_until("#")
        assert reader.peek() == "#"

    def test_strip_whitespace_crosses_lines(self) -> None:
        reader = RuneReader("  \n a")
        reader.strip_whitespace()
        assert reader.peek() == "a"
        assert reader.pos == Position(line=2, column=2)
