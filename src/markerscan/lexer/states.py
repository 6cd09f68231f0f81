# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""State functions of the marker lexer.

Each state takes the lexer, consumes input, emits lexemes, and returns the
next state (or None to halt the scan).  The marker grammar is::

    marker := "+" scope (":" scope)* (":" arg ("," arg)*)? line-terminator
    arg    := name ("=" value)?
    value  := string | number | bool | naked-string
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markerscan.lexer.lexeme import (
    ARG_ASSIGNMENT,
    ARG_DELIMITER,
    DOUBLE_QUOTE,
    EOF,
    GOLANG_COMMENT,
    LITERAL_QUOTE,
    MARKER_DELIMITERS,
    MARKER_SEPARATOR,
    MARKER_START,
    NAKED_STRING_DELIMITERS,
    SINGLE_QUOTE,
    YAML_COMMENT,
    LexemeType,
    quote,
)

if TYPE_CHECKING:
    from markerscan.lexer.lexer import Lexer, StateFn

# ###############
# Public Interface
# ###############


def lex(lexer: Lexer) -> StateFn | None:
    """Scan until a comment or a marker start is found."""
    lexer.strip_whitespace()

    if lexer.is_empty():
        if not lexer.empty_stack():
            return lexer.pop()
        lexer.emit_synthetic(LexemeType.EOF, "")
        return None
    if lexer.consumed_whitespaced(GOLANG_COMMENT, YAML_COMMENT):
        return lex_comment_start
    if lexer.consumed(MARKER_START):
        return lex_marker_start

    lexer.discard()
    return lex


def lex_comment_start(lexer: Lexer) -> StateFn | None:
    """Emit the comment delimiter that has just been consumed."""
    lexer.emit(LexemeType.COMMENT)
    return lex_comment


def lex_comment(lexer: Lexer) -> StateFn | None:
    """Scan the body of a comment for a marker start."""
    if lexer.consumed(MARKER_START):
        return lex_marker_start
    if lexer.peeked("\n") or lexer.is_empty():
        return lex

    lexer.discard()
    return lex_comment


def lex_marker_start(lexer: Lexer) -> StateFn | None:
    """Emit a marker start if a letter follows the ``+``.

    Requiring a letter keeps ``++`` and ``2+2=4`` from being read as markers.
    """
    if lexer.peek().isalpha():
        lexer.emit(LexemeType.MARKER_START)
        return lex_marker

    lexer.flush()
    return lex_comment


def lex_marker(lexer: Lexer) -> StateFn | None:
    """Scan one scope of a marker, or the first argument once the scope path is complete."""
    if not lexer.consume_until(*MARKER_DELIMITERS):
        lexer.flush()
        return lex_comment

    if lexer.peeked(MARKER_SEPARATOR):
        lexer.emit(LexemeType.SCOPE)
        lexer.consume(MARKER_SEPARATOR)
        lexer.emit(LexemeType.SEPARATOR)
        return lex_marker

    if _at_marker_end(lexer):
        if lexer.last_emitted.type != LexemeType.SEPARATOR:
            return lexer.warning("marker without scope found")
        lexer.emit(LexemeType.ARG)
        lexer.emit_synthetic(LexemeType.SYNTHETIC_BOOL_LITERAL, "true")
        lexer.emit_synthetic(LexemeType.MARKER_END, "\n")
        return lex_comment

    if lexer.peeked(ARG_ASSIGNMENT):
        if lexer.last_emitted.type != LexemeType.SEPARATOR:
            return lexer.warning("marker without scope found")
        lexer.emit(LexemeType.ARG)
        lexer.consume(ARG_ASSIGNMENT)
        lexer.emit(LexemeType.ARG_ASSIGNMENT)
        return lex_arg_value_initial

    return lexer.warning("invalid marker found")


def lex_args(lexer: Lexer) -> StateFn | None:
    """Scan an argument name following an argument delimiter."""
    if not lexer.consume_until(*MARKER_DELIMITERS):
        lexer.flush()
        lexer.emit_synthetic(LexemeType.MARKER_END, "\n")
        return lex

    lexer.emit(LexemeType.ARG)

    if lexer.consumed(ARG_ASSIGNMENT):
        lexer.emit(LexemeType.ARG_ASSIGNMENT)
        return lex_arg_value_initial
    if _at_marker_end(lexer):
        lexer.emit_synthetic(LexemeType.SYNTHETIC_BOOL_LITERAL, "true")
        lexer.emit_synthetic(LexemeType.MARKER_END, "\n")
        return lex_comment
    if lexer.peeked(ARG_DELIMITER):
        lexer.emit_synthetic(LexemeType.SYNTHETIC_BOOL_LITERAL, "true")
        return lex_more_args

    return lexer.error(f"malformed argument: {lexer.buffer}")


def lex_arg_value_initial(lexer: Lexer) -> StateFn | None:
    """Scan an argument value, trying each literal form in turn."""
    for scan in (_lex_string_literal, _lex_numeric_literal, _lex_boolean_literal, _lex_naked_string_literal):
        next_state, present = scan(lexer, lex_more_args)
        if present:
            return next_state

    return lexer.error(f"malformed argument: {lexer.buffer}")


def lex_float_literal(lexer: Lexer) -> StateFn | None:
    """Validate and emit the buffered float literal, then resume the pushed state."""
    value = lexer.buffer
    try:
        float(value)
    except ValueError as exc:
        return lexer.raw_error(f"invalid float literal {quote(value)}: {exc} before position {lexer.pos}")

    lexer.emit(LexemeType.FLOAT_LITERAL)
    return lexer.pop()


def lex_integer_literal(lexer: Lexer) -> StateFn | None:
    """Validate and emit the buffered integer literal, then resume the pushed state."""
    value = lexer.buffer
    try:
        int(value)
    except ValueError as exc:
        return lexer.raw_error(f"invalid integer literal {quote(value)}: {exc} before position {lexer.pos}")

    lexer.emit(LexemeType.INTEGER_LITERAL)
    return lexer.pop()


def lex_more_args(lexer: Lexer) -> StateFn | None:
    """Scan what follows an argument value: another argument or the marker end."""
    if lexer.consumed(ARG_DELIMITER):
        lexer.emit(LexemeType.ARG_DELIMITER)
        return lex_args
    if _at_marker_end(lexer):
        lexer.emit_synthetic(LexemeType.MARKER_END, "\n")
        return lex_comment

    return lexer.error(f"malformed argument: {lexer.buffer}")


# ################
# Implementation
# ################

_QUOTES = (SINGLE_QUOTE, DOUBLE_QUOTE, LITERAL_QUOTE)
_NUMERIC_CONTINUATIONS = (".", "e", "E", "-")


def _at_marker_end(lexer: Lexer) -> bool:
    return lexer.peeked(" ") or lexer.peeked("\n") or lexer.peek() == EOF


def _lex_string_literal(lexer: Lexer, next_state: StateFn) -> tuple[StateFn | None, bool]:
    """Scan a quoted string.

    Backtick strings may span lines; when the next line starts with a comment
    delimiter, the whitespace and the delimiter are skipped so the literal holds
    only the commented content.
    """
    delimiter = lexer.peek()
    if delimiter not in _QUOTES:
        return None, False

    lexer.consume(delimiter)
    lexer.emit(LexemeType.QUOTE)

    pos = lexer.pos
    context = lexer.context()
    unmatched = f"unmatched string delimiter {delimiter} at position {pos}, following {quote(context)}"

    while True:
        if lexer.peek() == EOF:
            return lexer.raw_error(unmatched), True
        if lexer.peeked("\n"):
            if delimiter != LITERAL_QUOTE:
                return lexer.raw_error(unmatched), True
            lexer.next()
            if lexer.peeked_whitespaced(GOLANG_COMMENT, YAML_COMMENT):
                lexer.discard_until(GOLANG_COMMENT, YAML_COMMENT)
                lexer.discard_n(len(GOLANG_COMMENT) if lexer.has_prefix(GOLANG_COMMENT) else len(YAML_COMMENT))
        elif lexer.peeked(delimiter):
            lexer.emit(LexemeType.STRING_LITERAL)
            lexer.consume(delimiter)
            lexer.emit(LexemeType.QUOTE)
            return next_state, True
        else:
            lexer.next()


def _lex_numeric_literal(lexer: Lexer, next_state: StateFn) -> tuple[StateFn | None, bool]:
    """Scan an integer or float literal.

    A ``.``, ``e``, ``E`` or ``-`` after the first rune makes the literal a float;
    the buffered text is validated by the literal state that follows.
    """
    first = lexer.peek()
    if not (lexer.peeked_one_of(".", "-") or first.isdigit()):
        return None, False

    is_float = first == "."
    while True:
        lexer.next()
        if lexer.peeked_one_of(*_NUMERIC_CONTINUATIONS):
            is_float = True
            continue
        if not lexer.peek().isdigit():
            break

    lexer.push(next_state)
    return (lex_float_literal if is_float else lex_integer_literal), True


def _lex_boolean_literal(lexer: Lexer, next_state: StateFn) -> tuple[StateFn | None, bool]:
    if lexer.consumed_whitespaced("true") or lexer.consumed_whitespaced("false"):
        lexer.emit(LexemeType.BOOL_LITERAL)
        return next_state, True
    return None, False


def _lex_naked_string_literal(lexer: Lexer, next_state: StateFn) -> tuple[StateFn | None, bool]:
    if not lexer.consume_until(*NAKED_STRING_DELIMITERS):
        return None, False
    lexer.emit(LexemeType.STRING_LITERAL)
    return next_state, True
