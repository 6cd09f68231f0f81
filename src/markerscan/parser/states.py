# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""State functions of the marker parser."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from markerscan.lexer import LexemeType
from markerscan.marker import MarkerError

if TYPE_CHECKING:
    from markerscan.parser.parser import Parser, ParseStateFn

logger = logging.getLogger("markerscan.parser")

# ###############
# Public Interface
# ###############


def start_parse(parser: Parser) -> ParseStateFn | None:
    if parser.peeked(LexemeType.COMMENT):
        parser.discard()
        return parse
    if parser.consumed(LexemeType.MARKER_START):
        return parse_marker_start
    if parser.consumed(LexemeType.EOF):
        return None
    return parse


def parse(parser: Parser) -> ParseStateFn | None:
    """Skip lexemes until a marker starts, surfacing lexer errors as results."""
    if parser.peeked(LexemeType.COMMENT):
        parser.discard()
        return parse
    if parser.peeked(LexemeType.MARKER_START):
        parser.flush()
        parser.next()
        return parse_marker_start
    if parser.consumed(LexemeType.EOF):
        return None
    if parser.consumed(LexemeType.ERROR):
        return parser.error(parser.current_lexeme.value)

    lexeme = parser.next()
    if lexeme.type == LexemeType.WARNING:
        logger.debug("%s: %s", parser.lexer.name, lexeme.value)
    parser.scope_buffer = ""
    return parse


def parse_marker_start(parser: Parser) -> ParseStateFn | None:
    if parser.consumed(LexemeType.SCOPE):
        return parse_scope
    return parse


def parse_scope(parser: Parser) -> ParseStateFn | None:
    if parser.consumed(LexemeType.SEPARATOR):
        return parse_separator
    return parse


def parse_separator(parser: Parser) -> ParseStateFn | None:
    """Extend the scope path, or resolve it once the first argument follows."""
    if parser.consumed(LexemeType.SCOPE):
        return parse_scope
    if parser.peeked(LexemeType.ARG):
        if parser.load_definition():
            return parse_arg
        logger.debug("ignoring unregistered marker %r", parser.scope_buffer[:-1])

    parser.flush()
    return parse


def parse_arg(parser: Parser) -> ParseStateFn | None:
    """Match an argument name against the loaded schema."""
    if not parser.consumed(LexemeType.ARG):
        return parse

    assert parser.current_definition is not None
    name = parser.current_lexeme.value
    if not parser.current_definition.lookup_argument(name):
        logger.debug("ignoring marker %s: unknown argument %r", parser.current_definition.name, name)
        parser.flush()
        return parse

    if parser.peeked(LexemeType.ARG_ASSIGNMENT):
        parser.next()
    return _parse_arg_value(parser, name)


def parse_more_args(parser: Parser) -> ParseStateFn | None:
    """Continue with the next argument, or emit the marker once it ends."""
    if parser.consumed(LexemeType.ARG_DELIMITER):
        return parse_arg
    if parser.consumed(LexemeType.MARKER_END):
        try:
            parser.emit()
        except MarkerError as exc:
            return parser.error(f"unable to inflate object, {exc}")
        return parse
    return parse


# ################
# Implementation
# ################


def _parse_arg_value(parser: Parser, name: str) -> ParseStateFn | None:
    """Convert the literal that follows an argument name and bind it."""
    _strip_quotes(parser)

    try:
        if parser.peeked(LexemeType.SYNTHETIC_BOOL_LITERAL):
            _bind(parser, name, _parse_bool(parser.peek().value))
            parser.discard()
        elif parser.consumed(LexemeType.BOOL_LITERAL):
            _bind(parser, name, _parse_bool(parser.current_lexeme.value.strip()))
        elif parser.consumed(LexemeType.INTEGER_LITERAL):
            _bind(parser, name, int(parser.current_lexeme.value))
        elif parser.consumed(LexemeType.FLOAT_LITERAL):
            _bind(parser, name, float(parser.current_lexeme.value))
        elif parser.consumed(LexemeType.STRING_LITERAL):
            _bind(parser, name, parser.current_lexeme.value)
            _strip_quotes(parser)
        else:
            return parse
    except (ValueError, MarkerError) as exc:
        return parser.error(str(exc))

    return parse_more_args


def _bind(parser: Parser, name: str, value: Any) -> None:
    assert parser.current_definition is not None
    parser.current_definition.set_argument(name, value)


def _parse_bool(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"invalid boolean literal {text!r}")


def _strip_quotes(parser: Parser) -> None:
    if parser.peeked(LexemeType.QUOTE):
        parser.next()
