# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer for markers embedded in source-code and YAML comments."""

from markerscan.lexer.lexeme import NO_POSITION, Lexeme, LexemeType, Position
from markerscan.lexer.lexer import BUFFER_SIZE, Lexer, StateFn, tokenize
from markerscan.lexer.reader import RuneReader

__all__ = [
    "BUFFER_SIZE",
    "Lexeme",
    "LexemeType",
    "Lexer",
    "NO_POSITION",
    "Position",
    "RuneReader",
    "StateFn",
    "tokenize",
]
