# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexeme kinds, positions, and the delimiters of the marker language."""

import enum
import json
from dataclasses import dataclass

# ###############
# Public Interface
# ###############

# Sentinel returned by the reader once the input is exhausted.
EOF = ""

GOLANG_COMMENT = "//"
YAML_COMMENT = "#"
MARKER_START = "+"
MARKER_SEPARATOR = ":"
ARG_ASSIGNMENT = "="
ARG_DELIMITER = ","
LITERAL_QUOTE = "`"
DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"

# Runes that terminate a scope or argument name.
MARKER_DELIMITERS: tuple[str, ...] = (
    ":",
    "=",
    " ",
    '"',
    "'",
    "`",
    ",",
    "+",
    "{",
    "}",
    "[",
    "]",
    "(",
    ")",
    ";",
    "\n",
    EOF,
)

# Runes that terminate an unquoted argument value.  ``;`` is allowed inside values.
NAKED_STRING_DELIMITERS: tuple[str, ...] = tuple(r for r in MARKER_DELIMITERS if r != ";")


class LexemeType(enum.Enum):
    """All lexeme kinds produced by the marker lexer."""

    ERROR = "Error"
    WARNING = "Warning"
    COMMENT = "Comment"
    MARKER_START = "MarkerStart"
    SCOPE = "Scope"
    SEPARATOR = "Separator"
    ARG = "Arg"
    ARG_ASSIGNMENT = "ArgAssignment"
    ARG_DELIMITER = "ArgDelimiter"
    STRING_LITERAL = "StringLiteral"
    FLOAT_LITERAL = "FloatLiteral"
    INTEGER_LITERAL = "IntegerLiteral"
    BOOL_LITERAL = "BoolLiteral"
    SYNTHETIC_BOOL_LITERAL = "SyntheticBoolLiteral"
    QUOTE = "Quote"
    SLICE_BEGIN = "SliceBegin"
    SLICE_END = "SliceEnd"
    SLICE_DELIMITER = "SliceDelimiter"
    NAKED_SLICE_DELIMITER = "NakedSliceDelimiter"
    MARKER_END = "MarkerEnd"
    EOF = "EOF"


@dataclass(frozen=True)
class Position:
    """A 1-based (line, column) location.  Columns count UTF-8 bytes."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{{line:{self.line} column:{self.column}}}"


# Position carried by lexemes that were not read from the input.
NO_POSITION = Position(line=0, column=0)


@dataclass(frozen=True)
class Lexeme:
    """A single lexeme with the text it was scanned from.

    Attributes:
        type: The kind of lexeme.
        value: The verbatim input text, or the injected text of a synthetic lexeme.
        pos: Where the lexeme starts; ``NO_POSITION`` for synthetic lexemes.
    """

    type: LexemeType
    value: str
    pos: Position = NO_POSITION

    def __str__(self) -> str:
        return self.value


def quote(text: str) -> str:
    """Return ``text`` as a double-quoted, escaped string for diagnostics."""
    return json.dumps(text, ensure_ascii=False)
