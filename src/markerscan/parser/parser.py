# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Marker parser: turns the lexeme stream into inflated marker objects.

The parser owns a lexer over its input and runs a second chain of state
functions over the lexemes it produces.  Whenever a marker's scope path matches
a registered schema, its arguments are bound and the schema is inflated into an
object, delivered as a :class:`Result` through a bounded buffer.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TextIO

from pydantic import BaseModel

from markerscan.lexer import BUFFER_SIZE, Lexeme, Lexer, LexemeType, Position
from markerscan.marker import Definition, Registry
from markerscan.parser.states import parse, start_parse

# ###############
# Public Interface
# ###############

ParseStateFn = Callable[["Parser"], "ParseStateFn | None"]

UNKNOWN_MARKER = "Unknown Marker"


class MarkerParseError(Exception):
    """A lex or parse failure delivered in-band as the object of a Result.

    Attributes:
        cause: The underlying failure message.
        marker_name: Name of the marker being parsed, or ``Unknown Marker``.
        line: Line of the lexeme at which the failure was detected.
        column: Column of the lexeme at which the failure was detected.
    """

    def __init__(self, cause: str, marker_name: str, position: Position) -> None:
        self.cause = cause
        self.marker_name = marker_name
        self.line = position.line
        self.column = position.column
        super().__init__(f"{cause}, on marker {marker_name} at {position}")


@dataclass
class Result:
    """One parsed marker.

    Attributes:
        object: The inflated marker model, or the MarkerParseError that stopped it.
        marker_text: The marker as written in the input, from ``+`` to its last argument.
    """

    object: BaseModel | MarkerParseError
    marker_text: str

    @property
    def is_error(self) -> bool:
        return isinstance(self.object, MarkerParseError)


class Parser:
    """Single-use parser for one input string against a registry of schemas."""

    name = "Marker Parser"

    def __init__(self, source: str | TextIO, registry: Registry) -> None:
        self.registry = registry
        self.lexer = Lexer(source)
        self.scope_buffer = ""
        self.current_lexeme = Lexeme(LexemeType.ERROR, "")
        self.current_definition: Definition | None = None
        self._peeked: deque[Lexeme] = deque(maxlen=BUFFER_SIZE)
        self._state: ParseStateFn | None = start_parse
        self._items: deque[Result] = deque()
        self._results = self.run()

    def run(self) -> Iterator[Result]:
        """Drive the state machine, yielding results as the buffer fills up."""
        while self._state is not None:
            self._state = self._state(self)
            while len(self._items) >= BUFFER_SIZE:
                yield self._items.popleft()
        while self._items:
            yield self._items.popleft()

    def next_item(self) -> Result | None:
        """Return the next result, or None once the input is exhausted."""
        return next(self._results, None)

    def parse(self) -> list[Result]:
        """Parse the remaining input and return every result in input order."""
        return list(self._results)

    def __iter__(self) -> Iterator[Result]:
        return self._results

    # ------------------------------------------------------------------
    # Lexeme access
    # ------------------------------------------------------------------

    def next(self) -> Lexeme:
        """Advance to the next lexeme and append its text to the scope buffer."""
        lexeme = self._peeked.popleft() if self._peeked else self.lexer.next_lexeme()
        if lexeme.type not in _UNBUFFERED_TYPES:
            self.scope_buffer += lexeme.value
        self.current_lexeme = lexeme
        return lexeme

    def peek(self) -> Lexeme:
        """Return the next lexeme without advancing."""
        if not self._peeked:
            self._peeked.append(self.lexer.next_lexeme())
        return self._peeked[0]

    def peeked(self, lexeme_type: LexemeType) -> bool:
        return self.peek().type == lexeme_type

    def consumed(self, lexeme_type: LexemeType) -> bool:
        """Advance past the next lexeme if it has the given type."""
        if self.peeked(lexeme_type):
            self.next()
            return True
        return False

    def discard(self) -> None:
        """Drop the next lexeme without appending it to the scope buffer."""
        if self._peeked:
            self._peeked.popleft()
        else:
            self.lexer.next_lexeme()

    # ------------------------------------------------------------------
    # Definitions and results
    # ------------------------------------------------------------------

    def load_definition(self) -> bool:
        """Resolve the scope path, minus its trailing separator, against the registry."""
        name = self.scope_buffer[:-1]
        if not self.registry.lookup(name):
            return False
        self.current_definition = self.registry.get_definition(name)
        return True

    def emit(self) -> None:
        """Inflate the current definition and queue it as a result.

        Raises:
            MarkerError: If inflation fails.
        """
        assert self.current_definition is not None
        output = self.current_definition.inflate_object()
        self._items.append(Result(object=output, marker_text=self.scope_buffer))
        self.flush()

    def error(self, cause: str) -> ParseStateFn:
        """Queue an error result for the marker being parsed and resume scanning."""
        marker_name = self.current_definition.name if self.current_definition is not None else UNKNOWN_MARKER
        failure = MarkerParseError(cause, marker_name, self.current_lexeme.pos)
        self._items.append(Result(object=failure, marker_text=self.scope_buffer))
        self.flush()
        return parse

    def flush(self) -> None:
        """Forget the scope buffer and the current definition."""
        self.scope_buffer = ""
        self.current_definition = None


def parse_markers(source: str | TextIO, registry: Registry) -> list[Result]:
    """Parse every registered marker in ``source``."""
    return Parser(source, registry).parse()


# ################
# Implementation
# ################

# Lexemes that hold no marker text.
_UNBUFFERED_TYPES = frozenset(
    {
        LexemeType.SYNTHETIC_BOOL_LITERAL,
        LexemeType.MARKER_END,
        LexemeType.EOF,
        LexemeType.ERROR,
        LexemeType.WARNING,
    }
)
