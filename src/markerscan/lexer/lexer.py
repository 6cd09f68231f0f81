# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""State-function driven scanner for markers embedded in comments.

The lexer runs a chain of state functions.  Each state consumes some input,
emits zero or more lexemes, and returns the next state, or None to halt.
Lexemes are handed to the consumer through a bounded buffer: the producer is a
generator that suspends whenever the buffer holds ``BUFFER_SIZE`` lexemes, so
the scan never runs more than a few lexemes ahead of whoever reads them.
"""

from collections import deque
from collections.abc import Callable, Iterator
from typing import TextIO

from markerscan.lexer.lexeme import NO_POSITION, Lexeme, LexemeType, quote
from markerscan.lexer.reader import RuneReader
from markerscan.lexer.states import lex, lex_comment

# ###############
# Public Interface
# ###############

StateFn = Callable[["Lexer"], "StateFn | None"]

BUFFER_SIZE = 3


class Lexer(RuneReader):
    """Scanner turning comment text into a stream of marker lexemes.

    A lexer is single-use: it is constructed around an input, produces lexemes
    until it emits EOF or an error, and is then exhausted.

    Attributes:
        name: Name of the lexer used in diagnostics.
        last_emitted: The most recently emitted lexeme (EOF before any emission).
    """

    name = "Marker Lexer"

    def __init__(self, source: str | TextIO) -> None:
        super().__init__(source)
        self._state: StateFn | None = lex
        self._stack: list[StateFn] = []
        self._items: deque[Lexeme] = deque()
        self.last_emitted = Lexeme(LexemeType.EOF, "")
        self._lexemes = self.run()

    def run(self) -> Iterator[Lexeme]:
        """Drive the state machine, yielding lexemes as the buffer fills up."""
        while self._state is not None:
            self._state = self._state(self)
            while len(self._items) >= BUFFER_SIZE:
                yield self._items.popleft()
        while self._items:
            yield self._items.popleft()

    def next_lexeme(self) -> Lexeme:
        """Return the next lexeme, or a terminal EOF lexeme once the scan has finished."""
        return next(self._lexemes, Lexeme(LexemeType.EOF, "", self.pos))

    def __iter__(self) -> Iterator[Lexeme]:
        return self._lexemes

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def emit(self, lexeme_type: LexemeType) -> None:
        """Emit the buffer as a lexeme of the given type and start a new buffer."""
        lexeme = Lexeme(lexeme_type, self.buffer, self.start)
        self.last_emitted = lexeme
        self.flush()
        self._items.append(lexeme)

    def emit_synthetic(self, lexeme_type: LexemeType, value: str) -> None:
        """Emit a lexeme that was not read from the input; the buffer is left untouched."""
        lexeme = Lexeme(lexeme_type, value, NO_POSITION)
        self.last_emitted = lexeme
        self._items.append(lexeme)

    def context(self) -> str:
        """Return the last emitted lexeme followed by the text scanned since."""
        return self.last_emitted.value + self.buffer

    # ------------------------------------------------------------------
    # Errors and warnings
    # ------------------------------------------------------------------

    def error(self, message: str) -> None:
        """Emit an error lexeme with position and context; halts the scan."""
        self._items.append(Lexeme(LexemeType.ERROR, self._with_context(message), self.pos))

    def raw_error(self, message: str) -> None:
        """Emit an error lexeme without context; halts the scan."""
        self._items.append(Lexeme(LexemeType.ERROR, message, self.pos))

    def warning(self, message: str) -> StateFn:
        """Emit a warning lexeme with position and context and keep scanning the comment."""
        self._items.append(Lexeme(LexemeType.WARNING, self._with_context(message), self.pos))
        self.flush()
        return lex_comment

    # ------------------------------------------------------------------
    # State stack
    # ------------------------------------------------------------------

    def push(self, state: StateFn) -> None:
        """Push a state to resume once a nested scan has finished."""
        self._stack.append(state)

    def pop(self) -> StateFn | None:
        """Pop the state to resume; an empty stack is a syntax error."""
        if not self._stack:
            return self.error("syntax error")
        return self._stack.pop()

    def empty_stack(self) -> bool:
        """Return True if no state is waiting to be resumed."""
        return not self._stack

    def _with_context(self, message: str) -> str:
        return f"{message} at position: {self.pos}, following {quote(self.context())}"


def tokenize(source: str | TextIO) -> list[Lexeme]:
    """Scan ``source`` to completion and return every lexeme it produced.

    The final lexeme is EOF on success, or ERROR when the scan failed.
    """
    return list(Lexer(source))
