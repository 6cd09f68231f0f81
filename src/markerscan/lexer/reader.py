# Copyright 2026 MarkerScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Buffered rune reader with (line, column) tracking.

The reader is the lowest layer of the lexer.  It hands out one rune (a single
Unicode code point) at a time, keeps the text consumed since the last flush in
a buffer, and tracks the position of the next rune.  Columns advance by the
UTF-8 width of each rune while look-ahead is measured in runes.
"""

import io
from typing import TextIO

from markerscan.lexer.lexeme import EOF, Position

# ###############
# Public Interface
# ###############


class RuneReader:
    """Reads runes from a text stream with look-ahead, backup, and discard.

    Attributes:
        buffer: Runes consumed with ``next`` since the last flush.
        start: Position at which the current buffer starts.
    """

    def __init__(self, source: str | TextIO, chunk_size: int = 4096) -> None:
        self._stream: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self._chunk_size = chunk_size
        self._window = ""
        self._offset = 0
        self._exhausted = False
        self._line = 1
        self._column = 1
        self._line_lengths: dict[int, int] = {}
        self._width = 0
        self.buffer = ""
        self.start = Position(line=1, column=1)

    @property
    def pos(self) -> Position:
        """Position of the next rune to be read."""
        return Position(line=self._line, column=self._column)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def next(self) -> str:
        """Consume one rune into the buffer and return it, or EOF at end of input."""
        if not self._fill(1):
            self._width = 0
            return EOF
        rune = self._window[self._offset]
        self._offset += 1
        self._width = _rune_width(rune)
        self._advance_position(rune)
        self.buffer += rune
        return rune

    def backup(self) -> None:
        """Step back over the rune returned by the last ``next``.

        Can be called only once per call of ``next``; a backup over EOF is a no-op.
        """
        if self._width == 0:
            return
        self._offset -= 1
        if self.buffer:
            self.buffer = self.buffer[:-1]
        self._column -= self._width
        if self._column < 1 and self._line > 1:
            self._line -= 1
            self._column = self._line_lengths[self._line]
        self._width = 0

    def peek(self) -> str:
        """Return the next rune without consuming it."""
        return self.peek_n(1)[0]

    def peek_n(self, n: int) -> list[str]:
        """Return the next ``n`` runes without consuming them, padded with EOF."""
        self._fill(n)
        runes = list(self._window[self._offset : self._offset + n])
        runes.extend([EOF] * (n - len(runes)))
        return runes

    def has_prefix(self, prefix: str) -> bool:
        """Return True if the unread input starts with ``prefix``."""
        self._fill(len(prefix))
        return self._window.startswith(prefix, self._offset)

    def is_empty(self) -> bool:
        """Return True if the input is exhausted."""
        return self.peek() == EOF

    # ------------------------------------------------------------------
    # Look-ahead predicates
    # ------------------------------------------------------------------

    def peeked(self, token: str, *exceptions: str) -> bool:
        """Return True if the input starts with ``token`` not followed by any exception."""
        if not self.has_prefix(token):
            return False
        return not any(self.has_prefix(token + e) for e in exceptions)

    def peeked_one_of(self, *runes: str) -> bool:
        """Return True if the input starts with one of the given runes."""
        return any(self.peeked(r) for r in runes)

    def peeked_whitespaced(self, *tokens: str) -> bool:
        """Return True if, after any whitespace, the input starts with one of ``tokens``."""
        skip = self._whitespace_run()
        if skip is None:
            return False
        self._fill(skip + max((len(t) for t in tokens), default=0))
        return any(self._window.startswith(t, self._offset + skip) for t in tokens)

    # ------------------------------------------------------------------
    # Consuming
    # ------------------------------------------------------------------

    def consume(self, text: str) -> None:
        """Consume as many runes as there are in ``text``."""
        for _ in text:
            self.next()

    def consumed(self, token: str, *exceptions: str) -> bool:
        """Consume ``token`` if the input starts with it and no exception follows it."""
        if self.peeked(token, *exceptions):
            self.consume(token)
            return True
        return False

    def consumed_whitespaced(self, *tokens: str) -> bool:
        """Consume leading whitespace and the first of ``tokens`` that follows it."""
        skip = self._whitespace_run()
        if skip is None:
            return False
        for token in tokens:
            self._fill(skip + len(token))
            if self._window.startswith(token, self._offset + skip):
                self.consume_whitespace()
                self.consume(token)
                return True
        return False

    def consume_whitespace(self) -> None:
        """Consume any leading whitespace into the buffer."""
        while True:
            rune = self.next()
            if not rune.isspace():
                self.backup()
                return

    def consume_until(self, *exceptions: str) -> bool:
        """Consume runes until one of ``exceptions`` or EOF is next.

        The exception and EOF are not consumed.

        Returns:
            True if at least one rune was consumed.
        """
        stops = set(exceptions) | {EOF}
        consumed = False
        while True:
            rune = self.next()
            if rune in stops:
                self.backup()
                return consumed
            consumed = True

    # ------------------------------------------------------------------
    # Discarding
    # ------------------------------------------------------------------

    def discard(self) -> None:
        """Skip one rune without reading it into the buffer."""
        self.discard_n(1)

    def discard_n(self, n: int) -> None:
        """Skip ``n`` runes without reading them into the buffer."""
        for rune in self.peek_n(n):
            if rune == EOF:
                self.flush()
                return
            self._offset += 1
            self._advance_position(rune)
        self._width = 0
        if not self.buffer:
            self.start = self.pos

    def discard_until(self, *tokens: str) -> None:
        """Skip runes until the input starts with one of ``tokens`` or is exhausted."""
        while not any(self.has_prefix(t) for t in tokens):
            if self.is_empty():
                return
            self.discard()

    def strip_whitespace(self) -> None:
        """Skip whitespace without reading it into the buffer."""
        while self.peek().isspace():
            self.discard()

    def flush(self) -> None:
        """Clear the buffer and start a new one at the current position."""
        self.buffer = ""
        self.start = self.pos

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fill(self, n: int) -> bool:
        """Ensure ``n`` unread runes are buffered if the input has them."""
        while len(self._window) - self._offset < n and not self._exhausted:
            chunk = self._stream.read(self._chunk_size)
            if not chunk:
                self._exhausted = True
                break
            # keep one consumed rune so that backup stays possible
            keep = max(self._offset - 1, 0)
            self._window = self._window[keep:] + chunk
            self._offset -= keep
        return len(self._window) - self._offset >= n

    def _whitespace_run(self) -> int | None:
        """Return the number of whitespace runes ahead, or None if only whitespace remains."""
        count = 0
        while True:
            rune = self.peek_n(count + 1)[count]
            if rune == EOF:
                return None
            if not rune.isspace():
                return count
            count += 1

    def _advance_position(self, rune: str) -> None:
        if rune == "\n":
            self._line_lengths[self._line] = self._column
            self._line += 1
            self._column = 1
        else:
            self._column += _rune_width(rune)


# ################
# Implementation
# ################


def _rune_width(rune: str) -> int:
    """Return the number of bytes ``rune`` occupies in UTF-8."""
    return len(rune.encode("utf-8", errors="surrogatepass"))
