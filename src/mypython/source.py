"""Sequential character source with one character of lookahead."""

from __future__ import annotations

from mypython.tokens import Position

EOF_CHAR = ""


class CharSource:
    """Hand out the characters of a text one at a time, tracking positions.

    ``peek()`` looks at the next character without consuming it and ``next()``
    consumes it. Both return ``EOF_CHAR`` once the text is exhausted, as often
    as they are called. There is no rewind.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._line = 1
        self._col = 1
        self._last = Position(1, 1, 0)

    @property
    def position(self) -> Position:
        """Position of the next unread character."""
        return Position(self._line, self._col, self._pos)

    @property
    def last_position(self) -> Position:
        """Position of the character most recently returned by next()."""
        return self._last

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._text)

    def peek(self) -> str:
        if self._pos < len(self._text):
            return self._text[self._pos]
        return EOF_CHAR

    def next(self) -> str:
        self._last = self.position
        if self._pos >= len(self._text):
            return EOF_CHAR
        ch = self._text[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def slice(self, start: Position, end: Position) -> str:
        """Return the source text between two positions."""
        return self._text[start.offset : end.offset]
