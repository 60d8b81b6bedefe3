"""Line-buffered character source shared by every scanning level."""

from __future__ import annotations

from typing import TextIO

from fxextract.errors import ParsingError
from fxextract.model import EOF, Position


class Cursor:
    """Read a text stream one line at a time and hand it out character-wise.

    Lines keep their own '\\n', so the end of a line is an ordinary
    character; EOF is returned once the stream is exhausted and is never
    consumed.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._text = ""
        self._pos = 0
        self._line = 0
        self._exhausted = False

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._pos + 1

    @property
    def position(self) -> Position:
        return Position(self._line, self._pos + 1)

    @property
    def text(self) -> str:
        """The currently loaded physical line."""
        return self._text

    def peek(self, offset: int = 0) -> str:
        """Look ahead *offset* characters on the current line."""
        idx = self._pos + offset
        if idx < len(self._text):
            return self._text[idx]
        if offset == 0 and self._refill():
            return self._text[0]
        return EOF

    def next(self) -> str:
        ch = self.peek()
        if ch != EOF:
            self._pos += 1
        return ch

    def startswith(self, text: str) -> bool:
        return all(self.peek(i) == ch for i, ch in enumerate(text))

    def take(self, count: int) -> str:
        """Consume *count* characters from the current line."""
        return "".join(self.next() for _ in range(count))

    def _refill(self) -> bool:
        if self._exhausted:
            return False
        text = self._stream.readline()
        if not text:
            self._exhausted = True
            return False
        self._text = text
        self._pos = 0
        self._line += 1
        nul = text.find("\0")
        if nul >= 0:
            raise ParsingError("NUL character in source", Position(self._line, nul + 1), text)
        return True
