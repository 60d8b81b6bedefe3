"""Pending output for one scanning level."""

from __future__ import annotations

from fxextract.model import is_ident_char


class TextBuffer:
    """Collect output text, holding back the identifier run written last.

    Prefix letters such as ``fR`` or ``u8`` arrive before the quote that
    gives them meaning. Keeping the current identifier run out of the
    committed text lets a scanner claim it as a literal prefix without
    editing anything it has already produced.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._word: list[str] = []

    def put(self, ch: str) -> None:
        """Append one source character."""
        if is_ident_char(ch):
            self._word.append(ch)
        else:
            self.write(ch)

    def write(self, text: str) -> None:
        """Append text that ends any pending identifier run."""
        self._commit_word()
        self._parts.append(text)

    def extend_word(self, ch: str) -> None:
        """Keep *ch* inside the pending run (digit separators in numbers)."""
        self._word.append(ch)

    @property
    def word(self) -> str:
        return "".join(self._word)

    def take_word(self) -> str:
        word = self.word
        self._word.clear()
        return word

    def getvalue(self) -> str:
        self._commit_word()
        return "".join(self._parts)

    def drain(self) -> str:
        """Return everything collected so far and start over."""
        value = self.getvalue()
        self._parts.clear()
        return value

    def _commit_word(self) -> None:
        if self._word:
            self._parts.append("".join(self._word))
            self._word.clear()
