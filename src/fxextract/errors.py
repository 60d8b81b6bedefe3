"""Error types raised by the rewriter."""

from __future__ import annotations

from fxextract.model import Position


class ExtractError(Exception):
    """Base for both fatal conditions; processing stops at the first one."""

    def __init__(self, message: str, position: Position, source_line: str = "") -> None:
        self.message = message
        self.position = position
        self.source_line = source_line
        super().__init__(self.format())

    def format(self) -> str:
        return f"Line {self.position.line}: {self.message}"

    def context(self, filename: str = "<input>") -> str:
        """Multi-line rendering with the offending line and a caret."""
        line = self.source_line.rstrip("\n").rstrip("\r")
        col = self.position.column
        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1
        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"
        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {line}\n"
            f"{blank_gutter} {' ' * (col - 1)}^"
        )


class EarlyEndError(ExtractError):
    """Input ended inside a literal, field, comment, or continuation."""

    def format(self) -> str:
        return self.message


class ParsingError(ExtractError):
    """Any other malformed construct, reported with its line number."""
