"""Top-level rewriting loop: pass code through, rewrite f/x literals."""

from __future__ import annotations

import io
from typing import TextIO

from fxextract.buffer import TextBuffer
from fxextract.cursor import Cursor
from fxextract.model import EOF, ExtractedLiteral, is_blank, is_ident_char
from fxextract.options import RewriteOptions
from fxextract.scanner import Scanner

# Directives whose bodies are code that may hold literals. Everything else
# (#include, #error, #line, ...) is copied verbatim.
SCANNED_DIRECTIVES = frozenset({"define", "if", "elif", "pragma"})


class Rewriter:
    """Copy *source* to *sink*, replacing every f/x literal on the way.

    Output is written one logical line at a time, so whatever precedes a
    fatal error has already reached the sink.
    """

    def __init__(
        self, source: TextIO, sink: TextIO, options: RewriteOptions | None = None
    ) -> None:
        self._cursor = Cursor(source)
        self._sink = sink
        self._scanner = Scanner(self._cursor, options or RewriteOptions())

    @property
    def literals(self) -> list[ExtractedLiteral]:
        return self._scanner.literals

    def run(self) -> list[ExtractedLiteral]:
        """Process the whole input and return the rewritten literals."""
        cur = self._cursor
        scanner = self._scanner
        out = TextBuffer()
        at_line_start = True

        while True:
            ch = cur.peek()
            if ch == EOF:
                break

            if ch == "\n":
                out.write(cur.next())
                self._sink.write(out.drain())
                scanner.in_directive = False
                at_line_start = True
                continue

            if is_blank(ch):
                out.write(cur.next())
                continue

            if ch == "#" and at_line_start:
                at_line_start = False
                self._directive(out)
                continue

            at_line_start = False
            if ch == "\\" and scanner.splice(out):
                if scanner.in_directive and cur.peek() == EOF:
                    raise scanner.early_end("input ends with a line ending in \\")
            elif ch == "/" and cur.peek(1) == "/":
                scanner.skip_line_comment(out)
            elif ch == "/" and cur.peek(1) == "*":
                scanner.skip_block_comment(out)
            elif ch == '"' or ch == "'":
                scanner.literal(out, ch)
            else:
                out.put(cur.next())

        self._sink.write(out.drain())
        return scanner.literals

    def _directive(self, out: TextBuffer) -> None:
        """Start a preprocessor directive at the '#' under the cursor.

        Scanned directives only set the directive flag and return to the
        main loop; the rest of the logical line is copied here.
        """
        cur = self._cursor
        scanner = self._scanner
        scanner.in_directive = True
        out.write(cur.next())
        while is_blank(cur.peek()):
            out.write(cur.next())
        name: list[str] = []
        while is_ident_char(cur.peek()):
            name.append(cur.next())
        out.write("".join(name))
        if "".join(name) in SCANNED_DIRECTIVES:
            return

        while True:
            ch = cur.peek()
            if ch == EOF or ch == "\n":
                return
            if ch == "\\" and scanner.splice(out):
                if cur.peek() == EOF:
                    raise scanner.early_end("input ends with a line ending in \\")
            elif ch == "/" and cur.peek(1) == "/":
                scanner.skip_line_comment(out)
            elif ch == "/" and cur.peek(1) == "*":
                scanner.skip_block_comment(out)
            else:
                out.write(cur.next())


def rewrite_stream(
    source: TextIO, sink: TextIO, options: RewriteOptions | None = None
) -> list[ExtractedLiteral]:
    """Convenience function: rewrite one stream into another."""
    return Rewriter(source, sink, options).run()


def rewrite(text: str, options: RewriteOptions | None = None) -> str:
    """Convenience function: rewrite source text and return the result."""
    sink = io.StringIO()
    rewrite_stream(io.StringIO(text), sink, options)
    return sink.getvalue()
