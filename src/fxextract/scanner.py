"""Comment, literal, field, and format-spec recognizers over a shared Cursor."""

from __future__ import annotations

from fxextract.assembler import OutputAssembler
from fxextract.buffer import TextBuffer
from fxextract.cursor import Cursor
from fxextract.errors import EarlyEndError, ParsingError
from fxextract.model import (
    CLOSERS,
    EOF,
    OPENERS,
    ExtractedLiteral,
    Field,
    LiteralKind,
    LiteralPrefix,
    Position,
    classify_prefix,
    escape_label,
    is_blank,
    split_debug_label,
)
from fxextract.options import RewriteOptions


class Scanner:
    """Scan the constructs that may hide braces, quotes, or colons.

    Every method reads from the same Cursor, so a line refill in a nested
    literal is invisible to the field or literal that contains it. Each
    method writes into a TextBuffer owned by its caller, or builds its
    own and returns the result.
    """

    def __init__(self, cursor: Cursor, options: RewriteOptions) -> None:
        self.cursor = cursor
        self.options = options
        self.assembler = OutputAssembler(options)
        self.in_directive = False
        self.depth = 0  # expression fields currently open
        self.literals: list[ExtractedLiteral] = []

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def error(self, message: str, pos: Position | None = None) -> ParsingError:
        if pos is None:
            pos = self.cursor.position
        return ParsingError(message, pos, self.cursor.text)

    def early_end(self, message: str) -> EarlyEndError:
        return EarlyEndError(message, self.cursor.position, self.cursor.text)

    # ------------------------------------------------------------------
    # Line splices
    # ------------------------------------------------------------------

    def splice(self, out: TextBuffer) -> bool:
        """Copy a backslash that ends its line, plus the line end, to *out*.

        Blanks between the backslash and the end of line are tolerated.
        A backslash followed only by blanks at the end of input counts as
        a splice too; callers decide whether running out there is fatal.
        Returns False, consuming nothing, for any other backslash.
        """
        cur = self.cursor
        i = 1
        while is_blank(cur.peek(i)):
            i += 1
        if cur.peek(i) == "\n":
            i += 1
        elif cur.peek(i) != EOF:
            return False
        out.write(cur.take(i))
        return True

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def skip_line_comment(self, out: TextBuffer) -> None:
        """Copy a // comment, and its spliced lines, up to its end of line."""
        cur = self.cursor
        out.write(cur.take(2))
        while True:
            ch = cur.peek()
            if ch == EOF or ch == "\n":
                return
            if ch == "\\" and self.splice(out):
                if cur.peek() == EOF:
                    raise self.early_end("input ends with a line ending in \\ inside a // comment")
                continue
            out.write(cur.next())

    def skip_block_comment(self, out: TextBuffer, multiline: bool = True) -> None:
        """Copy a /* */ comment.

        With *multiline* False (inside a field of a non-raw literal) only a
        spliced line end may occur before the comment closes.
        """
        cur = self.cursor
        out.write(cur.take(2))
        while not cur.startswith("*/"):
            ch = cur.peek()
            if ch == EOF:
                raise self.early_end("unterminated block comment")
            if not multiline:
                if ch == "\\" and self.splice(out):
                    continue
                if ch == "\n":
                    raise self.error("end of line inside a comment in an expression field")
            out.write(cur.next())
        out.write(cur.take(2))

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def literal(self, out: TextBuffer, quote: str) -> None:
        """Handle the quote at the cursor, writing the literal's replacement to *out*.

        The identifier run held back in *out* decides the prefix. A quote
        following a pp-number is a digit separator and stays in the run.
        """
        cur = self.cursor
        word = out.word
        if quote == "'" and word[:1].isdigit():
            out.extend_word(cur.next())
            return

        prefix = classify_prefix(word, quote)
        if prefix is None:
            prefix = LiteralPrefix(LiteralKind.PLAIN, "", False, quote)
            start = cur.position
        else:
            out.take_word()
            start = Position(cur.line, cur.column - len(word))
        out.write(self.scan_literal(prefix, start))

    def scan_literal(self, prefix: LiteralPrefix, start: Position) -> str:
        """Consume the literal whose opening quote is at the cursor.

        Plain literals come back verbatim; f/x literals come back as the
        assembled call or argument list.
        """
        cur = self.cursor
        out = TextBuffer()
        out.write(prefix.text + cur.next())
        fields: list[Field] = []

        if prefix.raw:
            delimiter = self._raw_delimiter()
            out.write(delimiter + "(")
            closing = ")" + delimiter + prefix.terminator
        else:
            closing = prefix.terminator

        while True:
            ch = cur.peek()
            if prefix.raw:
                if ch == EOF:
                    raise self.early_end("input ends inside a raw string literal")
                if ch == ")" and cur.startswith(closing):
                    out.write(cur.take(len(closing)))
                    break
            else:
                if ch == prefix.terminator:
                    out.write(cur.next())
                    break
                if ch == "\\":
                    self._escape(out)
                    continue
                if ch == "\n":
                    raise self.error("end of line inside a string literal")
                if ch == EOF:
                    raise self.early_end("input ends inside a string literal")

            if prefix.extracting and ch == "{":
                cur.next()
                if cur.peek() == "{":
                    cur.next()
                    out.write("{")
                else:
                    f = self._field(prefix, closing)
                    fields.append(f)
                    out.write(f.placeholder)
            elif prefix.extracting and ch == "}":
                pos = cur.position
                cur.next()
                if cur.peek() != "}":
                    raise self.error("single '}' in an extraction literal, write '}}' for a brace", pos)
                cur.next()
                out.write("}")
            else:
                out.write(cur.next())

        text = out.getvalue()
        if not prefix.extracting:
            return text

        literal = ExtractedLiteral(
            prefix, start, cur.position, text, tuple(fields), self.depth, self.in_directive
        )
        self.literals.append(literal)
        markers = self.options.line_markers and self.depth == 0 and not self.in_directive
        return self.assembler.assemble(literal, markers)

    def _raw_delimiter(self) -> str:
        """Read the delimiter between R" and '(' and consume the '('."""
        cur = self.cursor
        chars: list[str] = []
        while True:
            ch = cur.peek()
            if ch == "(":
                break
            if ch == EOF:
                raise self.early_end('no "(" before end of line after R"')
            if ch == "\n":
                raise self.error('no "(" before end of line after R"')
            if ch in ")\\" or is_blank(ch):
                raise self.error(f"invalid character {ch!r} in raw string delimiter")
            chars.append(cur.next())
        cur.next()
        return "".join(chars)

    def _escape(self, out: TextBuffer) -> None:
        """Copy a backslash and the character it escapes, or a line splice."""
        if not self.splice(out):
            out.write(self.cursor.take(2))

    # ------------------------------------------------------------------
    # Expression fields
    # ------------------------------------------------------------------

    def _field(self, prefix: LiteralPrefix, closing: str, in_spec: bool = False) -> Field:
        """Parse the field whose '{' was just consumed, including its closing '}'."""
        cur = self.cursor
        start = cur.position
        expression = self._expression(prefix.raw)
        label, argument = split_debug_label(expression)
        if not argument.strip():
            raise self.error("empty expression field", start)

        if in_spec:
            if cur.peek() == ":":
                raise self.error("nested field may not itself end in a format-spec")
            if label:
                raise self.error("nested field may not carry a debug label", start)
            cur.next()
            return Field(start, expression, argument)

        spec = ""
        nested: tuple[Field, ...] = ()
        if cur.peek() == ":":
            spec, nested = self._format_spec(prefix, closing)
        cur.next()
        return Field(start, expression, argument, escape_label(label, prefix.raw), spec, nested)

    def _expression(self, raw: bool) -> str:
        """Collect a field's expression, stopping at its top-level ':' or '}'."""
        cur = self.cursor
        out = TextBuffer()
        closers: list[str] = []
        ternaries = 0
        self.depth += 1

        while True:
            ch = cur.peek()
            if closers and ch == closers[-1]:
                closers.pop()
                out.put(cur.next())
                continue
            if ch in ")]}":
                if closers:
                    raise self.error(f"'{OPENERS[closers[-1]]}' closed by '{ch}' in expression field")
                if ch != "}":
                    raise self.error(f"unmatched '{ch}' in expression field")
                if ternaries:
                    raise self.error("'?' without matching ':' in expression field")
                break
            if ch in CLOSERS:
                closers.append(CLOSERS[ch])
                out.put(cur.next())
                continue
            if ch == "?":
                if not closers:
                    ternaries += 1
                out.put(cur.next())
                continue
            if ch == ":":
                # '::' is always scope resolution, even where it could be a ':' fill.
                if cur.peek(1) == ":":
                    out.write(cur.take(2))
                    continue
                if not closers:
                    if not ternaries:
                        break
                    ternaries -= 1
                out.put(cur.next())
                continue

            if ch == '"' or ch == "'":
                self.literal(out, ch)
            elif ch == "/" and cur.peek(1) == "*":
                self.skip_block_comment(out, multiline=raw)
            elif ch == "/" and cur.peek(1) == "/":
                self.skip_line_comment(out)
            elif ch == "\\" and not raw:
                self._escape(out)
            elif ch == "\n" and not raw:
                raise self.error("end of line inside an expression field")
            elif ch == EOF:
                raise self.early_end("input ends inside an expression field")
            else:
                out.put(cur.next())

        self.depth -= 1
        return out.getvalue()

    # ------------------------------------------------------------------
    # Format specifications
    # ------------------------------------------------------------------

    def _format_spec(self, prefix: LiteralPrefix, closing: str) -> tuple[str, tuple[Field, ...]]:
        """Copy the spec after a field's ':' up to, not including, its '}'."""
        cur = self.cursor
        out = TextBuffer()
        out.write(cur.next())
        nested: list[Field] = []

        while True:
            ch = cur.peek()
            if ch == "}":
                break
            if ch == EOF:
                raise self.early_end("input ends inside a format specification")
            if ch == "{":
                cur.next()
                nested.append(self._field(prefix, closing, in_spec=True))
                out.write("{}")
                continue
            if not prefix.raw:
                if ch == "\\":
                    self._escape(out)
                    continue
                if ch == "\n":
                    raise self.error("end of line inside a format specification")
            if cur.startswith(closing):
                raise self.error("literal ends inside a format specification")
            out.write(cur.next())

        return out.getvalue(), tuple(nested)
