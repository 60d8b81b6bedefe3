"""Build the replacement text for a rewritten extraction literal."""

from __future__ import annotations

from fxextract.model import ExtractedLiteral, LiteralKind, Position
from fxextract.options import RewriteOptions


class OutputAssembler:
    """Turn an ExtractedLiteral into a call expression or argument list."""

    def __init__(self, options: RewriteOptions) -> None:
        self._options = options

    def function_name(self, count: int) -> str:
        """The configured call name, with a trailing '*' replaced by *count*."""
        name = self._options.function_name
        if name.endswith("*"):
            return f"{name[:-1]}{count}"
        return name

    def marker(self, pos: Position) -> str:
        """A #line directive that puts the following text back at *pos*."""
        path = self._options.source_path
        if path:
            escaped = path.replace("\\", "\\\\").replace('"', '\\"')
            directive = f'#line {pos.line} "{escaped}"'
        else:
            directive = f"#line {pos.line}"
        return f"\n{directive}\n" + " " * (pos.column - 1)

    def assemble(self, literal: ExtractedLiteral, markers: bool = False) -> str:
        """Return the text that replaces *literal* in the output.

        With *markers*, the literal and every argument are preceded by a
        #line directive; a closing one follows when the emitted text would
        otherwise leave the compiler's line count behind the source.
        """
        args = literal.arguments
        parts: list[str] = []
        if literal.prefix.kind is LiteralKind.F:
            parts.append(self.function_name(len(args)) + "(")

        if markers:
            parts.append(self.marker(literal.start))
        parts.append(literal.text)
        current_line = literal.start.line + literal.text.count("\n")

        for arg in args:
            parts.append(", ")
            if markers:
                parts.append(self.marker(arg.start))
                current_line = arg.start.line
            parts.append(arg.argument)
            current_line += arg.argument.count("\n")

        if literal.prefix.kind is LiteralKind.F:
            parts.append(")")
        if markers and current_line != literal.end.line:
            parts.append(self.marker(literal.end))
        return "".join(parts)
