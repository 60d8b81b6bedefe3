"""--debug dump of rewritten literals to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from fxextract.model import ExtractedLiteral, Field


def dump_literals(literals: list[ExtractedLiteral], *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable tree of every rewritten literal to *file*."""
    for literal in literals:
        _dump_literal(literal, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_literal(literal: ExtractedLiteral, depth: int, f: TextIO) -> None:
    where = f"{literal.start.line}:{literal.start.column}"
    notes = ""
    if literal.depth:
        notes += f" nested={literal.depth}"
    if literal.in_directive:
        notes += " directive"
    f.write(f"{_indent(depth)}Literal {literal.prefix.kind.name} at {where}{notes}\n")
    f.write(f"{_indent(depth + 1)}Text({literal.text!r})\n")
    for field in literal.fields:
        _dump_field(field, depth + 1, f)


def _dump_field(field: Field, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}Field at {field.start.line}:{field.start.column}\n")
    f.write(f"{_indent(depth + 1)}Argument({field.argument!r})\n")
    if field.label:
        f.write(f"{_indent(depth + 1)}Label({field.label!r})\n")
    if field.format_spec:
        f.write(f"{_indent(depth + 1)}Spec({field.format_spec!r})\n")
    for child in field.nested:
        _dump_field(child, depth + 1, f)
