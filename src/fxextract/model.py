"""Literal descriptors, extraction fields, and character classification helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

EOF = "\0"


class LiteralKind(Enum):
    PLAIN = auto()  # ordinary literal, copied verbatim
    F = auto()  # f"..." → name("...", args)
    X = auto()  # x"..." → "...", args


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class LiteralPrefix:
    """What the letters in front of a quote say about the literal."""

    kind: LiteralKind
    encoding: str
    raw: bool
    terminator: str

    @property
    def text(self) -> str:
        """Prefix kept on the rewritten literal: encoding, then R."""
        return self.encoding + ("R" if self.raw else "")

    @property
    def extracting(self) -> bool:
        return self.kind is not LiteralKind.PLAIN


@dataclass(frozen=True, slots=True)
class Field:
    """One ``{expression[:spec]}`` span of an extraction literal."""

    start: Position
    expression: str  # text between '{' and the ending ':' or '}'
    argument: str  # text passed to the formatting call
    label: str = ""  # debug label as spelled before the placeholder
    format_spec: str = ""  # rewritten spec including its ':', or empty
    nested: tuple[Field, ...] = ()  # fields inside the format spec

    @property
    def placeholder(self) -> str:
        return self.label + "{" + self.format_spec + "}"


@dataclass(frozen=True, slots=True)
class ExtractedLiteral:
    """A rewritten f/x literal and the fields pulled out of it."""

    prefix: LiteralPrefix
    start: Position
    end: Position
    text: str  # rewritten literal, prefix and quotes included
    fields: tuple[Field, ...]
    depth: int = 0  # 0 for literals found outside any field
    in_directive: bool = False

    @property
    def arguments(self) -> list[Field]:
        """Fields in call-argument order: each field, then its nested ones."""
        ordered: list[Field] = []
        for f in self.fields:
            ordered.append(f)
            ordered.extend(f.nested)
        return ordered


# Encoding prefixes may sit on either side of the f/x letter: fu8"..." or u8f"...".
_STRING_PREFIX = re.compile(
    r"(?P<lead>[fFxX])?(?P<encoding>u8|[uUL])?(?P<trail>[fFxX])?(?P<raw>R)?"
)
_CHAR_PREFIX = re.compile(r"(?P<encoding>u8|[uUL])?")


def classify_prefix(word: str, terminator: str) -> LiteralPrefix | None:
    """Classify the identifier run *word* that ends right before a quote.

    Returns None when the run is not a literal prefix (an ordinary
    identifier or number that happens to touch the quote).
    """
    if terminator == "'":
        m = _CHAR_PREFIX.fullmatch(word)
        if m is None:
            return None
        return LiteralPrefix(LiteralKind.PLAIN, m["encoding"] or "", False, terminator)

    m = _STRING_PREFIX.fullmatch(word)
    if m is None or (m["lead"] and m["trail"]):
        return None
    letter = (m["lead"] or m["trail"] or "").lower()
    if letter == "f":
        kind = LiteralKind.F
    elif letter == "x":
        kind = LiteralKind.X
    else:
        kind = LiteralKind.PLAIN
    return LiteralPrefix(kind, m["encoding"] or "", m["raw"] is not None, terminator)


def split_debug_label(expression: str) -> tuple[str, str]:
    """Return (label, argument) for a field expression.

    A field whose expression ends in '=' (ignoring trailing whitespace)
    keeps its whole text as a label; the argument loses the '=' and the
    whitespace around it at the end.
    """
    stripped = expression.rstrip()
    if not stripped.endswith("="):
        return "", expression
    return expression, stripped[:-1].rstrip()


_SPLICE = re.compile(r"\\[ \t\r\f\v]*\n")


def escape_label(label: str, raw: bool) -> str:
    """Return *label* as it must be spelled inside the rewritten literal.

    Braces are doubled so the label never reads as a placeholder. In a
    non-raw literal, line splices are dropped and backslashes and double
    quotes are escaped.
    """
    text = label.replace("{", "{{").replace("}", "}}")
    if raw:
        return text
    text = _SPLICE.sub("", text)
    return text.replace("\\", "\\\\").replace('"', '\\"')


def is_ident_char(ch: str) -> bool:
    """Return True if ch can be part of an identifier or pp-number."""
    return ch == "_" or (ch.isascii() and ch.isalnum())


def is_blank(ch: str) -> bool:
    """Horizontal whitespace, including the CR of a CRLF line ending."""
    return ch in " \t\r\f\v"


CLOSERS = {"(": ")", "[": "]", "{": "}"}
OPENERS = {v: k for k, v in CLOSERS.items()}
