"""Tests for the --debug literal dump."""

from __future__ import annotations

import io

from fxextract.debug import dump_literals


def _dump(scan, source: str) -> str:
    _, literals = scan(source)
    buf = io.StringIO()
    dump_literals(literals, file=buf)
    return buf.getvalue()


def test_tree_shape(scan) -> None:
    assert _dump(scan, 'f"{v=:>{w}}"') == (
        "Literal F at 1:1\n"
        "  Text('\"v={:>{}}\"')\n"
        "  Field at 1:4\n"
        "    Argument('v')\n"
        "    Label('v=')\n"
        "    Spec(':>{}')\n"
        "    Field at 1:9\n"
        "      Argument('w')\n"
    )


def test_nested_and_directive_notes(scan) -> None:
    text = _dump(scan, '#define A x"{f"{1}"}"\n')
    lines = text.splitlines()
    assert lines[0] == "Literal F at 1:14 nested=1 directive"
    assert "Literal X at 1:11 directive" in lines


def test_empty(scan) -> None:
    assert _dump(scan, "int x;") == ""
