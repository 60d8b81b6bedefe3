"""Shared test fixtures and helpers."""

from __future__ import annotations

import io

import pytest

from fxextract.model import ExtractedLiteral
from fxextract.options import RewriteOptions
from fxextract.rewriter import rewrite, rewrite_stream


@pytest.fixture
def rx():
    """Return a helper that rewrites source text and returns the output."""

    def _rx(source: str, **kwargs) -> str:
        return rewrite(source, RewriteOptions(**kwargs))

    return _rx


@pytest.fixture
def scan():
    """Return a helper that rewrites source and returns (output, literals)."""

    def _scan(source: str, **kwargs) -> tuple[str, list[ExtractedLiteral]]:
        sink = io.StringIO()
        literals = rewrite_stream(io.StringIO(source), sink, RewriteOptions(**kwargs))
        return sink.getvalue(), literals

    return _scan


def count_placeholders(literal_text: str) -> int:
    """Count placeholder openings in a literal written without brace escapes."""
    return literal_text.count("{")


def assert_passthrough(rx, source: str) -> None:
    """Assert that source without f/x literals comes back unchanged."""
    output = rx(source)
    assert output == source, f"Expected {source!r}, got {output!r}"
