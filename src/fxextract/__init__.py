"""Rewrite f/x extraction literals in C++ sources into formatting calls."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fxextract.options import RewriteOptions

__version__ = "0.1.0"


def rewrite(source: str, options: RewriteOptions | None = None) -> str:
    """Rewrite every f/x literal in *source* and return the new text."""
    from fxextract.rewriter import rewrite as _rewrite

    return _rewrite(source, options)
