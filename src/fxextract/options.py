"""Rewrite configuration supplied by the caller."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_FUNCTION_NAME = "std::format"


@dataclass(frozen=True, slots=True)
class RewriteOptions:
    """How rewritten literals are emitted.

    ``function_name`` wraps f literals; a trailing ``*`` is replaced by the
    number of extracted arguments. ``source_path`` only appears inside
    location markers.
    """

    function_name: str = DEFAULT_FUNCTION_NAME
    line_markers: bool = False
    source_path: str = ""
