"""Minimal LSP server for f/x literals in C++ sources: diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from fxextract.errors import EarlyEndError, ExtractError
from fxextract.options import RewriteOptions
from fxextract.rewriter import rewrite

server = LanguageServer("fxextract-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _diagnostic(rng: Range, message: str) -> Diagnostic:
    return Diagnostic(
        range=rng,
        message=message,
        severity=DiagnosticSeverity.Error,
        source="fxextract",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Rewrite the document in memory and publish what went wrong, if anything."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        rewrite(doc.source, RewriteOptions(source_path=filename))
    except EarlyEndError as exc:
        # Point at the end of the document, where the construct ran out.
        lines = doc.source.split("\n")
        end = Position(line=len(lines) - 1, character=len(lines[-1]))
        message = exc.message + " (at end of input)"
        diagnostics.append(_diagnostic(Range(start=end, end=end), message))
    except ExtractError as exc:
        line = max(exc.position.line - 1, 0)
        col = exc.position.column - 1
        rng = Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + 1),
        )
        diagnostics.append(_diagnostic(rng, exc.message))
    except RecursionError:
        origin = Position(line=0, character=0)
        diagnostics.append(_diagnostic(Range(start=origin, end=origin), "nesting too deep"))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
