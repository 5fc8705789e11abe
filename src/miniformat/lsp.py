"""Minimal LSP server for MiniFormat — diagnostics only."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

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

from miniformat import __version__
from miniformat.cli import load_config, palette_overrides
from miniformat.colors import merge_palette
from miniformat.lint import HINT, Issue, check

logger = logging.getLogger(__name__)

server = LanguageServer(
    "miniformat-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _document_palette(path: str | None) -> dict[str, str]:
    """Classic palette plus the [palette] of a miniformat.toml beside the document."""
    if not path:
        return merge_palette({})
    try:
        config = load_config(None, Path(path).parent)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring unreadable config next to %s: %s", path, exc)
        config = {}
    return merge_palette(palette_overrides(config))


def _to_diagnostic(issue: Issue) -> Diagnostic:
    # Spans are 1-based; LSP positions are 0-based
    start = issue.span.start
    end = issue.span.end
    return Diagnostic(
        range=Range(
            start=Position(line=start.line - 1, character=start.column - 1),
            end=Position(line=end.line - 1, character=end.column - 1),
        ),
        message=issue.message,
        severity=DiagnosticSeverity.Hint if issue.severity == HINT else DiagnosticSeverity.Warning,
        source="miniformat",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Check the document markup and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    palette = _document_palette(doc.path)
    diagnostics = [_to_diagnostic(issue) for issue in check(doc.source, palette)]

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
