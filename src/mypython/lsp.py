"""Minimal LSP server for MyPython: lexical diagnostics only."""

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

from mypython import __version__
from mypython.errors import LexError
from mypython.lexer import tokenize
from mypython.tokens import Span, Token, TokenType

server = LanguageServer(
    "mypython-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _range(span: Span) -> Range:
    # 1-based token positions -> 0-based LSP positions
    return Range(
        start=Position(line=span.start.line - 1, character=span.start.column - 1),
        end=Position(line=span.end.line - 1, character=span.end.column - 1),
    )


def _token_diagnostics(tokens: list[Token]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for tok in tokens:
        if tok.type == TokenType.INVALID:
            diagnostics.append(
                Diagnostic(
                    range=_range(tok.span),
                    message=f"invalid character U+{ord(tok.value):04X}",
                    severity=DiagnosticSeverity.Warning,
                    source="mypython",
                )
            )
        elif tok.type == TokenType.PUNCTUATION and tok.value == "..":
            diagnostics.append(
                Diagnostic(
                    range=_range(tok.span),
                    message="'..' is not a valid operator",
                    severity=DiagnosticSeverity.Information,
                    source="mypython",
                )
            )
    return diagnostics


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        tokens = tokenize(source, filename)
    except LexError as exc:
        line = exc.position.line - 1
        col = exc.position.column - 1
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="mypython",
            )
        )
    else:
        diagnostics.extend(_token_diagnostics(tokens))

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
