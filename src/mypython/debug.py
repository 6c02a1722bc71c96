"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from mypython.tokens import Span, Token


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print each token with its source span to *file*."""
    for tok in tokens:
        file.write(f"{_span(tok.span):<16}{tok.type.name:<12}{tok.value!r}\n")


def _span(span: Span) -> str:
    start, end = span.start, span.end
    return f"{start.line}:{start.column}-{end.line}:{end.column}"
