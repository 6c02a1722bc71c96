"""MyPython reference lexer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mypython.tokens import Token

__version__ = "0.1.0"


def tokenize(source: str, filename: str = "input.py") -> list[Token]:
    """Scan MyPython source into a token stream ending in EOF."""
    from mypython.lexer import tokenize as _tokenize

    return _tokenize(source, filename)


def render(tokens: list[Token]) -> str:
    """Render a token stream as ``TOKEN[...]`` lines."""
    from mypython.report import render as _render

    return _render(tokens)
