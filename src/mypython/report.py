"""Token stream reporter: renders tokens as text lines or JSON."""

from __future__ import annotations

import json

from mypython.tokens import Token, TokenType

# Label used in the text form for tokens that carry a value
_LABELS = {
    TokenType.SYMBOL: "symbol",
    TokenType.INTEGER: "integer",
    TokenType.STRING: "literal",
    TokenType.CHAR: "constant literal",
    TokenType.PUNCTUATION: "punctuation",
}


def format_token(token: Token) -> str:
    """Render one token as a single ``TOKEN[...]`` line (no newline)."""
    tt = token.type
    if tt == TokenType.INTEGER:
        return f'TOKEN["integer", {token.value}]'
    if tt in _LABELS:
        return f'TOKEN["{_LABELS[tt]}", "{token.value}"]'
    if tt == TokenType.WS:
        return 'TOKEN["whitespace", " "]'
    if tt == TokenType.EOL:
        return 'TOKEN["EOL"]'
    if tt in (TokenType.INDENT, TokenType.DEDENT):
        return f'TOKEN["{tt.name}": {token.level}]'
    if tt == TokenType.EOF:
        return 'TOKEN["EOF"]'
    # INVALID: the character code follows the tag directly
    return f'TOKEN["INVALID"{ord(token.value)}'


def _visible(tokens: list[Token], whitespace: bool) -> list[Token]:
    if whitespace:
        return tokens
    return [t for t in tokens if t.type != TokenType.WS]


def render(tokens: list[Token], *, whitespace: bool = True) -> str:
    """Render a token stream, one line per token, in stream order."""
    return "".join(format_token(t) + "\n" for t in _visible(tokens, whitespace))


def render_json(tokens: list[Token], *, whitespace: bool = True) -> str:
    """Render a token stream as a JSON array of token objects."""
    payload = [
        {
            "type": t.type.name.lower(),
            "value": t.value,
            "line": t.span.start.line,
            "column": t.span.start.column,
        }
        for t in _visible(tokens, whitespace)
    ]
    return json.dumps(payload, indent=2) + "\n"
