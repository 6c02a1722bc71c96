"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    SYMBOL = auto()  # [A-Za-z_][A-Za-z0-9_]*
    INTEGER = auto()  # decimal run, or 0x / 0X + hex run
    STRING = auto()  # "...", value is the text between the quotes
    CHAR = auto()  # '...', value is the text between the quotes
    PUNCTUATION = auto()  # 1-3 char operator, maximal munch

    # Layout
    WS = auto()  # intra-line whitespace run (space, tab, VT, CR)
    EOL = auto()  # line break, indentation unchanged
    INDENT = auto()  # line break, deeper indentation, value is the new level
    DEDENT = auto()  # line break, shallower indentation, value is the new level

    INVALID = auto()  # one unrecognised character
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with canonical value and original source text."""

    type: TokenType
    value: str
    raw: str
    span: Span

    @property
    def level(self) -> int:
        """Indentation level carried by an INDENT or DEDENT token."""
        if self.type not in (TokenType.INDENT, TokenType.DEDENT):
            raise ValueError(f"{self.type.name} token has no indentation level")
        return int(self.value)


# Multi-character operators. Every proper prefix of a three-character
# operator is itself an operator, so greedy extension never needs to back up.
OPERATORS = frozenset(
    [
        "!=",
        "##",
        "%=",
        "&&",
        "&=",
        "*=",
        "++",
        "+=",
        "--",
        "-=",
        "->",
        "->*",
        "..",  # accepted here, rejected by any later grammar
        "...",
        "/=",
        "::",
        "<=",
        "<<",
        "<<=",
        "==",
        ">=",
        ">>",
        ">>=",
        "||",
        "|=",
    ]
)

LINE_TERMINATOR = "\n"
COMMENT_LEAD = "#"

# Intra-line whitespace: space, tab, vertical tab, carriage return
_WHITESPACE = frozenset(" \t\v\r")
_PUNCTUATION = frozenset(string.punctuation)
_HEX_DIGITS = frozenset(string.hexdigits)


def is_ident_start(ch: str) -> bool:
    """Return True if ch can begin a symbol."""
    return ch.isascii() and (ch.isalpha() or ch == "_")


def is_ident_char(ch: str) -> bool:
    """Return True if ch can continue a symbol."""
    return ch.isascii() and (ch.isalnum() or ch == "_")


def is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return ch in _HEX_DIGITS


def is_whitespace(ch: str) -> bool:
    """Return True for intra-line whitespace (never the line terminator)."""
    return ch in _WHITESPACE


def is_punctuation(ch: str) -> bool:
    """Return True for any printable ASCII punctuation character."""
    return ch in _PUNCTUATION
