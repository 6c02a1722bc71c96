"""MyPython lexer: converts source text into a flat token stream.

The scan is a single pass over a ``CharSource``. The driver classifies the
current character, hands it to the matching sub-scanner, and continues with
the lookahead character the sub-scanner returns. Nothing is ever re-read.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from mypython.errors import LexError
from mypython.source import EOF_CHAR, CharSource
from mypython.tokens import (
    COMMENT_LEAD,
    LINE_TERMINATOR,
    OPERATORS,
    Position,
    Span,
    Token,
    TokenType,
    is_digit,
    is_hex_digit,
    is_ident_char,
    is_ident_start,
    is_punctuation,
    is_whitespace,
)

# A sub-scanner takes the (already consumed) lead character and its position,
# and returns the finished token plus the next lookahead character.
SubScanner = Callable[[str, Position], tuple[Token, str]]


@dataclass
class IndentState:
    """Leading whitespace count of the most recently measured line."""

    current: int = 0


def measure_indent(state: IndentState, count: int) -> TokenType:
    """Compare a line's indentation with the previous one and update state.

    Only the immediately preceding level is remembered, so a dedent across
    several levels still yields a single DEDENT.
    """
    if count > state.current:
        state.current = count
        return TokenType.INDENT
    if count < state.current:
        state.current = count
        return TokenType.DEDENT
    return TokenType.EOL


class Lexer:
    """Tokenize MyPython source text into a stream of Token objects."""

    def __init__(self, source: str, filename: str = "input.py") -> None:
        self._source = source
        self._filename = filename
        self._chars = CharSource(source)
        self._tokens: list[Token] = []
        self._indent = IndentState()

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list.

        Raises LexError on an unterminated string or char literal; in that case
        no tokens are returned.
        """
        ch = self._chars.next()
        while ch != EOF_CHAR:
            start = self._chars.last_position
            scan = self._classify(ch)
            token, ch = scan(ch, start)
            self._tokens.append(token)

        end = self._chars.position
        self._tokens.append(Token(TokenType.EOF, "", "", Span(end, end)))
        return self._tokens

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _make(self, tt: TokenType, value: str, start: Position) -> Token:
        # The lookahead has already been consumed, so its position is where
        # this token ends.
        end = self._chars.last_position
        return Token(tt, value, self._chars.slice(start, end), Span(start, end))

    def _error(self, message: str, pos: Position) -> LexError:
        return LexError(message, pos, self._source, self._filename)

    # ------------------------------------------------------------------
    # Classification (first match wins)
    # ------------------------------------------------------------------

    def _classify(self, ch: str) -> SubScanner:
        if ch == COMMENT_LEAD:
            return self._scan_comment
        if is_ident_start(ch):
            return self._scan_symbol
        if ch == LINE_TERMINATOR:
            return self._scan_line_break
        if is_whitespace(ch):
            return self._scan_whitespace
        if ch == '"':
            return self._scan_string
        if ch == "'":
            return self._scan_char
        if is_digit(ch):
            return self._scan_integer
        if is_punctuation(ch):
            return self._scan_punctuation
        return self._scan_invalid

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _scan_comment(self, lead: str, start: Position) -> tuple[Token, str]:
        """Discard a # comment together with its line terminator.

        The whole comment collapses into one EOL token. The following line's
        indentation is not measured.
        """
        while self._chars.peek() not in (LINE_TERMINATOR, EOF_CHAR):
            self._chars.next()
        if self._chars.peek() == LINE_TERMINATOR:
            self._chars.next()
        ch = self._chars.next()
        return self._make(TokenType.EOL, "\n", start), ch

    # ------------------------------------------------------------------
    # Symbols and integers
    # ------------------------------------------------------------------

    def _scan_symbol(self, lead: str, start: Position) -> tuple[Token, str]:
        chars = [lead]
        while is_ident_char(self._chars.peek()):
            chars.append(self._chars.next())
        ch = self._chars.next()
        return self._make(TokenType.SYMBOL, "".join(chars), start), ch

    def _scan_integer(self, lead: str, start: Position) -> tuple[Token, str]:
        chars = [lead]
        if lead == "0" and self._chars.peek() in ("x", "X"):
            chars.append(self._chars.next())
            while is_hex_digit(self._chars.peek()):
                chars.append(self._chars.next())
        else:
            while is_digit(self._chars.peek()):
                chars.append(self._chars.next())
        ch = self._chars.next()
        return self._make(TokenType.INTEGER, "".join(chars), start), ch

    # ------------------------------------------------------------------
    # Quoted literals
    # ------------------------------------------------------------------

    def _scan_string(self, lead: str, start: Position) -> tuple[Token, str]:
        return self._scan_quoted('"', TokenType.STRING, "literal", start)

    def _scan_char(self, lead: str, start: Position) -> tuple[Token, str]:
        return self._scan_quoted("'", TokenType.CHAR, "constant literal", start)

    def _scan_quoted(
        self, quote: str, tt: TokenType, kind: str, start: Position
    ) -> tuple[Token, str]:
        """Scan up to the closing quote; escapes are kept verbatim in the value.

        A backslash protects the character after it from ending the literal,
        but both characters are copied as-is (no \\n or \\t translation).
        """
        chars = []
        while True:
            ch = self._chars.next()
            if ch == "\\":
                escaped = self._chars.peek()
                if escaped in (LINE_TERMINATOR, EOF_CHAR):
                    raise self._unterminated(escaped, kind, start)
                chars.append(ch)
                chars.append(self._chars.next())
                continue
            if ch == quote:
                break
            if ch in (LINE_TERMINATOR, EOF_CHAR):
                raise self._unterminated(ch, kind, start)
            chars.append(ch)
        ch = self._chars.next()
        return self._make(tt, "".join(chars), start), ch

    def _unterminated(self, ch: str, kind: str, start: Position) -> LexError:
        where = "EOF" if ch == EOF_CHAR else "EOL"
        return self._error(f"{where} encountered before closing {kind} quotes", start)

    # ------------------------------------------------------------------
    # Punctuation (maximal munch)
    # ------------------------------------------------------------------

    def _scan_punctuation(self, lead: str, start: Position) -> tuple[Token, str]:
        lexeme = lead
        while self._chars.peek() and lexeme + self._chars.peek() in OPERATORS:
            lexeme += self._chars.next()
        ch = self._chars.next()
        return self._make(TokenType.PUNCTUATION, lexeme, start), ch

    # ------------------------------------------------------------------
    # Whitespace and line structure
    # ------------------------------------------------------------------

    def _scan_whitespace(self, lead: str, start: Position) -> tuple[Token, str]:
        while is_whitespace(self._chars.peek()):
            self._chars.next()
        ch = self._chars.next()
        return self._make(TokenType.WS, " ", start), ch

    def _scan_line_break(self, lead: str, start: Position) -> tuple[Token, str]:
        """Measure the next line's leading whitespace and emit one layout token.

        Counting stops before the next line terminator, so a blank line is
        measured as its own line when that terminator is scanned.
        """
        count = 0
        while is_whitespace(self._chars.peek()):
            self._chars.next()
            count += 1
        ch = self._chars.next()
        tt = measure_indent(self._indent, count)
        value = "\n" if tt == TokenType.EOL else str(count)
        return self._make(tt, value, start), ch

    # ------------------------------------------------------------------
    # Anything else
    # ------------------------------------------------------------------

    def _scan_invalid(self, lead: str, start: Position) -> tuple[Token, str]:
        ch = self._chars.next()
        return self._make(TokenType.INVALID, lead, start), ch


def tokenize(source: str, filename: str = "input.py") -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, filename).tokenize()
