"""Token cursor shared by the statement and expression parsers."""

from __future__ import annotations

from typing import Optional, Sequence

from tinycomp.errors import parse_error
from tinycomp.tokens import Token, TokenType

_EOF = Token(TokenType.EOF, "", 0, 0)


class Parser:
    """A cursor over tokens[start:end] of a shared token list."""

    def __init__(
        self,
        tokens: Sequence[Token],
        filename: Optional[str],
        start: int = 0,
        end: Optional[int] = None,
    ) -> None:
        self.tokens = tokens
        self.filename = filename
        self.start = start
        self.end = len(tokens) if end is None else end
        self.current = start

    def current_token(self) -> Token:
        """Return the token at the cursor, or an EOF token past the range."""
        if self.current >= self.end:
            return _EOF
        return self.tokens[self.current]

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Return the token `offset` places ahead, or None past the range."""
        index = self.current + offset
        return self.tokens[index] if index < self.end else None

    def consume(self, expected: TokenType, value: Optional[str] = None) -> Token:
        """Take the current token, raising ParseError if it does not match."""
        tok = self.current_token()
        if tok.type is not expected:
            parse_error(self, expected, tok)
        if value is not None and tok.value != value:
            parse_error(self, expected, tok)
        self.current += 1
        return tok

    def slice(self, start: int, end: int) -> "Parser":
        """Return a parser over tokens[start:end] of the same token list."""
        return Parser(self.tokens, self.filename, start, end)