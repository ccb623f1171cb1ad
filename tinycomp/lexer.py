"""Regular-expression driven lexer."""

from __future__ import annotations

import re
from typing import Iterator

from tinycomp.tokens import Token, TokenType

_KEYWORDS = {
    "def": TokenType.DEFINE,
    "fn": TokenType.FUNCTION,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
    "while": TokenType.WHILE,
}

_DELIMITER = re.compile(r"[ \t\r\n]+")

# Tried in order; the first rule that matches at the cursor wins.
_RULES = [
    (re.compile(r"[(]"), TokenType.PAREN_OPEN),
    (re.compile(r"[)]"), TokenType.PAREN_CLOSE),
    (re.compile(r"[{]"), TokenType.BRACE_OPEN),
    (re.compile(r"[,]"), TokenType.COMMA),
    (re.compile(r"[}]"), TokenType.BRACE_CLOSE),
    (re.compile(r"==|!=|<=|>=|<|>"), TokenType.OPERATOR),
    (re.compile(r"&&|\|\|"), TokenType.LOGICAL),
    (re.compile(r"[A-Za-z_][A-Za-z0-9_]*"), TokenType.IDENTIFIER),
    (re.compile(r"[0-9]+"), TokenType.NUMBER),
    (re.compile(r"[=!+*/\-]"), TokenType.OPERATOR),
    (re.compile(r"[;]"), TokenType.END_OF_LINE),
]


class Lexer:
    """Splits source text into tokens, tracking line and column."""

    def __init__(self, source: str) -> None:
        # Text after a NUL character is never read.
        self.source = source.split("\0", 1)[0]
        self.pos = 0
        self.line = 1
        self.column = 1

    def _advance(self, count: int) -> None:
        for ch in self.source[self.pos:self.pos + count]:
            if ch == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += count

    def _eof(self) -> Token:
        return Token(TokenType.EOF, "", self.line, self.column)

    def next_token(self) -> Token:
        """Return the next token; EOF once the input is exhausted."""
        match = _DELIMITER.match(self.source, self.pos)
        if match:
            self._advance(match.end() - self.pos)
        if self.pos >= len(self.source):
            return self._eof()

        for pattern, token_type in _RULES:
            match = pattern.match(self.source, self.pos)
            if match:
                text = match.group()
                if token_type is TokenType.IDENTIFIER:
                    token_type = _KEYWORDS.get(text, TokenType.IDENTIFIER)
                tok = Token(token_type, text, self.line, self.column)
                self._advance(len(text))
                return tok

        tok = Token(TokenType.UNKNOWN, self.source[self.pos], self.line, self.column)
        self._advance(1)
        return tok

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the EOF token."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type is TokenType.EOF:
                return


def tokenize(source: str) -> list[Token]:
    """Lex the whole source; the list ends with an EOF token."""
    return list(Lexer(source))