"""Token types, the token record and helpers to display and dump tokens."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, TextIO


class TokenType(Enum):
    """Kinds of lexemes produced by the lexer."""

    DEFINE = auto()
    FUNCTION = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()
    OPERATOR = auto()
    COMPARISON = auto()
    LOGICAL = auto()
    PAREN_OPEN = auto()
    PAREN_CLOSE = auto()
    BRACE_OPEN = auto()
    BRACE_CLOSE = auto()
    COMMA = auto()
    UNKNOWN = auto()
    EOF = auto()
    END_OF_LINE = auto()
    WHILE = auto()


_TYPE_NAMES = {
    TokenType.DEFINE: "DEFINE",
    TokenType.FUNCTION: "FUNCTION",
    TokenType.IF: "IF",
    TokenType.ELSE: "ELSE",
    TokenType.RETURN: "RETURN",
    TokenType.IDENTIFIER: "IDENTIFIER",
    TokenType.NUMBER: "NUMBER",
    TokenType.STRING: "STRING",
    TokenType.OPERATOR: "OPERATOR",
    TokenType.COMPARISON: "COMPARISON",
    TokenType.LOGICAL: "LOGICAL",
    TokenType.PAREN_OPEN: "PAREN_OPEN",
    TokenType.PAREN_CLOSE: "PAREN_CLOSE",
    TokenType.BRACE_OPEN: "BRACE_OPEN",
    TokenType.BRACE_CLOSE: "BRACE_CLOSE",
    TokenType.UNKNOWN: "UNKNOWN",
    TokenType.EOF: "EOF",
    TokenType.END_OF_LINE: "EOL",
    TokenType.WHILE: "WHILE",
}

_COLOR_RESET = "\x1b[0m"
_COLOR_TYPE = "\x1b[1;34m"
_COLOR_VALUE = "\x1b[0;32m"
_COLOR_POS = "\x1b[0;37m"


@dataclass(frozen=True)
class Token:
    """A lexeme with its kind and 1-based source position."""

    type: TokenType
    value: str
    line: int
    column: int


def token_type_to_string(token_type: TokenType) -> str:
    """Return the display name of a token type, or "<?>" if it has none."""
    return _TYPE_NAMES.get(token_type, "<?>")


def format_token(tok: Token) -> str:
    """Render a token as `<TYPE: "value"> at line:column`."""
    return f'<{token_type_to_string(tok.type)}: "{tok.value}"> at {tok.line}:{tok.column}'


def format_token_colored(tok: Token) -> str:
    """Render a token with ANSI colours for the terminal."""
    return (
        f"{_COLOR_TYPE}<{token_type_to_string(tok.type)}>{_COLOR_RESET} "
        f'{_COLOR_VALUE}"{tok.value}"{_COLOR_RESET} '
        f"{_COLOR_POS}{tok.line}:{tok.column}{_COLOR_RESET}"
    )


def dump_tokens_json(tokens: Iterable[Token], out: TextIO) -> None:
    """Write the tokens as a JSON array, one token per line."""
    items = list(tokens)
    out.write("[\n")
    for index, tok in enumerate(items):
        separator = "," if index + 1 < len(items) else ""
        out.write(
            f'  {{ "type": "{token_type_to_string(tok.type)}", '
            f'"value": {json.dumps(tok.value or "")}, '
            f'"line": {tok.line}, "col": {tok.column} }}{separator}\n'
        )
    out.write("]\n")


def dump_tokens_json_file(filename: str | None, tokens: Iterable[Token]) -> None:
    """Dump tokens as JSON to a file; None or "-" means standard output."""
    if filename is None or filename == "-":
        dump_tokens_json(tokens, sys.stdout)
        return
    with open(filename, "w", encoding="utf-8") as out:
        dump_tokens_json(tokens, out)