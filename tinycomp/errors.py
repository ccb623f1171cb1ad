"""Parse errors and their source-annotated reports."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, NoReturn, Optional, TextIO

from tinycomp.tokens import Token, TokenType, token_type_to_string

if TYPE_CHECKING:
    from tinycomp.parser import Parser

_RESET = "\033[0m"
_RED = "\033[31m"
_YELLOW = "\033[33m"
_BOLD = "\033[1m"
_BOLD_RED = _BOLD + _RED


def read_source_line(filename: str, line_number: int) -> str:
    """Return line `line_number` (1-based) of a file without its line ending."""
    if line_number < 1:
        raise ValueError(f"Error reading file: {filename}")
    with open(filename, "r", encoding="utf-8", errors="replace") as handle:
        for number, text in enumerate(handle, start=1):
            if number == line_number:
                return text.rstrip("\r\n")
    raise ValueError(f"Error reading file: {filename}")


def _caret(source: str, column: int) -> str:
    pad = "".join(
        "\t" if i < len(source) and source[i] == "\t" else " "
        for i in range(column - 1)
    )
    return pad + "^"


class ParseError(Exception):
    """A syntax error located at a line and column of a source file."""

    def __init__(
        self,
        line: int,
        column: int,
        filename: Optional[str],
        message: str,
        expected: Optional[str] = None,
        found: Optional[str] = None,
        is_fatal: bool = True,
    ) -> None:
        super().__init__(f"{filename}:{line}:{column}: {message}")
        self.line = line
        self.column = column
        self.filename = filename
        self.message = message
        self.expected = expected
        self.found = found
        self.is_fatal = is_fatal

    def format(self) -> str:
        """Return the full report: header, source line, caret, expected and found."""
        parts = [
            f"{_BOLD_RED}{self.filename}:{self.line}:{self.column}: error:{_RESET} "
            f"{self.message}\n"
        ]
        source: Optional[str] = None
        if self.filename is not None:
            try:
                source = read_source_line(self.filename, self.line)
            except (OSError, ValueError):
                source = None
        if source is not None:
            parts.append(source + "\n")
            parts.append(_caret(source, self.column) + "\n")
        if self.expected is not None:
            parts.append(f"{_YELLOW}expected:{_RESET} {self.expected}\n")
        if self.found is not None:
            parts.append(f"{_YELLOW}found:{_RESET} {self.found}\n")
        return "".join(parts)

    def report(self, stream: Optional[TextIO] = None) -> None:
        """Write the report to a stream (standard error by default)."""
        (stream if stream is not None else sys.stderr).write(self.format())


def parse_error(
    parser: Optional["Parser"], expected: TokenType, actual: Optional[Token]
) -> NoReturn:
    """Raise a ParseError for a token that did not match what was expected."""
    filename = parser.filename if parser is not None else None
    if actual is None:
        line, column, found = 0, 0, None
    else:
        line, column = actual.line, actual.column
        found = f"<{token_type_to_string(actual.type)}> ('{actual.value or ''}')"
    raise ParseError(
        line,
        column,
        filename,
        "parse error",
        expected=f"<{token_type_to_string(expected)}>",
        found=found,
        is_fatal=True,
    )