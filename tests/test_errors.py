import io

import pytest

from tinycomp.errors import ParseError, parse_error, read_source_line
from tinycomp.parser import Parser
from tinycomp.tokens import Token, TokenType


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "prog.txt"
    path.write_text("def x = 1;\n\tret y;\nlast\n", encoding="utf-8")
    return str(path)


def test_read_source_line(source_file):
    assert read_source_line(source_file, 1) == "def x = 1;"
    assert read_source_line(source_file, 3) == "last"


def test_read_source_line_past_end(source_file):
    with pytest.raises(ValueError):
        read_source_line(source_file, 10)


def test_read_source_line_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_source_line(str(tmp_path / "nope.txt"), 1)


def test_format_includes_header_source_and_caret(source_file):
    err = ParseError(1, 5, source_file, "bad thing", expected="X", found="Y")
    lines = err.format().splitlines()
    assert f"{source_file}:1:5: error:" in lines[0]
    assert lines[0].endswith("bad thing")
    assert lines[1] == "def x = 1;"
    assert lines[2].index("^") == 4
    assert lines[3].endswith("X")
    assert lines[4].endswith("Y")


def test_caret_keeps_tabs(source_file):
    err = ParseError(2, 3, source_file, "oops")
    caret_line = err.format().splitlines()[2]
    assert caret_line.startswith("\t")
    assert caret_line.endswith("^")


def test_optional_parts_left_out(source_file):
    text = ParseError(1, 1, source_file, "m").format()
    assert "expected:" not in text
    assert "found:" not in text


def test_format_without_readable_file(tmp_path):
    err = ParseError(1, 1, str(tmp_path / "missing.txt"), "msg", expected="E")
    lines = err.format().splitlines()
    assert len(lines) == 2
    assert "expected:" in lines[1]


def test_report_writes_format(source_file):
    err = ParseError(1, 1, source_file, "m", found="f")
    buf = io.StringIO()
    err.report(buf)
    assert buf.getvalue() == err.format()


def test_defaults_are_fatal():
    err = ParseError(1, 2, "f", "m")
    assert err.is_fatal is True
    assert err.expected is None and err.found is None


def test_parse_error_raises_with_token_position(source_file):
    parser = Parser([], source_file)
    tok = Token(TokenType.NUMBER, "7", 2, 4)
    with pytest.raises(ParseError) as info:
        parse_error(parser, TokenType.IDENTIFIER, tok)
    err = info.value
    assert (err.line, err.column, err.filename) == (2, 4, source_file)
    assert err.expected == "<IDENTIFIER>"
    assert "NUMBER" in err.found and "7" in err.found


def test_parse_error_without_parser_or_token():
    with pytest.raises(ParseError) as info:
        parse_error(None, TokenType.OPERATOR, None)
    assert info.value.filename is None
    assert info.value.found is None
    assert info.value.expected == "<OPERATOR>"