import json

import pytest

from tinycomp.cli import main, read_file
from tinycomp.lexer import tokenize
from tinycomp.parser import Parser
from tinycomp.statements import parse
from tinycomp.tac_gen import generate_tac
from tinycomp.tac_print import format_list

SOURCE = "def x = 1 + 2;\nfn add(a, b) { return a + b; }\nx = add(x, 3);\n"


def _write_source(tmp_path, text):
    path = tmp_path / "prog.txt"
    path.write_bytes(text.encode("utf-8"))
    return path


def test_read_file_keeps_line_endings(tmp_path):
    path = _write_source(tmp_path, "def a = 1;\r\nreturn a;\r\n")
    assert read_file(str(path)) == "def a = 1;\r\nreturn a;\r\n"


def test_read_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file(str(tmp_path / "absent.txt"))


def test_main_writes_outputs(tmp_path, capsys):
    src = _write_source(tmp_path, SOURCE)
    tokens_path = tmp_path / "tokens.json"
    ast_path = tmp_path / "ast.json"

    status = main([str(src), "--tokens-json", str(tokens_path), "--ast-json", str(ast_path)])
    assert status == 0

    tokens = json.loads(tokens_path.read_text(encoding="utf-8"))
    assert [t["value"] for t in tokens] == [t.value for t in tokenize(SOURCE)]

    tree = json.loads(ast_path.read_text(encoding="utf-8"))
    assert tree["type"] == "Block"
    assert [s["type"] for s in tree["stmts"]] == ["Declaration", "Function", "Assignment"]

    expected = format_list(generate_tac(parse(Parser(tokenize(SOURCE), None))))
    out = capsys.readouterr().out
    assert out.endswith(expected)
    assert "Function: add" in out


def test_main_reports_parse_error(tmp_path, capsys):
    src = _write_source(tmp_path, "def = 5;\n")
    status = main(
        [
            str(src),
            "--tokens-json",
            str(tmp_path / "t.json"),
            "--ast-json",
            str(tmp_path / "a.json"),
        ]
    )
    assert status == 1
    err = capsys.readouterr().err
    assert "parse error" in err
    assert "def = 5;" in err
    assert not (tmp_path / "a.json").exists()


def test_main_missing_source_fails(tmp_path, capsys):
    status = main([str(tmp_path / "missing.txt")])
    assert status == 1
    assert "missing.txt" in capsys.readouterr().err


def test_main_continues_when_dump_fails(tmp_path, capsys):
    src = _write_source(tmp_path, "def y = 2;\n")
    bad = tmp_path / "no_such_dir" / "tokens.json"
    status = main([str(src), "--tokens-json", str(bad), "--ast-json", str(tmp_path / "a.json")])
    assert status == 0
    captured = capsys.readouterr()
    assert str(bad) in captured.err
    assert "define y = 2" in captured.out