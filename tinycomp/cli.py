"""Command line driver: lex, parse and lower a source file."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from tinycomp.ast_print import dump_ast_json_file, print_ast
from tinycomp.errors import ParseError
from tinycomp.lexer import tokenize
from tinycomp.parser import Parser
from tinycomp.statements import parse
from tinycomp.tac_gen import generate_tac
from tinycomp.tac_print import print_list
from tinycomp.tokens import dump_tokens_json_file, format_token_colored

DEFAULT_INPUT = "./input/test.txt"
DEFAULT_TOKENS_JSON = "./compiler-steps/tokens.json"
DEFAULT_AST_JSON = "./compiler-steps/ast.json"


def read_file(filename: str) -> str:
    """Return the whole contents of a file, line endings untouched."""
    with open(filename, "r", encoding="utf-8", errors="replace", newline="") as handle:
        return handle.read()


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinycomp",
        description="Lex, parse and lower a source file to three-address code.",
    )
    parser.add_argument("source", nargs="?", default=DEFAULT_INPUT, help="source file")
    parser.add_argument(
        "--tokens-json", default=DEFAULT_TOKENS_JSON, help="where to write the tokens as JSON"
    )
    parser.add_argument(
        "--ast-json", default=DEFAULT_AST_JSON, help="where to write the syntax tree as JSON"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the compiler pipeline; return the process exit status."""
    args = _build_arg_parser().parse_args(argv)
    out = sys.stdout

    try:
        code = read_file(args.source)
    except OSError as exc:
        print(f"{args.source}: {exc.strerror or exc}", file=sys.stderr)
        return 1

    tokens = tokenize(code)
    for tok in tokens:
        out.write(format_token_colored(tok) + "\n")
    out.write("\n\n")

    try:
        dump_tokens_json_file(args.tokens_json, tokens)
    except OSError as exc:
        print(f"{args.tokens_json}: {exc.strerror or exc}", file=sys.stderr)

    try:
        ast = parse(Parser(tokens, args.source))
    except ParseError as err:
        err.report(sys.stderr)
        return 1

    print_ast(ast, 0, out)
    out.write("\n\n")

    try:
        dump_ast_json_file(args.ast_json, ast)
    except OSError as exc:
        print(f"{args.ast_json}: {exc.strerror or exc}", file=sys.stderr)

    print_list(generate_tac(ast), out)
    return 0


if __name__ == "__main__":
    sys.exit(main())