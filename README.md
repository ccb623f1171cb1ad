# tinycomp

`tinycomp` is a small compiler front end for a tiny C-like language. It
turns source text into tokens, parses the tokens into a syntax tree with a
Pratt expression parser, and lowers the tree into three-address code (TAC).

## The language

```
fn add(a, b) {
    return a + b;
}

def x = add(1, 2);
while (x < 10) {
    x = x + 1;
}
if (x == 10) {
    x = -x;
} else {
    x = 0;
}
```

- Keywords: `def`, `fn`, `if`, `else`, `return`, `while`
- Integers and identifiers
- Binary operators `+ - * /` and comparisons `< > <= >= == !=`
- Prefix operators `-` and `!`
- Statements end with `;`, blocks are wrapped in `{ }`

## Installing

```
pip install .
```

## Command line

```
tinycomp [source] [--tokens-json PATH] [--ast-json PATH]
```

`source` defaults to `./input/test.txt`. The command:

1. prints every token, coloured for the terminal;
2. writes the tokens as JSON to `--tokens-json` (default
   `./compiler-steps/tokens.json`);
3. prints the syntax tree as indented text;
4. writes the tree as compact JSON to `--ast-json` (default
   `./compiler-steps/ast.json`);
5. prints the three-address code as a numbered listing, with function and
   `if` bodies indented.

Passing `-` as a JSON path writes that JSON to standard output instead. If a
JSON file cannot be written (for example because its directory does not
exist), the error is shown on standard error and the run goes on.

A parse error stops the run with exit status 1. The report names the file,
line and column, shows the offending source line with a caret under the
error, and says what was expected and what was found. A source file that
cannot be read also gives exit status 1.

## Using the library

```python
from tinycomp.lexer import tokenize
from tinycomp.parser import Parser
from tinycomp.statements import parse
from tinycomp.ast_print import format_ast, ast_to_json
from tinycomp.tac_gen import generate_tac
from tinycomp.tac_print import format_list

source = "def x = 1 + 2 * 3;"
tokens = tokenize(source)
tree = parse(Parser(tokens, "program.txt"))

print(format_ast(tree, 0))
print(ast_to_json(tree))
print(format_list(generate_tac(tree)))
```

Parsing raises `tinycomp.errors.ParseError`; its `format()` method returns
the annotated report and `report()` writes it to standard error.

The modules follow the stages of the compiler:

| Module                 | Stage                                                   |
|------------------------|---------------------------------------------------------|
| `tinycomp.tokens`      | `TokenType`, `Token`, token formatting and JSON dumps   |
| `tinycomp.lexer`       | `Lexer` and `tokenize`                                  |
| `tinycomp.nodes`       | syntax tree node classes and operator names             |
| `tinycomp.parser`      | `Parser`, a cursor over a token list                    |
| `tinycomp.pratt`       | expression parsing with binding powers                  |
| `tinycomp.statements`  | statement parsing and the `parse` entry point           |
| `tinycomp.errors`      | `ParseError` and error reporting                        |
| `tinycomp.ast_print`   | indented text and JSON views of the tree                |
| `tinycomp.tac`         | TAC operands, instructions and emitters                 |
| `tinycomp.tac_gen`     | `TacGenerator` and `generate_tac`                       |
| `tinycomp.tac_print`   | numbered, indented TAC listings                         |
| `tinycomp.cli`         | the `tinycomp` command and `read_file`                  |

## What it does not do

`tinycomp` stops at three-address code. It does not run programs, optimise
the code, or produce assembly or machine code. The lexer recognises `&&` and
`||`, but the parser has no rule for them, so they end in a parse error.

## Running the tests

```
pip install ".[test]"
pytest
```