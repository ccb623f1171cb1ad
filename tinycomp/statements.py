"""Statement parsing and the top-level parse entry point."""

from __future__ import annotations

from typing import Optional

from tinycomp.errors import ParseError, parse_error
from tinycomp.nodes import (
    Assignment,
    Block,
    Declaration,
    FunctionDef,
    IfStatement,
    ParamList,
    ReturnStatement,
    Variable,
    WhileLoop,
)
from tinycomp.parser import Parser
from tinycomp.pratt import is_prefix_op, parse_expression_pratt
from tinycomp.tokens import TokenType, token_type_to_string


def parser_find_first_token(p: Parser, token_type: TokenType) -> int:
    """Index of the first token of the given type from the cursor on."""
    for index in range(p.current, p.end):
        if p.tokens[index].type is token_type:
            return index
    last = p.tokens[p.end - 1] if p.end > 0 else None
    raise ParseError(
        last.line if last else 0,
        last.column if last else 0,
        p.filename,
        "Expected token not found",
        token_type_to_string(token_type),
        last.value if last else None,
    )


def parser_find_matching(p: Parser, open_type: TokenType, close_type: TokenType) -> int:
    """Index of the close token matching an already consumed open token."""
    depth = 1
    for index in range(p.current, p.end):
        kind = p.tokens[index].type
        if kind is open_type:
            depth += 1
        elif kind is close_type:
            depth -= 1
            if depth == 0:
                return index
    prev = p.tokens[p.current - 1] if p.current > 0 else None
    raise ParseError(
        prev.line if prev else 0,
        prev.column if prev else 0,
        p.filename,
        "unmatched close token",
        token_type_to_string(close_type),
        None,
    )


def parse_expression(p: Parser):
    """Parse a full expression."""
    return parse_expression_pratt(p, 0)


def _parse_braced(p: Parser) -> Block:
    """Parse the statements up to the brace matching one just consumed."""
    end = parser_find_matching(p, TokenType.BRACE_OPEN, TokenType.BRACE_CLOSE)
    block = parse(p.slice(p.current, end))
    p.current = end
    p.consume(TokenType.BRACE_CLOSE)
    return block


def parse_declaration(p: Parser) -> Declaration:
    """Parse `def name = expression;`."""
    p.consume(TokenType.DEFINE)
    name = p.consume(TokenType.IDENTIFIER)
    p.consume(TokenType.OPERATOR, "=")
    value = parse_expression(p)
    p.consume(TokenType.END_OF_LINE)
    return Declaration(Variable(name.value), value)


def parse_if_statement(p: Parser) -> IfStatement:
    """Parse `if (cond) { ... }` with an optional `else { ... }`."""
    p.consume(TokenType.IF)
    p.consume(TokenType.PAREN_OPEN)
    condition = parse_expression(p)
    p.consume(TokenType.PAREN_CLOSE)
    p.consume(TokenType.BRACE_OPEN)
    node = IfStatement(condition, _parse_braced(p))
    if p.current_token().type is TokenType.ELSE:
        p.consume(TokenType.ELSE)
        p.consume(TokenType.BRACE_OPEN)
        node.else_block = _parse_braced(p)
    return node


def parse_while_loop(p: Parser) -> WhileLoop:
    """Parse `while (cond) { ... }`."""
    p.consume(TokenType.WHILE)
    p.consume(TokenType.PAREN_OPEN)
    condition = parse_expression(p)
    p.consume(TokenType.PAREN_CLOSE)
    p.consume(TokenType.BRACE_OPEN)
    return WhileLoop(condition, _parse_braced(p))


def parse_assignment(p: Parser) -> Assignment:
    """Parse `name = expression;`."""
    name = p.consume(TokenType.IDENTIFIER)
    p.consume(TokenType.OPERATOR, "=")
    value = parse_expression(p)
    p.consume(TokenType.END_OF_LINE)
    return Assignment(Variable(name.value), value)


def parse_identifier(p: Parser):
    """Parse a statement starting with an identifier: assignment or expression."""
    after = p.peek(1)
    if after is not None and after.type is TokenType.OPERATOR and after.value == "=":
        return parse_assignment(p)
    expr = parse_expression(p)
    p.consume(TokenType.END_OF_LINE)
    return expr


def parse_operator(p: Parser):
    """Parse an expression statement starting with a prefix operator."""
    op = p.current_token()
    if not is_prefix_op(op.value):
        raise ParseError(
            op.line,
            op.column,
            p.filename,
            "Unexpected operator",
            "a prefix operator",
            op.value,
        )
    expr = parse_expression(p)
    p.consume(TokenType.END_OF_LINE)
    return expr


def parse_return_statement(p: Parser) -> ReturnStatement:
    """Parse `return;` or `return expression;`."""
    p.consume(TokenType.RETURN)
    node = ReturnStatement()
    if p.current_token().type is not TokenType.END_OF_LINE:
        node.expression = parse_expression(p)
    p.consume(TokenType.END_OF_LINE)
    return node


def parse_number(p: Parser):
    """Parse an expression statement starting with a number or parenthesis."""
    after = p.peek(1)
    if after is not None and after.type is TokenType.OPERATOR and after.value.startswith("="):
        parse_error(p, TokenType.OPERATOR, after)
    expr = parse_expression_pratt(p, 0)
    p.consume(TokenType.END_OF_LINE)
    return expr


def parse_block(p: Parser) -> Block:
    """Parse `{ statements }`."""
    p.consume(TokenType.BRACE_OPEN)
    return _parse_braced(p)


def parse_parameters(p: Parser) -> ParamList:
    """Parse a parenthesised, comma separated list of parameter names."""
    params = ParamList()
    p.consume(TokenType.PAREN_OPEN)
    while p.current_token().type is not TokenType.PAREN_CLOSE:
        name = p.consume(TokenType.IDENTIFIER)
        params.params.append(Variable(name.value))
        if p.current_token().type is TokenType.COMMA:
            p.consume(TokenType.COMMA)
    p.consume(TokenType.PAREN_CLOSE)
    return params


def parse_function_definition(p: Parser) -> FunctionDef:
    """Parse `fn name(params) { body }`."""
    p.consume(TokenType.FUNCTION)
    name = p.consume(TokenType.IDENTIFIER)
    params = parse_parameters(p)
    p.consume(TokenType.BRACE_OPEN)
    body = _parse_braced(p)
    return FunctionDef(Variable(name.value), params, body)


def parse_statement(p: Parser) -> Optional[object]:
    """Parse one statement; None for an empty statement or end of input."""
    tok = p.current_token()
    kind = tok.type
    if kind is TokenType.DEFINE:
        return parse_declaration(p)
    if kind is TokenType.IF:
        return parse_if_statement(p)
    if kind is TokenType.WHILE:
        return parse_while_loop(p)
    if kind is TokenType.RETURN:
        return parse_return_statement(p)
    if kind is TokenType.IDENTIFIER:
        return parse_identifier(p)
    if kind in (TokenType.NUMBER, TokenType.PAREN_OPEN):
        return parse_number(p)
    if kind is TokenType.OPERATOR:
        return parse_operator(p)
    if kind is TokenType.PAREN_CLOSE:
        parse_error(p, TokenType.PAREN_OPEN, tok)
    if kind is TokenType.BRACE_OPEN:
        return parse_block(p)
    if kind is TokenType.BRACE_CLOSE:
        parse_error(p, TokenType.BRACE_OPEN, tok)
    if kind is TokenType.END_OF_LINE:
        p.consume(TokenType.END_OF_LINE)
        return None
    if kind is TokenType.EOF:
        return None
    if kind is TokenType.FUNCTION:
        return parse_function_definition(p)
    parse_error(p, TokenType.DEFINE, tok)


def parse(p: Parser) -> Block:
    """Parse statements until end of input into a block."""
    root = Block()
    while p.current_token().type is not TokenType.EOF:
        root.statements.append(parse_statement(p))
    p.consume(TokenType.EOF)
    return root