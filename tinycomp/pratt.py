"""Expression parsing by binding power (Pratt parsing)."""

from __future__ import annotations

from typing import Tuple

from tinycomp.errors import parse_error
from tinycomp.nodes import (
    BinaryExpr,
    BinaryOp,
    Call,
    Literal,
    ParamList,
    UnaryExpr,
    UnaryOp,
    Variable,
)
from tinycomp.parser import Parser
from tinycomp.tokens import TokenType

_BINARY_OPERATORS = {
    "+": BinaryOp.ADD,
    "-": BinaryOp.SUB,
    "*": BinaryOp.MUL,
    "/": BinaryOp.DIV,
    "<": BinaryOp.LT,
    ">": BinaryOp.GT,
    "<=": BinaryOp.LEQ,
    ">=": BinaryOp.GEQ,
    "==": BinaryOp.EQ,
    "!=": BinaryOp.NEQ,
}

_UNARY_OPERATORS = {
    "-": UnaryOp.NEG,
    "!": UnaryOp.NOT,
}

_PREFIX_POWER = {"-": 9, "!": 9}

_INFIX_POWER = {
    "*": (7, 8),
    "/": (7, 8),
    "+": (5, 6),
    "-": (5, 6),
    "<": (3, 4),
    ">": (3, 4),
    "<=": (3, 4),
    ">=": (3, 4),
    "==": (3, 4),
    "!=": (3, 4),
    "=": (1, 2),
}


def get_binary_operator(op: str) -> BinaryOp:
    """Map an operator symbol to its binary operator; ParseError if unknown."""
    try:
        return _BINARY_OPERATORS[op]
    except KeyError:
        parse_error(None, TokenType.OPERATOR, None)


def get_unary_operator(op: str) -> UnaryOp:
    """Map an operator symbol to its unary operator; ParseError if unknown."""
    try:
        return _UNARY_OPERATORS[op]
    except KeyError:
        parse_error(None, TokenType.OPERATOR, None)


def is_prefix_op(op: str) -> bool:
    """Tell whether the operator may stand in prefix position."""
    return op in _UNARY_OPERATORS


def prefix_binding_power(op: str) -> int:
    """Right binding power of a prefix operator (0 if not one)."""
    return _PREFIX_POWER.get(op, 0)


def infix_binding_power(op: str) -> Tuple[int, int]:
    """Left and right binding powers of an infix operator ((0, 0) if unknown)."""
    return _INFIX_POWER.get(op, (0, 0))


def parse_expression_pratt(p: Parser, min_bp: int = 0):
    """Parse an expression whose operators bind at least as tightly as min_bp."""
    lhs = parse_prefix(p)
    return parse_infix(p, lhs, min_bp)


def parse_prefix(p: Parser):
    """Parse a literal, variable, call, unary operation or parenthesised group."""
    tok = p.current_token()

    if tok.type is TokenType.NUMBER:
        p.consume(TokenType.NUMBER)
        return Literal(int(tok.value))

    if tok.type is TokenType.IDENTIFIER:
        after = p.peek(1)
        if after is not None and after.type is TokenType.PAREN_OPEN:
            return parse_function_call(p)
        p.consume(TokenType.IDENTIFIER)
        return Variable(tok.value)

    if tok.type is TokenType.OPERATOR:
        if not is_prefix_op(tok.value):
            parse_error(p, TokenType.OPERATOR, tok)
        r_bp = prefix_binding_power(tok.value)
        p.consume(TokenType.OPERATOR)
        operand = parse_expression_pratt(p, r_bp)
        return UnaryExpr(get_unary_operator(tok.value), operand)

    if tok.type is TokenType.PAREN_OPEN:
        p.consume(TokenType.PAREN_OPEN)
        node = parse_expression_pratt(p, 0)
        p.consume(TokenType.PAREN_CLOSE)
        return node

    parse_error(p, TokenType.NUMBER, tok)


def parse_infix(p: Parser, lhs, min_bp: int):
    """Fold infix operators onto lhs while they bind at least min_bp."""
    while True:
        tok = p.peek(0)
        if tok is None or tok.type is not TokenType.OPERATOR:
            break
        op = tok.value
        if op == ")":
            break
        l_bp, r_bp = infix_binding_power(op)
        if l_bp < min_bp:
            break
        p.consume(TokenType.OPERATOR)
        rhs = parse_expression_pratt(p, r_bp)
        lhs = BinaryExpr(get_binary_operator(op), lhs, rhs)
    return lhs


def parse_arg_list(p: Parser) -> ParamList:
    """Parse a parenthesised, comma separated list of argument expressions."""
    args = ParamList()
    p.consume(TokenType.PAREN_OPEN)
    while p.current_token().type is not TokenType.PAREN_CLOSE:
        args.params.append(parse_expression_pratt(p, 0))
        if p.current_token().type is TokenType.COMMA:
            p.consume(TokenType.COMMA)
    p.consume(TokenType.PAREN_CLOSE)
    return args


def parse_function_call(p: Parser) -> Call:
    """Parse `name(arguments)`."""
    name = p.consume(TokenType.IDENTIFIER)
    return Call(Variable(name.value), parse_arg_list(p))