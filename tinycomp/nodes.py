"""Syntax tree node types and their display names."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class BinaryOp(Enum):
    """Binary operators."""

    ADD = 0
    MUL = 1
    DIV = 2
    SUB = 3
    LT = 4
    EQ = 5
    GT = 6
    LEQ = 7
    GEQ = 8
    NEQ = 9


class UnaryOp(Enum):
    """Unary operators."""

    NEG = 0
    NOT = 1


@dataclass
class Literal:
    """Integer literal."""

    value: int


@dataclass
class Variable:
    """Reference to a named variable."""

    identifier: str


@dataclass
class UnaryExpr:
    """Unary operation applied to one operand."""

    op: UnaryOp
    operand: _Node


@dataclass
class BinaryExpr:
    """Binary operation on two operands."""

    op: BinaryOp
    left: _Node
    right: _Node


@dataclass
class Block:
    """Sequence of statements; empty statements are kept as None."""

    statements: List[Optional[_Node]] = field(default_factory=list)


@dataclass
class IfStatement:
    """Conditional with an optional else block."""

    condition: _Node
    then_block: Block
    else_block: Optional[Block] = None


@dataclass
class WhileLoop:
    """Loop that runs its body while the condition holds."""

    condition: _Node
    body: Block


@dataclass
class ParamList:
    """Function parameters, or the arguments of a call."""

    params: List[_Node] = field(default_factory=list)


@dataclass
class FunctionDef:
    """Function definition."""

    name: Variable
    params: ParamList
    body: Block


@dataclass
class Declaration:
    """Variable declaration with an initial value."""

    variable: Variable
    value: Optional[_Node]


@dataclass
class Assignment:
    """Assignment to an existing variable."""

    variable: Variable
    value: _Node


@dataclass
class ReturnStatement:
    """Return with an optional expression."""

    expression: Optional[_Node] = None


@dataclass
class Call:
    """Call of a named function."""

    callee: Variable
    args: ParamList = field(default_factory=ParamList)


_Node = Union[
    Literal,
    Variable,
    UnaryExpr,
    BinaryExpr,
    Block,
    IfStatement,
    WhileLoop,
    FunctionDef,
    Declaration,
    Assignment,
    ReturnStatement,
    Call,
    ParamList,
]

_NODE_NAMES = {
    Literal: "AST_LITERAL",
    Variable: "AST_VARIABLE",
    UnaryExpr: "AST_UNARY_OP",
    BinaryExpr: "AST_BINARY_OP",
    IfStatement: "AST_IF",
    WhileLoop: "AST_WHILE",
    Block: "AST_BLOCK",
    FunctionDef: "AST_FUNCTION",
    Declaration: "AST_DECLARATION",
    Assignment: "AST_ASSIGNMENT",
    ReturnStatement: "AST_RETURN",
    Call: "AST_CALL",
}

_BINARY_SYMBOLS = {
    BinaryOp.ADD: "+",
    BinaryOp.SUB: "-",
    BinaryOp.MUL: "*",
    BinaryOp.DIV: "/",
    BinaryOp.LT: "<",
    BinaryOp.EQ: "==",
    BinaryOp.GT: ">",
    BinaryOp.LEQ: "<=",
    BinaryOp.GEQ: ">=",
    BinaryOp.NEQ: "!=",
}

_UNARY_SYMBOLS = {
    UnaryOp.NEG: "-",
    UnaryOp.NOT: "!",
}


def node_type_name(node: object) -> str:
    """Return the kind name of a node, or "UNKNOWN_AST_NODE"."""
    return _NODE_NAMES.get(type(node), "UNKNOWN_AST_NODE")


def binary_op_to_string(op: BinaryOp) -> str:
    """Return the source symbol of a binary operator."""
    return _BINARY_SYMBOLS.get(op, "UNKNOWN_BINARY_OP")


def unary_op_to_string(op: UnaryOp) -> str:
    """Return the source symbol of a unary operator."""
    return _UNARY_SYMBOLS.get(op, "UNKNOWN_UNARY_OP")