"""Text and JSON renderings of the syntax tree."""

from __future__ import annotations

import json
import sys
from typing import Any, Iterator, Optional, TextIO

from tinycomp.nodes import (
    Assignment,
    BinaryExpr,
    Block,
    Call,
    Declaration,
    FunctionDef,
    IfStatement,
    Literal,
    ReturnStatement,
    UnaryExpr,
    Variable,
    WhileLoop,
    binary_op_to_string,
    node_type_name,
    unary_op_to_string,
)


def _lines(node: object, indent: int) -> Iterator[str]:
    if node is None:
        return
    pad = "  " * indent
    inner = "  " * (indent + 1)

    if isinstance(node, Block):
        yield f"{pad}Block:"
        for statement in node.statements:
            yield from _lines(statement, indent + 1)
    elif isinstance(node, Variable):
        yield f"{pad}Variable: {node.identifier}"
    elif isinstance(node, Literal):
        yield f"{pad}IntLiteral: {node.value}"
    elif isinstance(node, BinaryExpr):
        yield f"{pad}BinaryOp: {binary_op_to_string(node.op)}"
        yield from _lines(node.left, indent + 1)
        yield from _lines(node.right, indent + 1)
    elif isinstance(node, UnaryExpr):
        yield f"{pad}UnaryOp: {unary_op_to_string(node.op)}"
        yield from _lines(node.operand, indent + 1)
    elif isinstance(node, Declaration):
        yield f"{pad}Declaration:"
        yield from _lines(node.variable, indent + 1)
        yield from _lines(node.value, indent + 1)
    elif isinstance(node, Assignment):
        yield f"{pad}Assignment: {node.variable.identifier}"
        yield from _lines(node.value, indent + 1)
    elif isinstance(node, Call):
        yield f"{pad}Call: {node.callee.identifier}"
        yield f"{inner}Arguments:"
        for arg in node.args.params:
            yield from _lines(arg, indent + 2)
    elif isinstance(node, IfStatement):
        yield f"{pad}IfStatement:"
        yield f"{inner}Condition:"
        yield from _lines(node.condition, indent + 2)
        yield f"{inner}ThenBlock:"
        yield from _lines(node.then_block, indent + 2)
        if node.else_block is not None:
            yield f"{inner}ElseBlock:"
            yield from _lines(node.else_block, indent + 2)
    elif isinstance(node, WhileLoop):
        yield f"{pad}WhileLoop:"
        yield f"{inner}Condition:"
        yield from _lines(node.condition, indent + 2)
        yield f"{inner}Body:"
        yield from _lines(node.body, indent + 2)
    elif isinstance(node, ReturnStatement):
        yield f"{pad}ReturnStatement:"
        yield from _lines(node.expression, indent + 1)
    elif isinstance(node, FunctionDef):
        yield f"{pad}Function: {node.name.identifier}"
        yield f"{inner}Parameters:"
        for param in node.params.params:
            yield from _lines(param, indent + 2)
        yield f"{inner}Body:"
        yield from _lines(node.body, indent + 2)
    else:
        yield f"{pad}<Unknown AST node: {node_type_name(node)}>"


def format_ast(node: object, indent: int = 0) -> str:
    """Render the tree as indented text, one node per line."""
    return "".join(line + "\n" for line in _lines(node, indent))


def print_ast(node: object, indent: int = 0, out: Optional[TextIO] = None) -> None:
    """Write the indented text rendering to a stream (standard output by default)."""
    (out if out is not None else sys.stdout).write(format_ast(node, indent))


def _json_value(node: object) -> Any:
    if node is None:
        return None
    if isinstance(node, Block):
        return {"type": "Block", "stmts": [_json_value(s) for s in node.statements]}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": node.identifier}
    if isinstance(node, Literal):
        return {"type": "IntLiteral", "value": node.value}
    if isinstance(node, BinaryExpr):
        return {
            "type": "BinaryOp",
            "op": binary_op_to_string(node.op),
            "left": _json_value(node.left),
            "right": _json_value(node.right),
        }
    if isinstance(node, UnaryExpr):
        return {
            "type": "UnaryOp",
            "op": unary_op_to_string(node.op),
            "operand": _json_value(node.operand),
        }
    if isinstance(node, Declaration):
        return {
            "type": "Declaration",
            "var": _json_value(node.variable),
            "value": _json_value(node.value),
        }
    if isinstance(node, Assignment):
        return {
            "type": "Assignment",
            "var": node.variable.identifier,
            "value": _json_value(node.value),
        }
    if isinstance(node, Call):
        return {
            "type": "Call",
            "callee": node.callee.identifier,
            "args": [_json_value(a) for a in node.args.params],
        }
    if isinstance(node, IfStatement):
        result = {
            "type": "If",
            "cond": _json_value(node.condition),
            "then": _json_value(node.then_block),
        }
        if node.else_block is not None:
            result["else"] = _json_value(node.else_block)
        return result
    if isinstance(node, WhileLoop):
        return {
            "type": "While",
            "cond": _json_value(node.condition),
            "body": _json_value(node.body),
        }
    if isinstance(node, ReturnStatement):
        return {"type": "Return", "expr": _json_value(node.expression)}
    if isinstance(node, FunctionDef):
        return {
            "type": "Function",
            "name": node.name.identifier,
            "params": [_json_value(p) for p in node.params.params],
            "body": _json_value(node.body),
        }
    return "Unknown"


def ast_to_json(node: object) -> str:
    """Return the tree as compact JSON text."""
    return json.dumps(_json_value(node), separators=(",", ":"))


def dump_ast_json(node: object, out: TextIO) -> None:
    """Write the tree as compact JSON to a stream."""
    out.write(ast_to_json(node))


def dump_ast_json_file(filename: Optional[str], root: object) -> None:
    """Write the tree as JSON to a file; None or "-" means standard output."""
    if filename is None or filename == "-":
        dump_ast_json(root, sys.stdout)
        return
    with open(filename, "w", encoding="utf-8") as out:
        dump_ast_json(root, out)