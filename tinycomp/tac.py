"""Three-address code: operands, instructions and their constructors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from tinycomp.nodes import BinaryExpr, BinaryOp, UnaryExpr, UnaryOp


class OperandType(Enum):
    """Kinds of instruction operands."""

    TEMP = 0
    VAR = 1
    LITERAL = 2
    LABEL = 3


class InstrKind(Enum):
    """Kinds of three-address instructions."""

    BINARY_OP = 0
    UNARY_OP = 1
    COPY = 2
    LABEL = 3
    GOTO = 4
    IFZ = 5
    PUSH = 6
    POP = 7
    CALL = 8
    RETURN = 9
    FUNCTION = 10
    END_FUNCTION = 11
    DEFINE = 12


class TacBinOp(Enum):
    """Binary operations of the instruction set."""

    ADD = 0
    SUB = 1
    MUL = 2
    DIV = 3
    MOD = 4
    EQ = 5
    NEQ = 6
    LT = 7
    LTE = 8
    GT = 9
    GTE = 10
    AND = 11
    OR = 12


class TacUnaryOp(Enum):
    """Unary operations of the instruction set."""

    NEG = 0
    NOT = 1


@dataclass
class Operand:
    """An operand: a named variable, or a numbered temporary, label or literal."""

    type: OperandType
    name: Optional[str] = None
    literal: int = 0


@dataclass
class Instr:
    """One three-address instruction."""

    kind: InstrKind
    dst: Optional[Operand] = None
    arg1: Optional[Operand] = None
    arg2: Optional[Operand] = None
    op: Union[TacBinOp, TacUnaryOp, None] = None


_BINOP_MAP = {
    BinaryOp.ADD: TacBinOp.ADD,
    BinaryOp.SUB: TacBinOp.SUB,
    BinaryOp.MUL: TacBinOp.MUL,
    BinaryOp.DIV: TacBinOp.DIV,
    BinaryOp.LT: TacBinOp.LT,
    BinaryOp.LEQ: TacBinOp.LTE,
    BinaryOp.GT: TacBinOp.GT,
    BinaryOp.GEQ: TacBinOp.GTE,
    BinaryOp.EQ: TacBinOp.EQ,
    BinaryOp.NEQ: TacBinOp.NEQ,
}

_UNOP_MAP = {
    UnaryOp.NEG: TacUnaryOp.NEG,
    UnaryOp.NOT: TacUnaryOp.NOT,
}

_BINOP_SYMBOLS = {
    TacBinOp.ADD: "+",
    TacBinOp.SUB: "-",
    TacBinOp.MUL: "*",
    TacBinOp.DIV: "/",
    TacBinOp.EQ: "==",
    TacBinOp.NEQ: "!=",
    TacBinOp.LT: "<",
    TacBinOp.LTE: "<=",
    TacBinOp.GT: ">",
    TacBinOp.GTE: ">=",
    TacBinOp.AND: "&&",
    TacBinOp.OR: "||",
}

_UNOP_SYMBOLS = {
    TacUnaryOp.NEG: "-",
    TacUnaryOp.NOT: "!",
}


def create_operand(
    operand_type: OperandType, name: Optional[str] = None, literal: int = 0
) -> Operand:
    """Create an operand; variables take a name, the other kinds a number."""
    if operand_type is OperandType.VAR:
        if name is None:
            raise ValueError("a variable operand needs a name")
        return Operand(operand_type, name=name)
    return Operand(operand_type, literal=literal)


def emit_binary_op(
    binop: TacBinOp, dst: Operand, arg1: Operand, arg2: Operand
) -> Instr:
    """`dst = arg1 op arg2`."""
    return Instr(InstrKind.BINARY_OP, dst, arg1, arg2, binop)


def emit_unary_op(unop: TacUnaryOp, dst: Operand, arg1: Operand) -> Instr:
    """`dst = op arg1`."""
    return Instr(InstrKind.UNARY_OP, dst, arg1, None, unop)


def emit_copy(dst: Operand, arg1: Optional[Operand]) -> Instr:
    """`dst = arg1`."""
    return Instr(InstrKind.COPY, dst, arg1)


def emit_label(dst: Optional[Operand]) -> Instr:
    """`label:`."""
    return Instr(InstrKind.LABEL, dst)


def emit_goto(arg1: Optional[Operand]) -> Instr:
    """`goto label`."""
    return Instr(InstrKind.GOTO, None, arg1)


def emit_ifz(arg1: Optional[Operand], arg2: Optional[Operand]) -> Instr:
    """`ifz arg1 goto arg2`: jump to the label when the operand is zero."""
    return Instr(InstrKind.IFZ, None, arg1, arg2)


def emit_param(arg1: Optional[Operand]) -> Instr:
    """`push arg1`."""
    return Instr(InstrKind.PUSH, None, arg1)


def emit_arg(arg1: Optional[Operand]) -> Instr:
    """`pop arg1`."""
    return Instr(InstrKind.POP, None, arg1)


def emit_call(dst: Optional[Operand], arg1: Optional[Operand], n_args: int) -> Instr:
    """`dst = call arg1, n_args`."""
    return Instr(
        InstrKind.CALL, dst, arg1, create_operand(OperandType.LITERAL, None, n_args)
    )


def emit_return(arg1: Optional[Operand]) -> Instr:
    """`return arg1`, or a bare return when arg1 is None."""
    return Instr(InstrKind.RETURN, None, arg1)


def emit_function(dst: Optional[Operand]) -> Instr:
    """Start of a function named by dst."""
    return Instr(InstrKind.FUNCTION, dst)


def emit_end_function() -> Instr:
    """End of a function definition."""
    return Instr(InstrKind.END_FUNCTION)


def emit_define(dst: Optional[Operand], arg1: Optional[Operand]) -> Instr:
    """Define a variable, with an optional initial value."""
    return Instr(InstrKind.DEFINE, dst, arg1)


def get_binop(node: BinaryExpr) -> TacBinOp:
    """Instruction-set operation for a binary expression node."""
    return _BINOP_MAP[node.op]


def get_unop(node: UnaryExpr) -> TacUnaryOp:
    """Instruction-set operation for a unary expression node."""
    return _UNOP_MAP[node.op]


def binop_str(op: TacBinOp) -> str:
    """Symbol of a binary operation, or "?" if unknown."""
    return _BINOP_SYMBOLS.get(op, "?")


def unop_str(op: TacUnaryOp) -> str:
    """Symbol of a unary operation, or "?" if unknown."""
    return _UNOP_SYMBOLS.get(op, "?")