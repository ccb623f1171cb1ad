"""Human-readable listing of three-address code."""

from __future__ import annotations

import sys
from typing import Iterable, Optional, TextIO

from tinycomp.tac import Instr, InstrKind, Operand, OperandType, binop_str, unop_str

_LABEL_STACK_LIMIT = 32


def format_operand(op: Optional[Operand]) -> str:
    """Render an operand: t<n>, a name, a number or L<n>; empty for None."""
    if op is None:
        return ""
    if op.type is OperandType.TEMP:
        return f"t{op.literal}"
    if op.type is OperandType.VAR:
        return f"{op.name}"
    if op.type is OperandType.LITERAL:
        return f"{op.literal}"
    if op.type is OperandType.LABEL:
        return f"L{op.literal}"
    return "<?>"


def format_instr(instr: Optional[Instr]) -> str:
    """Render one instruction, including its trailing newline."""
    if instr is None:
        return ""
    kind = instr.kind

    if kind is InstrKind.BINARY_OP:
        return (
            f"{format_operand(instr.dst)} ← {format_operand(instr.arg1)} "
            f"{binop_str(instr.op)} {format_operand(instr.arg2)}\n"
        )
    if kind is InstrKind.UNARY_OP:
        return (
            f"{format_operand(instr.dst)} ← {unop_str(instr.op)} "
            f"{format_operand(instr.arg1)}\n"
        )
    if kind is InstrKind.COPY:
        return f"{format_operand(instr.dst)} ← {format_operand(instr.arg1)}\n"
    if kind is InstrKind.LABEL:
        return f"L{instr.dst.literal}:\n" if instr.dst else "L<?>:\n"
    if kind is InstrKind.GOTO:
        return f"goto L{instr.arg1.literal}\n" if instr.arg1 else "goto L<?>?\n"
    if kind is InstrKind.IFZ:
        if instr.arg1 and instr.arg2:
            return f"ifz t{instr.arg1.literal} goto L{instr.arg2.literal}\n"
        return "ifz ? goto ?\n"
    if kind is InstrKind.RETURN:
        if instr.arg1:
            return f"return {format_operand(instr.arg1)}\n"
        return "return\n"
    if kind is InstrKind.FUNCTION:
        return f"fun {instr.dst.name}:\n" if instr.dst else "fun <?>:\n"
    if kind is InstrKind.PUSH:
        return f"push {format_operand(instr.arg1)}\n"
    if kind is InstrKind.POP:
        return f"pop {format_operand(instr.arg1)}\n"
    if kind is InstrKind.CALL:
        dst = instr.dst.literal if instr.dst else -1
        callee = instr.arg1.name if instr.arg1 else "<??>"
        count = instr.arg2.literal if instr.arg2 else 0
        return f"t{dst} ← call {callee} {count}\n"
    if kind is InstrKind.END_FUNCTION:
        return "endfun\n\n"
    if kind is InstrKind.DEFINE:
        if not instr.dst:
            return "define <?>\n"
        text = f"define {instr.dst.name}"
        if instr.arg1:
            text += f" = {format_operand(instr.arg1)}"
        return text + "\n"
    return f"; [unrecognized TAC kind {getattr(kind, 'value', kind)}]\n"


def format_list(instrs: Iterable[Instr]) -> str:
    """Render instructions with line numbers, indenting function and if bodies."""
    parts = []
    indent = 0
    labels: list[int] = []

    for lineno, instr in enumerate(instrs, start=1):
        if (
            instr.kind is InstrKind.LABEL
            and labels
            and instr.dst
            and instr.dst.literal == labels[-1]
        ):
            labels.pop()
            indent -= 1
        if instr.kind is InstrKind.END_FUNCTION:
            indent -= 1

        parts.append(f"{lineno:4d}: " + "  " * max(indent, 0) + format_instr(instr))

        if instr.kind is InstrKind.IFZ and instr.arg2:
            if len(labels) < _LABEL_STACK_LIMIT:
                labels.append(instr.arg2.literal)
            indent += 1
        elif instr.kind is InstrKind.FUNCTION:
            indent += 1

    return "".join(parts)


def print_list(instrs: Iterable[Instr], out: Optional[TextIO] = None) -> None:
    """Write the numbered listing to a stream (standard output by default)."""
    (out if out is not None else sys.stdout).write(format_list(instrs))