"""Lowering of the syntax tree to three-address code."""

from __future__ import annotations

from typing import List, Optional, Tuple

from tinycomp.nodes import (
    Assignment,
    BinaryExpr,
    Block,
    Call,
    Declaration,
    FunctionDef,
    IfStatement,
    Literal,
    ParamList,
    ReturnStatement,
    UnaryExpr,
    Variable,
    WhileLoop,
    node_type_name,
)
from tinycomp.tac import (
    Instr,
    Operand,
    OperandType,
    create_operand,
    emit_arg,
    emit_binary_op,
    emit_call,
    emit_copy,
    emit_define,
    emit_end_function,
    emit_function,
    emit_goto,
    emit_ifz,
    emit_label,
    emit_param,
    emit_return,
    emit_unary_op,
    get_binop,
    get_unop,
)


class TacGenerator:
    """Turns syntax tree nodes into instruction lists.

    Temporaries and labels share one counter, which keeps running across
    calls to `generate` on the same generator.
    """

    def __init__(self, temp_counter: int = 0) -> None:
        self.temp_counter = temp_counter

    def _next_number(self) -> int:
        number = self.temp_counter
        self.temp_counter += 1
        return number

    def _new_temp(self) -> Operand:
        return create_operand(OperandType.TEMP, None, self._next_number())

    def _new_label(self) -> Operand:
        return create_operand(OperandType.LABEL, None, self._next_number())

    def operand_for(self, node: object) -> Tuple[List[Instr], Optional[Operand]]:
        """Return the code computing a node and the operand holding its value.

        Literals and variables are used directly and need no code; any other
        node is lowered and its last instruction's destination is the result.
        """
        if isinstance(node, Literal):
            return [], create_operand(OperandType.LITERAL, None, node.value)
        if isinstance(node, Variable):
            return [], create_operand(OperandType.VAR, node.identifier)
        code = self.generate(node)
        return code, (code[-1].dst if code else None)

    def generate(self, node: object) -> List[Instr]:
        """Lower a node to a list of instructions."""
        if isinstance(node, BinaryExpr):
            return self._binary(node)
        if isinstance(node, UnaryExpr):
            return self._unary(node)
        if isinstance(node, Literal):
            return [emit_copy(self._new_temp(), create_operand(OperandType.LITERAL, None, node.value))]
        if isinstance(node, Variable):
            return [emit_copy(self._new_temp(), create_operand(OperandType.VAR, node.identifier))]
        if isinstance(node, Block):
            return self._block(node)
        if isinstance(node, IfStatement):
            return self._if(node)
        if isinstance(node, Assignment):
            return self._assignment(node)
        if isinstance(node, ReturnStatement):
            return self._return(node)
        if isinstance(node, FunctionDef):
            return self._function(node)
        if isinstance(node, Call):
            return self._call(node)
        if isinstance(node, ParamList):
            return self._param_list(node)
        if isinstance(node, WhileLoop):
            return self._while(node)
        if isinstance(node, Declaration):
            return self._declaration(node)
        raise TypeError(f"Unsupported AST node type {node_type_name(node)}")

    def _binary(self, node: BinaryExpr) -> List[Instr]:
        code_l, lhs = self.operand_for(node.left)
        code_r, rhs = self.operand_for(node.right)
        dst = self._new_temp()
        return code_l + code_r + [emit_binary_op(get_binop(node), dst, lhs, rhs)]

    def _unary(self, node: UnaryExpr) -> List[Instr]:
        code, src = self.operand_for(node.operand)
        dst = self._new_temp()
        return code + [emit_unary_op(get_unop(node), dst, src)]

    def _block(self, node: Block) -> List[Instr]:
        code: List[Instr] = []
        for statement in node.statements:
            if statement is not None:
                code.extend(self.generate(statement))
        return code

    def _if(self, node: IfStatement) -> List[Instr]:
        cond_code, cond = self.operand_for(node.condition)
        label_then = self._new_label()
        label_end = self._new_label() if node.else_block is not None else None

        branch = emit_ifz(cond, label_then)
        then_code = self.generate(node.then_block)

        seq = cond_code + [branch] + then_code
        if node.else_block is not None:
            seq.append(emit_goto(label_end))
            seq.append(emit_label(label_then))
            seq.extend(self.generate(node.else_block))
            seq.append(emit_label(label_end))
        else:
            seq.append(emit_label(label_then))
        return seq

    def _assignment(self, node: Assignment) -> List[Instr]:
        _, var = self.operand_for(node.variable)
        rhs_code, value = self.operand_for(node.value)
        if not rhs_code:
            return [emit_copy(var, value)]
        rhs_code[-1].dst = var
        return rhs_code

    def _return(self, node: ReturnStatement) -> List[Instr]:
        code: List[Instr] = []
        ret_op: Optional[Operand] = None
        if node.expression is not None:
            code = self.generate(node.expression)
            ret_op = code[-1].dst if code else None
        return code + [emit_return(ret_op)]

    def _function(self, node: FunctionDef) -> List[Instr]:
        code = [emit_function(create_operand(OperandType.VAR, node.name.identifier))]
        code.extend(
            emit_arg(create_operand(OperandType.VAR, param.identifier))
            for param in node.params.params
        )
        code.extend(self.generate(node.body))
        code.append(emit_end_function())
        return code

    def _call(self, node: Call) -> List[Instr]:
        code: List[Instr] = []
        args = node.args.params if node.args is not None else []
        for arg in args:
            arg_code, op = self.operand_for(arg)
            code.extend(arg_code)
            code.append(emit_param(op))
        result = self._new_temp()
        func = create_operand(OperandType.VAR, node.callee.identifier)
        code.append(emit_call(result, func, len(args)))
        return code

    def _param_list(self, node: ParamList) -> List[Instr]:
        code: List[Instr] = []
        for param in node.params:
            param_code = self.generate(param)
            code.extend(param_code)
            code.append(emit_param(param_code[0].dst if param_code else None))
        return code

    def _while(self, node: WhileLoop) -> List[Instr]:
        label_start = self._new_label()
        start = emit_label(label_start)
        cond_code, cond = self.operand_for(node.condition)
        label_end = self._new_label()
        branch = emit_ifz(cond, label_end)
        body = self.generate(node.body)
        return [start] + cond_code + [branch] + body + [emit_goto(label_start), emit_label(label_end)]

    def _declaration(self, node: Declaration) -> List[Instr]:
        var = create_operand(OperandType.VAR, node.variable.identifier)
        if node.value is None:
            return [emit_define(var, None)]
        init_code, init_val = self.operand_for(node.value)
        return init_code + [emit_define(var, init_val)]


def generate_tac(node: object) -> List[Instr]:
    """Lower a tree with a fresh generator whose counter starts at zero."""
    return TacGenerator().generate(node)