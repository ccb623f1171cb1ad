import pytest

from tinycomp.lexer import tokenize
from tinycomp.nodes import (
    BinaryExpr,
    BinaryOp,
    Literal,
    ParamList,
    UnaryExpr,
    UnaryOp,
    Variable,
)
from tinycomp.parser import Parser
from tinycomp.statements import parse
from tinycomp.tac import InstrKind, OperandType, TacBinOp, TacUnaryOp
from tinycomp.tac_gen import TacGenerator, generate_tac
from tinycomp.tac_print import format_list


def _ast(source):
    return parse(Parser(tokenize(source), None))


def _kinds(code):
    return [instr.kind for instr in code]


def test_literal_is_copied_into_temp():
    code = generate_tac(Literal(7))
    assert _kinds(code) == [InstrKind.COPY]
    assert code[0].dst.type is OperandType.TEMP
    assert code[0].arg1.type is OperandType.LITERAL
    assert code[0].arg1.literal == 7


def test_variable_is_copied_into_temp():
    code = generate_tac(Variable("abc"))
    assert _kinds(code) == [InstrKind.COPY]
    assert code[0].arg1.type is OperandType.VAR
    assert code[0].arg1.name == "abc"


def test_binary_of_literals_uses_operands_directly():
    code = generate_tac(BinaryExpr(BinaryOp.ADD, Literal(1), Literal(2)))
    assert _kinds(code) == [InstrKind.BINARY_OP]
    assert code[0].op is TacBinOp.ADD
    assert (code[0].arg1.literal, code[0].arg2.literal) == (1, 2)
    assert code[0].dst.type is OperandType.TEMP


def test_nested_binary_feeds_result_forward():
    code = generate_tac(_ast("def y = (1 + 2) * 3;"))
    assert _kinds(code) == [InstrKind.BINARY_OP, InstrKind.BINARY_OP, InstrKind.DEFINE]
    assert code[1].op is TacBinOp.MUL
    assert code[1].arg1 is code[0].dst
    assert code[2].arg1 is code[1].dst
    assert code[2].dst.name == "y"


def test_unary_expression():
    code = generate_tac(UnaryExpr(UnaryOp.NEG, Variable("x")))
    assert _kinds(code) == [InstrKind.UNARY_OP]
    assert code[0].op is TacUnaryOp.NEG
    assert code[0].arg1.name == "x"


def test_declaration_with_literal():
    code = generate_tac(_ast("def x = 5;"))
    assert _kinds(code) == [InstrKind.DEFINE]
    assert code[0].dst.name == "x"
    assert code[0].arg1.literal == 5


def test_listing_of_declaration():
    code = generate_tac(_ast("def x = 1 + 2;"))
    assert format_list(code) == "   1: t0 ← 1 + 2\n   2: define x = t0\n"


def test_assignment_retargets_last_instruction():
    code = generate_tac(_ast("x = a + b;"))
    assert _kinds(code) == [InstrKind.BINARY_OP]
    assert code[-1].dst.type is OperandType.VAR
    assert code[-1].dst.name == "x"


def test_assignment_of_literal_is_copy():
    code = generate_tac(_ast("x = 4;"))
    assert _kinds(code) == [InstrKind.COPY]
    assert code[0].dst.name == "x"
    assert code[0].arg1.literal == 4


def test_assignment_of_call_writes_to_variable():
    code = generate_tac(_ast("x = f(1);"))
    assert _kinds(code) == [InstrKind.PUSH, InstrKind.CALL]
    assert code[-1].dst.name == "x"


def test_if_without_else():
    code = generate_tac(_ast("if (a < b) { x = 1; }"))
    assert _kinds(code) == [InstrKind.BINARY_OP, InstrKind.IFZ, InstrKind.COPY, InstrKind.LABEL]
    assert code[1].arg1 is code[0].dst
    assert code[1].arg2.literal == code[-1].dst.literal


def test_if_with_else():
    code = generate_tac(_ast("if (a < b) { x = 1; } else { x = 2; }"))
    assert _kinds(code) == [
        InstrKind.BINARY_OP,
        InstrKind.IFZ,
        InstrKind.COPY,
        InstrKind.GOTO,
        InstrKind.LABEL,
        InstrKind.COPY,
        InstrKind.LABEL,
    ]
    assert code[1].arg2.literal == code[4].dst.literal
    assert code[3].arg1.literal == code[6].dst.literal
    assert code[4].dst.literal != code[6].dst.literal


def test_while_loop_structure():
    code = generate_tac(_ast("while (i < n) { i = i + 1; }"))
    assert _kinds(code) == [
        InstrKind.LABEL,
        InstrKind.BINARY_OP,
        InstrKind.IFZ,
        InstrKind.BINARY_OP,
        InstrKind.GOTO,
        InstrKind.LABEL,
    ]
    assert code[4].arg1.literal == code[0].dst.literal
    assert code[2].arg2.literal == code[-1].dst.literal
    assert code[3].dst.name == "i"


def test_function_definition():
    code = generate_tac(_ast("fn add(a, b) { return a + b; }"))
    assert _kinds(code) == [
        InstrKind.FUNCTION,
        InstrKind.POP,
        InstrKind.POP,
        InstrKind.BINARY_OP,
        InstrKind.RETURN,
        InstrKind.END_FUNCTION,
    ]
    assert code[0].dst.name == "add"
    assert [instr.arg1.name for instr in code[1:3]] == ["a", "b"]
    assert code[4].arg1 is code[3].dst


def test_call_pushes_arguments():
    code = generate_tac(_ast("f(1, x);"))
    assert _kinds(code) == [InstrKind.PUSH, InstrKind.PUSH, InstrKind.CALL]
    assert code[0].arg1.literal == 1
    assert code[1].arg1.name == "x"
    assert code[2].arg1.name == "f"
    assert code[2].arg2.literal == 2


def test_return_literal_goes_through_temp():
    code = generate_tac(_ast("return 5;"))
    assert _kinds(code) == [InstrKind.COPY, InstrKind.RETURN]
    assert code[1].arg1 is code[0].dst


def test_bare_return():
    code = generate_tac(_ast("return;"))
    assert _kinds(code) == [InstrKind.RETURN]
    assert code[0].arg1 is None


def test_empty_statements_produce_no_code():
    assert generate_tac(_ast("; ;")) == []


def test_param_list_pushes_first_destination():
    code = generate_tac(ParamList([Literal(3)]))
    assert _kinds(code) == [InstrKind.COPY, InstrKind.PUSH]
    assert code[1].arg1 is code[0].dst


def test_temps_are_unique():
    code = generate_tac(_ast("def a = 1 + 2 * 3; def b = a - 4; b = -b + a;"))
    temps = [
        instr.dst.literal
        for instr in code
        if instr.dst is not None and instr.dst.type is OperandType.TEMP
    ]
    assert len(temps) == len(set(temps))


def test_counter_persists_across_calls():
    gen = TacGenerator()
    first = gen.generate(Literal(1))
    second = gen.generate(Literal(1))
    assert first[0].dst.literal != second[0].dst.literal
    assert gen.temp_counter == second[0].dst.literal + 1


def test_operand_for_literal_needs_no_code():
    code, op = TacGenerator().operand_for(Literal(9))
    assert code == []
    assert op.type is OperandType.LITERAL and op.literal == 9


def test_generate_tac_matches_fresh_generator():
    tree = _ast("def x = a * b;")
    assert generate_tac(tree) == TacGenerator().generate(_ast("def x = a * b;"))


def test_unsupported_node_raises():
    with pytest.raises(TypeError):
        generate_tac(object())