import pytest

from glfx.parser import parse
from glfx.semantic import SemanticAnalyzer, SemanticError, analyze
from glfx.syntax_tree import CommentNode, Program
from glfx.tokens import Token, TokenType


def _errors(source):
    with pytest.raises(SemanticError) as info:
        analyze(parse(source))
    return info.value.errors


def test_valid_program_resolves_types():
    program = analyze(parse("x = 1; print x;"))
    assignment, printed = program.statements
    assert assignment.identifier.resolved_type is TokenType.INT
    assert assignment.value.resolved_type is TokenType.INT
    assert printed.expression.resolved_type is TokenType.INT


def test_boolean_variable():
    program = analyze(parse("b = true; print b;"))
    assert program.statements[1].expression.resolved_type is TokenType.BOOL


def test_binary_of_ints_is_int():
    program = analyze(parse("print (1 + 2) * 3;"))
    assert program.statements[0].expression.resolved_type is TokenType.INT


def test_analyzer_scope_records_definitions():
    analyzer = SemanticAnalyzer()
    analyzer.analyze(parse("x = 1; y = false;"))
    assert analyzer.scope.resolve("x").declared_type is TokenType.INT
    assert analyzer.scope.resolve("y").declared_type is TokenType.BOOL
    assert analyzer.errors == []


def test_comment_node_is_ignored():
    program = Program([CommentNode(Token(TokenType.COMMENT_SINGLE_LINE, "# hi"))])
    assert analyze(program) is program


def test_type_mismatch():
    assert _errors("x = 1; x = true;") == [
        "Semantic Error: Type mismatch in assignment to 'x'. Expected INT, but got BOOL."
    ]


def test_undefined_variable_in_print():
    assert _errors("print y;") == [
        "Semantic Error: Undefined variable 'y'.",
        "Semantic Error: PRINT statement argument has an unresolved or invalid type.",
    ]


def test_division_by_zero():
    assert _errors("print 4 / 0;") == [
        "Semantic Error: Division by zero detected.",
        "Semantic Error: PRINT statement argument has an unresolved or invalid type.",
    ]


def test_bool_variable_in_arithmetic():
    assert _errors("b = true; print b + 1;") == [
        "Semantic Error: Arithmetic operator 'PLUS' expects integer operands.",
        "Semantic Error: PRINT statement argument has an unresolved or invalid type.",
    ]


def test_bool_literal_operand_is_unresolved_without_operator_error():
    assert _errors("print true + 1;") == [
        "Semantic Error: PRINT statement argument has an unresolved or invalid type."
    ]


def test_define_with_unresolved_type():
    assert _errors("x = y;") == [
        "Semantic Error: Undefined variable 'y'.",
        "Semantic Error: Attempting to define variable 'x' with an unresolved type.",
    ]


def test_reassign_with_unresolved_type_warns():
    assert _errors("x = 1; x = y;") == [
        "Semantic Error: Undefined variable 'y'.",
        "Semantic Warning: Assignment value for 'x' has an unresolved type. Variable type remains INT.",
    ]


def test_mismatch_marks_identifier_illegal():
    program = parse("x = 1; x = false;")
    analyzer = SemanticAnalyzer()
    with pytest.raises(SemanticError):
        analyzer.analyze(program)
    assert program.statements[1].identifier.resolved_type is TokenType.ILLEGAL
    assert analyzer.scope.resolve("x").declared_type is TokenType.INT


def test_error_string_joins_messages():
    with pytest.raises(SemanticError) as info:
        analyze(parse("print y;"))
    assert str(info.value) == "\n".join(info.value.errors)