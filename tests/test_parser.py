import pytest

from glfx.lexer import Lexer
from glfx.parser import ParseError, Parser, Precedence, parse
from glfx.syntax_tree import (
    AssignmentStatement,
    BinaryExpression,
    BooleanLiteral,
    ExpressionStatement,
    IdentifierExpr,
    IntegerLiteral,
    PrintStatement,
    Program,
)
from glfx.tokens import TokenType


def test_empty_source_gives_empty_program():
    assert parse("") == Program([])


def test_comments_only_give_empty_program():
    assert parse("# nothing\n### block ###\n") == Program([])


def test_assignment_respects_precedence():
    program = parse("x = 1 + 2 * 3;")
    expected = AssignmentStatement(
        IdentifierExpr("x"),
        BinaryExpression(
            IntegerLiteral(1),
            TokenType.PLUS,
            BinaryExpression(IntegerLiteral(2), TokenType.ASTERISK, IntegerLiteral(3)),
        ),
    )
    assert program.statements == [expected]


def test_subtraction_is_left_associative():
    program = parse("1 - 2 - 3;")
    expected = ExpressionStatement(
        BinaryExpression(
            BinaryExpression(IntegerLiteral(1), TokenType.MINUS, IntegerLiteral(2)),
            TokenType.MINUS,
            IntegerLiteral(3),
        )
    )
    assert program.statements == [expected]


def test_grouping_overrides_precedence():
    program = parse("(1 + 2) * 3;")
    expected = ExpressionStatement(
        BinaryExpression(
            BinaryExpression(IntegerLiteral(1), TokenType.PLUS, IntegerLiteral(2)),
            TokenType.ASTERISK,
            IntegerLiteral(3),
        )
    )
    assert program.statements == [expected]


@pytest.mark.parametrize("source, value", [("print true;", True), ("print false;", False)])
def test_print_boolean(source, value):
    assert parse(source).statements == [PrintStatement(BooleanLiteral(value))]


def test_semicolon_is_optional():
    assert parse("print 1").statements == [PrintStatement(IntegerLiteral(1))]


def test_multiple_statements_in_order():
    program = parse("a = 1; b = a; print b;")
    assert program.statements == [
        AssignmentStatement(IdentifierExpr("a"), IntegerLiteral(1)),
        AssignmentStatement(IdentifierExpr("b"), IdentifierExpr("a")),
        PrintStatement(IdentifierExpr("b")),
    ]


def test_assign_inside_group_is_binary():
    program = parse("(a = 1);")
    assert program.statements == [
        ExpressionStatement(
            BinaryExpression(IdentifierExpr("a"), TokenType.ASSIGN, IntegerLiteral(1))
        )
    ]


def test_largest_int_is_accepted():
    assert parse("print 2147483647;").statements == [PrintStatement(IntegerLiteral(2147483647))]


def test_missing_closing_paren():
    with pytest.raises(ParseError) as info:
        parse("print (1 + 2")
    assert info.value.errors == [
        "Parser error: Expected next token to be RPAREN, got EOF instead. (Literal: '')"
    ]


def test_no_prefix_function():
    with pytest.raises(ParseError) as info:
        parse(";")
    assert info.value.errors == ["No prefix parse function for SEMICOLON (;) found."]


def test_float_has_no_prefix_function():
    with pytest.raises(ParseError) as info:
        parse("print 1.5;")
    assert "FLOAT" in info.value.errors[0]


def test_error_message_joins_errors():
    with pytest.raises(ParseError) as info:
        parse(";")
    assert str(info.value) == "\n".join(info.value.errors)


def test_parse_top_level_node():
    parser = Parser(Lexer("print 1;"))
    assert parser.parse_top_level_node() == PrintStatement(IntegerLiteral(1))
    assert parser.errors == []


def test_parse_top_level_node_failure_records_error():
    parser = Parser(Lexer(")"))
    assert parser.parse_top_level_node() is None
    assert len(parser.errors) == 1


def test_assign_binds_tighter_than_sum():
    assert Precedence.LOWEST < Precedence.SUM < Precedence.PRODUCT < Precedence.ASSIGN
    program = parse("(a + b = 1);")
    assert program.statements == [
        ExpressionStatement(
            BinaryExpression(
                IdentifierExpr("a"),
                TokenType.PLUS,
                BinaryExpression(IdentifierExpr("b"), TokenType.ASSIGN, IntegerLiteral(1)),
            )
        )
    ]