"""Pratt parser that builds a syntax tree from the lexer's tokens."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from glfx.lexer import Lexer
from glfx.syntax_tree import (
    AssignmentStatement,
    BinaryExpression,
    BooleanLiteral,
    CommentNode,
    Expression,
    ExpressionStatement,
    IdentifierExpr,
    IntegerLiteral,
    Node,
    PrintStatement,
    Program,
    Statement,
)
from glfx.tokens import Token, TokenType

_INT_MAX = 2**31 - 1
_INT_MIN = -(2**31)

_COMMENT_TYPES = frozenset({TokenType.COMMENT_SINGLE_LINE, TokenType.COMMENT_MULTI_LINE})


class Precedence(IntEnum):
    """Binding power of operators; a higher value binds tighter."""

    LOWEST = 1
    SUM = 2
    PRODUCT = 3
    ASSIGN = 4


_PRECEDENCES = {
    TokenType.ASSIGN: Precedence.ASSIGN,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
}


class ParseError(Exception):
    """Raised when a program could not be parsed; holds every message found."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("\n".join(errors))
        self.errors = list(errors)


class Parser:
    """Parses the tokens of one lexer into a :class:`Program`."""

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._errors: list[str] = []
        self._current = Token(TokenType.ILLEGAL, "")
        self._peek = Token(TokenType.ILLEGAL, "")
        self._next_token()
        self._next_token()

        self._prefix_fns: dict[TokenType, Callable[[], Expression | None]] = {
            TokenType.INT: self._parse_integer_literal,
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.LPAREN: self._parse_grouped_expression,
            TokenType.TRUE: self._parse_boolean_literal,
            TokenType.FALSE: self._parse_boolean_literal,
        }
        self._infix_fns: dict[TokenType, Callable[[Expression], Expression | None]] = {
            op: self._parse_infix_expression
            for op in (
                TokenType.PLUS,
                TokenType.MINUS,
                TokenType.ASTERISK,
                TokenType.SLASH,
                TokenType.ASSIGN,
            )
        }

    @property
    def errors(self) -> list[str]:
        """Messages recorded so far."""
        return list(self._errors)

    # --- token stream -------------------------------------------------

    def _next_token(self) -> None:
        self._current = self._peek
        self._peek = self._lexer.next_token()
        while self._peek.type in _COMMENT_TYPES:
            self._peek = self._lexer.next_token()

    def _peek_is(self, kind: TokenType) -> bool:
        return self._peek.type is kind

    def _expect_peek(self, kind: TokenType) -> bool:
        if self._peek_is(kind):
            self._next_token()
            return True
        self._errors.append(
            f"Parser error: Expected next token to be {kind.value}, "
            f"got {self._peek.type.value} instead. (Literal: '{self._peek.literal}')"
        )
        return False

    def _peek_precedence(self) -> Precedence:
        return _PRECEDENCES.get(self._peek.type, Precedence.LOWEST)

    def _current_precedence(self) -> Precedence:
        return _PRECEDENCES.get(self._current.type, Precedence.LOWEST)

    # --- program and statements ---------------------------------------

    def parse_program(self) -> Program:
        """Parse the whole input; raise :class:`ParseError` if anything failed."""
        program = Program()
        while self._current.type is not TokenType.END_OF_FILE:
            node = self.parse_top_level_node()
            if isinstance(node, Statement):
                program.add_statement(node)
            self._next_token()
        if self._errors:
            raise ParseError(self._errors)
        return program

    def parse_top_level_node(self) -> Node | None:
        """Parse the node that starts at the current token; None on failure."""
        if self._current.type in _COMMENT_TYPES:
            return CommentNode(self._current)
        return self._parse_statement()

    def _parse_statement(self) -> Statement | None:
        if self._current.type is TokenType.PRINT:
            return self._parse_print_statement()
        if self._current.type is TokenType.IDENTIFIER and self._peek_is(TokenType.ASSIGN):
            return self._parse_assignment_statement()
        return self._parse_expression_statement()

    def _skip_optional_semicolon(self) -> None:
        if self._peek_is(TokenType.SEMICOLON):
            self._next_token()

    def _parse_assignment_statement(self) -> AssignmentStatement | None:
        identifier = IdentifierExpr(self._current.literal)
        if not self._expect_peek(TokenType.ASSIGN):
            return None
        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        self._skip_optional_semicolon()
        return AssignmentStatement(identifier, value)

    def _parse_expression_statement(self) -> ExpressionStatement | None:
        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        self._skip_optional_semicolon()
        return ExpressionStatement(expression)

    def _parse_print_statement(self) -> PrintStatement | None:
        self._next_token()
        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        self._skip_optional_semicolon()
        return PrintStatement(expression)

    # --- expressions --------------------------------------------------

    def _parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self._prefix_fns.get(self._current.type)
        if prefix is None:
            self._errors.append(
                f"No prefix parse function for {self._current.type.value} "
                f"({self._current.literal}) found."
            )
            return None

        left = prefix()
        if left is None:
            return None

        while not self._peek_is(TokenType.SEMICOLON) and precedence < self._peek_precedence():
            infix = self._infix_fns.get(self._peek.type)
            if infix is None:
                return left
            self._next_token()
            left = infix(left)
            if left is None:
                return None
        return left

    def _parse_integer_literal(self) -> Expression | None:
        literal = self._current.literal
        try:
            value = int(literal.strip())
        except ValueError:
            self._errors.append(f"Could not parse {literal} as integer.")
            return None
        if not _INT_MIN <= value <= _INT_MAX:
            self._errors.append(f"Integer literal {literal} out of range.")
            return None
        return IntegerLiteral(value)

    def _parse_identifier(self) -> Expression:
        return IdentifierExpr(self._current.literal)

    def _parse_boolean_literal(self) -> Expression:
        return BooleanLiteral(self._current.type is TokenType.TRUE)

    def _parse_grouped_expression(self) -> Expression | None:
        self._next_token()
        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self._expect_peek(TokenType.RPAREN):
            return None
        return expression

    def _parse_infix_expression(self, left: Expression) -> Expression | None:
        op = self._current.type
        precedence = self._current_precedence()
        self._next_token()
        right = self._parse_expression(precedence)
        if right is None:
            return None
        return BinaryExpression(left, op, right)


def parse(source: str) -> Program:
    """Parse ``source`` into a program; raise :class:`ParseError` on failure."""
    return Parser(Lexer(source)).parse_program()