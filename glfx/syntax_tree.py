"""Syntax tree nodes for programs in the language."""

from __future__ import annotations

from dataclasses import dataclass, field

from glfx.tokens import Token, TokenType


@dataclass
class Node:
    """Base of every syntax tree node."""


@dataclass
class Expression(Node):
    """An expression; ``resolved_type`` is filled in by semantic analysis."""

    resolved_type: TokenType = field(default=TokenType.ILLEGAL, kw_only=True)


@dataclass
class IntegerLiteral(Expression):
    """An integer constant such as ``42``."""

    value: int


@dataclass
class BooleanLiteral(Expression):
    """A ``true`` or ``false`` constant."""

    value: bool


@dataclass
class IdentifierExpr(Expression):
    """A reference to a variable by name."""

    name: str


@dataclass
class BinaryExpression(Expression):
    """An infix operation such as ``a + b``."""

    left: Expression
    op: TokenType
    right: Expression


@dataclass
class CommentNode(Node):
    """A comment kept in the tree."""

    token: Token
    comment: str = ""


@dataclass
class Statement(Node):
    """Base of all statements."""


@dataclass
class ExpressionStatement(Statement):
    """An expression evaluated for its own sake, e.g. ``a + 1;``."""

    expression: Expression


@dataclass
class AssignmentStatement(Statement):
    """An assignment such as ``x = 5;``."""

    identifier: IdentifierExpr
    value: Expression


@dataclass
class PrintStatement(Statement):
    """``print <expr>;``."""

    expression: Expression


@dataclass
class Program(Node):
    """The root of a parsed program: its statements in source order."""

    statements: list[Statement] = field(default_factory=list)

    def add_statement(self, statement: Statement) -> None:
        """Append a statement to the program."""
        self.statements.append(statement)