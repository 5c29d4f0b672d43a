"""Name resolution and type checking of a parsed program."""

from __future__ import annotations

from glfx.symbol_table import SymbolKind, SymbolTable
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
)
from glfx.tokens import TokenType


class SemanticError(Exception):
    """Raised when analysis finds problems; holds every message found."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("\n".join(errors))
        self.errors = list(errors)


def _operand_type(expression: Expression) -> TokenType:
    if isinstance(expression, IntegerLiteral):
        return TokenType.INT
    if isinstance(expression, (IdentifierExpr, BinaryExpression)):
        return expression.resolved_type
    return TokenType.ILLEGAL


class SemanticAnalyzer:
    """Resolves names and annotates expressions with their types."""

    def __init__(self) -> None:
        self.scope = SymbolTable()
        self._errors: list[str] = []

    @property
    def errors(self) -> list[str]:
        """Messages recorded so far."""
        return list(self._errors)

    def analyze(self, program: Program) -> None:
        """Analyze ``program`` in place; raise :class:`SemanticError` on problems."""
        self._visit(program)
        if self._errors:
            raise SemanticError(self._errors)

    def _visit(self, node: Node) -> None:
        match node:
            case Program():
                for statement in node.statements:
                    self._visit(statement)
            case AssignmentStatement():
                self._visit_assignment(node)
            case ExpressionStatement():
                self._visit(node.expression)
            case PrintStatement():
                self._visit(node.expression)
                if node.expression.resolved_type is TokenType.ILLEGAL:
                    self._errors.append(
                        "Semantic Error: PRINT statement argument has an unresolved or invalid type."
                    )
            case CommentNode():
                pass
            case BooleanLiteral():
                node.resolved_type = TokenType.BOOL
            case IntegerLiteral():
                node.resolved_type = TokenType.INT
            case IdentifierExpr():
                entry = self.scope.resolve(node.name)
                if entry is None:
                    self._errors.append(f"Semantic Error: Undefined variable '{node.name}'.")
                    node.resolved_type = TokenType.ILLEGAL
                else:
                    node.resolved_type = entry.declared_type
            case BinaryExpression():
                self._visit_binary(node)

    def _visit_assignment(self, node: AssignmentStatement) -> None:
        self._visit(node.value)
        value_type = node.value.resolved_type
        name = node.identifier.name
        entry = self.scope.resolve(name)

        if entry is None:
            if value_type is TokenType.ILLEGAL:
                self._errors.append(
                    f"Semantic Error: Attempting to define variable '{name}' with an unresolved type."
                )
            self.scope.define(name, SymbolKind.VARIABLE, value_type)
            node.identifier.resolved_type = value_type
            return

        declared = entry.declared_type
        node.identifier.resolved_type = declared
        if declared is value_type:
            return
        if value_type is TokenType.ILLEGAL:
            self._errors.append(
                f"Semantic Warning: Assignment value for '{name}' has an unresolved type. "
                f"Variable type remains {declared.value}."
            )
        else:
            self._errors.append(
                f"Semantic Error: Type mismatch in assignment to '{name}'. "
                f"Expected {declared.value}, but got {value_type.value}."
            )
        node.identifier.resolved_type = TokenType.ILLEGAL

    def _visit_binary(self, node: BinaryExpression) -> None:
        self._visit(node.left)
        self._visit(node.right)
        left_type = _operand_type(node.left)
        right_type = _operand_type(node.right)

        if TokenType.ILLEGAL in (left_type, right_type):
            node.resolved_type = TokenType.ILLEGAL
        elif left_type is not TokenType.INT or right_type is not TokenType.INT:
            self._errors.append(
                f"Semantic Error: Arithmetic operator '{node.op.value}' expects integer operands."
            )
            node.resolved_type = TokenType.ILLEGAL
        else:
            node.resolved_type = TokenType.INT

        if (
            node.op is TokenType.SLASH
            and isinstance(node.right, IntegerLiteral)
            and node.right.value == 0
        ):
            self._errors.append("Semantic Error: Division by zero detected.")
            node.resolved_type = TokenType.ILLEGAL


def analyze(program: Program) -> Program:
    """Analyze ``program`` in place and return it."""
    SemanticAnalyzer().analyze(program)
    return program