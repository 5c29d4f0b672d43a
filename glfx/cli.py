"""Command-line driver: parse, check and compile a source file to assembly."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from glfx.codegen import CodegenError, CodeGenerator
from glfx.lexer import Lexer
from glfx.parser import ParseError, Parser
from glfx.semantic import SemanticAnalyzer, SemanticError
from glfx.syntax_tree import (
    AssignmentStatement,
    BinaryExpression,
    BooleanLiteral,
    ExpressionStatement,
    IdentifierExpr,
    IntegerLiteral,
    Node,
    PrintStatement,
    Program,
)

PROGRAM_NAME = "glfx"
DEFAULT_OUTPUT = "output.s"
AST_FILENAME = "ast.txt"


def _format_lines(node: Node, indent: int, lines: list[str]) -> None:
    prefix = "  " * indent
    match node:
        case Program():
            lines.append(f"{prefix}Program:")
            for statement in node.statements:
                _format_lines(statement, indent + 1, lines)
        case AssignmentStatement():
            lines.append(f"{prefix}Assignment:")
            lines.append(
                f"{prefix}  Identifier: {node.identifier.name} "
                f"(Resolved: {node.identifier.resolved_type.value})"
            )
            lines.append(f"{prefix}  Value:")
            _format_lines(node.value, indent + 2, lines)
        case ExpressionStatement():
            lines.append(
                f"{prefix}ExpressionStatement "
                f"(Resolved: {node.expression.resolved_type.value}):"
            )
            _format_lines(node.expression, indent + 1, lines)
        case PrintStatement():
            lines.append(f"{prefix}PrintStatement (Arg: {node.expression.resolved_type.value}):")
            _format_lines(node.expression, indent + 1, lines)
        case BinaryExpression():
            lines.append(
                f"{prefix}BinaryExpr (Op: {node.op.value}, "
                f"Resolved: {node.resolved_type.value}):"
            )
            lines.append(f"{prefix}  Left:")
            _format_lines(node.left, indent + 2, lines)
            lines.append(f"{prefix}  Right:")
            _format_lines(node.right, indent + 2, lines)
        case IntegerLiteral():
            lines.append(
                f"{prefix}IntegerLiteral: {node.value} (Resolved: {node.resolved_type.value})"
            )
        case BooleanLiteral():
            text = "true" if node.value else "false"
            lines.append(
                f"{prefix}BooleanLiteral: {text} (Resolved: {node.resolved_type.value})"
            )
        case IdentifierExpr():
            lines.append(
                f"{prefix}IdentifierExpr: {node.name} (Resolved: {node.resolved_type.value})"
            )
        case _:
            lines.append(f"{prefix}Unknown AST Node (typeid: {type(node).__name__})")


def format_ast(node: Node | None) -> str:
    """Render a syntax tree as indented text, one node per line."""
    if node is None:
        return ""
    lines: list[str] = []
    _format_lines(node, 0, lines)
    return "".join(line + "\n" for line in lines)


def read_source(path: str | Path) -> str:
    """Return the whole text of the file at ``path``."""
    return Path(path).read_text()


def _report(title: str, errors: Sequence[str]) -> None:
    print(f"{title}:", file=sys.stderr)
    for message in errors:
        print(f"  - {message}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Compile the file named in ``argv`` to assembly; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not 1 <= len(args) <= 2:
        print(
            f"Usage: {PROGRAM_NAME} [input_file] [output_asm_file (optional)]",
            file=sys.stderr,
        )
        return 1

    input_filename = args[0]
    output_asm = args[1] if len(args) == 2 else DEFAULT_OUTPUT

    try:
        source = read_source(input_filename)
    except OSError:
        print(f"Error: Could not open file {input_filename}", file=sys.stderr)
        return 1
    if not source:
        return 1

    print(f"Processing {input_filename} ...\n")
    print(f"{source}\n---\n")

    try:
        program = Parser(Lexer(source)).parse_program()
    except ParseError as exc:
        _report("Parser Errors", exc.errors)
        return 1
    print("Parsing successful.\n")

    try:
        SemanticAnalyzer().analyze(program)
    except SemanticError as exc:
        _report("Semantic Errors", exc.errors)
        return 1
    print("Semantic analysis successful.\n")

    try:
        Path(AST_FILENAME).write_text(format_ast(program))
    except OSError:
        print(f"Error: Could not open {AST_FILENAME} for writing.", file=sys.stderr)
        return 1
    print(f"AST written to {AST_FILENAME}\n")

    try:
        assembly = CodeGenerator().generate(program)
    except CodegenError as exc:
        _report("Codegen Errors", exc.errors)
        return 1
    print(f"Code generation successful. Writing to {output_asm}")

    try:
        Path(output_asm).write_text(assembly)
    except OSError:
        print(f"Error: Could not open {output_asm} for writing.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())