"""x86-64 assembly generation (Intel syntax, GNU as) for analyzed programs."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum

from glfx.syntax_tree import (
    AssignmentStatement,
    BinaryExpression,
    BooleanLiteral,
    Expression,
    ExpressionStatement,
    IdentifierExpr,
    IntegerLiteral,
    PrintStatement,
    Program,
    Statement,
)
from glfx.tokens import TokenType

_SLOT_SIZE = 8
_SHADOW_SPACE = 32

_ARG_REGISTERS = {
    "unix": ("rdi", "rsi", "rdx", "rcx", "r8", "r9"),
    "windows": ("rcx", "rdx", "r8", "r9"),
}

_BINARY_OPS = {
    TokenType.PLUS: ("add rax, rbx",),
    TokenType.MINUS: ("sub rax, rbx",),
    TokenType.ASTERISK: ("imul rbx",),
    TokenType.SLASH: ("cqo", "idiv rbx"),
}


class TargetPlatform(Enum):
    """Platforms whose calling conventions the generator knows."""

    UNKNOWN = "unknown"
    LINUX = "linux"
    WINDOWS_MINGW = "windows-mingw"
    MACOS = "macos"


@dataclass
class CodegenSymbol:
    """Where a variable lives on the stack, relative to ``rbp``, and its type."""

    stack_offset: int
    type: TokenType


class CodegenError(Exception):
    """Raised when code generation fails; holds every message found."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("\n".join(errors))
        self.errors = list(errors)


def detect_platform() -> TargetPlatform:
    """Return the platform of the running interpreter."""
    if sys.platform.startswith(("win32", "cygwin", "msys")):
        return TargetPlatform.WINDOWS_MINGW
    if sys.platform.startswith("linux"):
        return TargetPlatform.LINUX
    if sys.platform == "darwin":
        return TargetPlatform.MACOS
    return TargetPlatform.UNKNOWN


def _register_part(kind: TokenType, base: str) -> str:
    """Name of the part of ``base`` used for a value of type ``kind``."""
    if not base:
        return ""
    if kind is TokenType.BOOL:
        if len(base) > 1 and base[0] == "r":
            return base[0] + "l" + base[1:]
        if len(base) == 1:
            return base
        return ""
    return base


def _size_keyword(kind: TokenType) -> str:
    return "byte" if kind is TokenType.BOOL else "qword"


class CodeGenerator:
    """Emits assembly for a semantically analyzed :class:`Program`."""

    def __init__(self, platform: TargetPlatform | None = None) -> None:
        self.platform = detect_platform() if platform is None else platform
        self._init_errors: list[str] = []
        if self.platform is TargetPlatform.UNKNOWN:
            self._init_errors.append("Codegen Init: Unsupported host platform detected.")
        self._reset()

    def _reset(self) -> None:
        self._lines: list[str] = []
        self._errors = list(self._init_errors)
        self._symbols: dict[str, CodegenSymbol] = {}
        self._stack_offset = 0

    @property
    def _is_unix(self) -> bool:
        return self.platform in (TargetPlatform.LINUX, TargetPlatform.MACOS)

    def generate(self, program: Program | None) -> str:
        """Return the assembly text for ``program``; raise :class:`CodegenError` on failure."""
        self._reset()
        if program is None:
            self._errors.append("Code generation received a null AST program.")
            raise CodegenError(self._errors)

        self._prologue()
        for statement in program.statements:
            self._statement(statement)
        self._epilogue()

        if self._errors:
            raise CodegenError(self._errors)
        return "".join(self._lines)

    # --- output helpers -----------------------------------------------

    def _raw(self, line: str) -> None:
        self._lines.append(line + "\n")

    def _emit(self, instruction: str) -> None:
        self._lines.append(f"  {instruction}\n")

    def _comment(self, text: str) -> None:
        if self.platform is not TargetPlatform.UNKNOWN:
            self._lines.append(f"  # {text}\n")

    def _arg_register(self, index: int) -> str:
        if self._is_unix:
            registers = _ARG_REGISTERS["unix"]
        elif self.platform is TargetPlatform.WINDOWS_MINGW:
            registers = _ARG_REGISTERS["windows"]
        else:
            return ""
        return registers[index] if index < len(registers) else ""

    def _call(self, function: str) -> None:
        prefix = "_" if self.platform is TargetPlatform.MACOS else ""
        self._emit(f"call {prefix}{function}")

    # --- boilerplate --------------------------------------------------

    def _prologue(self) -> None:
        if self.platform is TargetPlatform.UNKNOWN:
            self._errors.append("Codegen Init: Cannot emit prologue for unknown platform.")
            return
        for line in (".intel_syntax noprefix", ".globl main", ".text", "main:"):
            self._raw(line)
        self._emit("push rbp")
        self._emit("mov rbp, rsp")
        if self.platform is TargetPlatform.WINDOWS_MINGW:
            self._emit(f"sub rsp, {_SHADOW_SPACE}")

    def _epilogue(self) -> None:
        if self.platform is TargetPlatform.UNKNOWN:
            self._errors.append("Codegen Finalize: Cannot emit epilogue for unknown platform.")
            return
        self._comment("Main Epilogue")
        if self._stack_offset < 0:
            self._emit(f"add rsp, {-self._stack_offset}")
        if self.platform is TargetPlatform.WINDOWS_MINGW:
            self._emit(f"add rsp, {_SHADOW_SPACE}")
        self._emit("mov rsp, rbp")
        self._emit("pop rbp")
        self._emit("mov eax, 0")
        self._emit("ret")

    def _print_integer(self, register: str) -> None:
        self._comment("Call print_int")
        self._emit(f"mov {self._arg_register(0)}, {_register_part(TokenType.INT, register)}")
        self._call("print_int")

    def _print_boolean(self, register: str) -> None:
        self._comment("Call print_bool")
        self._emit(f"mov {self._arg_register(0)}, {_register_part(TokenType.BOOL, register)}")
        self._call("print_bool")

    # --- statements ---------------------------------------------------

    def _statement(self, node: Statement) -> None:
        match node:
            case AssignmentStatement():
                self._assignment(node)
            case ExpressionStatement():
                self._comment("Expression Statement")
                self._expression(node.expression)
            case PrintStatement():
                self._print(node)
            case _:
                self._errors.append("Unhandled statement type in codegen dispatcher.")

    def _assignment(self, node: AssignmentStatement) -> None:
        name = node.identifier.name
        self._comment(f"Assignment: {name}")
        self._expression(node.value)
        value_type = node.value.resolved_type

        symbol = self._symbols.get(name)
        if symbol is None:
            self._define_variable(name, value_type)
            symbol = self._symbols.get(name)
        if symbol is None:
            self._errors.append(
                f"Internal Codegen Error: Failed to get symbol for '{name}' after definition."
            )
            return
        self._store(symbol, value_type)

    def _store(self, symbol: CodegenSymbol, kind: TokenType) -> None:
        self._emit(
            f"mov {_size_keyword(kind)} ptr [rbp{symbol.stack_offset}], "
            f"{_register_part(kind, 'rax')}"
        )

    def _print(self, node: PrintStatement) -> None:
        self._comment("Print Statement")
        self._expression(node.expression)
        kind = node.expression.resolved_type
        if kind is TokenType.INT:
            self._print_integer("rax")
        elif kind is TokenType.BOOL:
            self._print_boolean("rax")
        else:
            self._errors.append(
                f"Attempting to print an unsupported type (TokenType: {kind.value})."
            )

    def _define_variable(self, name: str, kind: TokenType) -> None:
        if name in self._symbols:
            self._errors.append(
                f"Internal Codegen Error: Variable '{name}' redefined in codegen symbol table."
            )
            return
        self._stack_offset -= _SLOT_SIZE
        self._symbols[name] = CodegenSymbol(self._stack_offset, kind)
        self._emit(f"sub rsp, {_SLOT_SIZE}")

    # --- expressions --------------------------------------------------

    def _expression(self, node: Expression) -> None:
        match node:
            case IntegerLiteral():
                self._comment(f"Integer Literal: {node.value}")
                self._emit(f"mov rax, {node.value}")
            case BooleanLiteral():
                self._comment(f"Boolean Literal: {'true' if node.value else 'false'}")
                self._emit(f"mov al, {1 if node.value else 0}")
                self._emit("movzx rax, al")
            case IdentifierExpr():
                self._identifier(node)
            case BinaryExpression():
                self._binary(node)
            case _:
                self._errors.append("Unhandled expression type in codegen dispatcher.")

    def _identifier(self, node: IdentifierExpr) -> None:
        self._comment(f"Identifier: {node.name}")
        symbol = self._symbols.get(node.name)
        if symbol is None:
            self._errors.append(f"Codegen Error: Undefined variable used '{node.name}'.")
            return
        self._store(symbol, symbol.type)

    def _binary(self, node: BinaryExpression) -> None:
        self._comment(f"Binary Expression: {node.op.value}")

        self._expression(node.right)
        self._emit("push rax")
        self._stack_offset += _SLOT_SIZE

        self._expression(node.left)
        self._emit("pop rbx")
        self._stack_offset -= _SLOT_SIZE

        instructions = _BINARY_OPS.get(node.op)
        if instructions is None:
            self._errors.append(
                f"Unhandled binary operator in code generation: {node.op.value}"
            )
            return
        for instruction in instructions:
            self._emit(instruction)


def generate(program: Program | None, platform: TargetPlatform | None = None) -> str:
    """Return assembly for ``program`` on ``platform`` (the host platform by default)."""
    return CodeGenerator(platform).generate(program)