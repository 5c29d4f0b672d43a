"""Token kinds and the token record produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Kinds of token; each value is the display name of the kind."""

    ILLEGAL = "ILLEGAL"
    END_OF_FILE = "EOF"
    IDENTIFIER = "IDENTIFIER"
    INT = "INT"
    FLOAT = "FLOAT"
    STRING = "STRING"
    OCTAL = "OCTAL"
    HEX = "HEX"
    CHAR = "CHAR"
    BOOL = "BOOL"
    ASSIGN = "ASSIGN"
    PLUS = "PLUS"
    MINUS = "MINUS"
    ASTERISK = "ASTERISK"
    SLASH = "SLASH"
    SEMICOLON = "SEMICOLON"
    COLON = "COLON"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    PRINT = "PRINT"
    TRUE = "TRUE"
    FALSE = "FALSE"
    COMMENT_MULTI_LINE = "COMMENT_MULTI_LINE"
    COMMENT_SINGLE_LINE = "COMMENT_SINGLE_LINE"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A single lexical token: its kind and the text it was read from."""

    type: TokenType
    literal: str

    def __str__(self) -> str:
        return f'Token(Type: {self.type.value}, Literal: "{self.literal}")'