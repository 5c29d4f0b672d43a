"""Turns source text into a stream of tokens."""

from __future__ import annotations

from collections.abc import Iterator

from glfx.tokens import Token, TokenType

_WHITESPACE = frozenset(" \t\n\v\f\r")

_KEYWORDS = {
    "print": TokenType.PRINT,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

_SINGLE_CHAR = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ":": TokenType.COLON,
}


def _is_digit(ch: str) -> bool:
    return ch != "" and ch in "0123456789"


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def _is_ident_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


class Lexer:
    """Reads tokens one at a time from a source string.

    Whitespace, ``#`` line comments and ``### ... ###`` block comments are
    skipped. Once the input is exhausted every call yields an EOF token.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0

    @property
    def _ch(self) -> str:
        return self._source[self._pos] if self._pos < len(self._source) else ""

    def _peek(self, ahead: int = 0) -> str:
        index = self._pos + 1 + ahead
        return self._source[index] if index < len(self._source) else ""

    def _advance(self, count: int = 1) -> None:
        self._pos = min(self._pos + count, len(self._source))

    def _skip_while(self, predicate) -> None:
        while self._ch and predicate(self._ch):
            self._advance()

    def _at_block_comment(self) -> bool:
        return self._ch == "#" and self._peek(0) == "#" and self._peek(1) == "#"

    def _skip_ignorable(self) -> None:
        while True:
            self._skip_while(lambda c: c in _WHITESPACE)
            if self._at_block_comment():
                self._skip_block_comment()
            elif self._ch == "#":
                self._skip_line_comment()
            else:
                return

    def _skip_line_comment(self) -> None:
        self._skip_while(lambda c: c != "\n")
        if self._ch == "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        self._advance(3)
        while self._ch:
            if self._at_block_comment():
                self._advance(3)
                return
            self._advance()

    def _read_string(self) -> str:
        self._advance()
        start = self._pos
        self._skip_while(lambda c: c != '"')
        text = self._source[start:self._pos]
        self._advance()
        return text

    def _read_char_literal(self) -> str:
        self._advance()
        ch = self._ch
        if not ch:
            return ""
        self._advance()
        # The closing quote is consumed whatever it turns out to be.
        self._advance()
        return ch

    def _read_number(self) -> Token:
        start = self._pos
        if self._ch == "0" and self._peek() in ("x", "X"):
            self._advance(2)
            self._skip_while(_is_digit)
            return Token(TokenType.HEX, self._source[start:self._pos])

        self._skip_while(_is_digit)
        if self._ch == "." and _is_digit(self._peek()):
            self._advance()
            self._skip_while(_is_digit)
            return Token(TokenType.FLOAT, self._source[start:self._pos])

        literal = self._source[start:self._pos]
        if len(literal) > 1 and literal.startswith("0"):
            return Token(TokenType.OCTAL, literal)
        return Token(TokenType.INT, literal)

    def next_token(self) -> Token:
        """Return the next token, or an EOF token when input is exhausted."""
        self._skip_ignorable()
        ch = self._ch

        if ch == '"':
            return Token(TokenType.STRING, self._read_string())
        if ch == "'":
            return Token(TokenType.CHAR, self._read_char_literal())
        if _is_ident_start(ch):
            start = self._pos
            self._skip_while(_is_ident_char)
            literal = self._source[start:self._pos]
            return Token(_KEYWORDS.get(literal, TokenType.IDENTIFIER), literal)
        if _is_digit(ch):
            return self._read_number()
        if not ch:
            return Token(TokenType.END_OF_FILE, "")

        self._advance()
        return Token(_SINGLE_CHAR.get(ch, TokenType.ILLEGAL), ch)

    def __iter__(self) -> Iterator[Token]:
        """Yield the remaining tokens, ending with a single EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.END_OF_FILE:
                return


def tokenize(source: str) -> list[Token]:
    """Return every token of ``source``, ending with an EOF token."""
    return list(Lexer(source))