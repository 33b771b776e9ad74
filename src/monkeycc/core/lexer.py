"""
Lexer for the monkeycc language.

Converts source text into tokens one at a time. The lexer is a cursor over
the input with a single character of lookahead; it never fails, bytes it
cannot classify come back as ILLEGAL tokens for the parser to judge.
"""

from __future__ import annotations

from collections.abc import Iterator

from monkeycc.core.token import Token, TokenKind, lookup_ident

_WHITESPACE = frozenset(" \t\n\r")
_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_DIGITS = frozenset("0123456789")

_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}

# First character -> (kind alone, kind when followed by "=")
_MAYBE_TWO_CHAR: dict[str, tuple[TokenKind, TokenKind]] = {
    "=": (TokenKind.ASSIGN, TokenKind.EQ),
    "!": (TokenKind.BANG, TokenKind.NOT_EQ),
    "<": (TokenKind.LT, TokenKind.LE),
    ">": (TokenKind.GT, TokenKind.GE),
}

# Marks the cursor being past the end of input
_END = ""


def is_letter(ch: str) -> bool:
    return ch in _LETTERS


def is_digit(ch: str) -> bool:
    return ch in _DIGITS


class Lexer:
    """Byte-cursor scanner producing one token per ``next_token()`` call."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.read_position = 0
        self.ch = _END
        self._read_char()

    def _read_char(self) -> None:
        """Advance the cursor by one character, clamping at end of input."""
        if self.read_position >= len(self.source):
            self.ch = _END
            self.position = len(self.source)
            self.read_position = self.position + 1
            return
        self.ch = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def _peek_char(self) -> str:
        if self.read_position >= len(self.source):
            return _END
        return self.source[self.read_position]

    def _skip_whitespace(self) -> None:
        while self.ch in _WHITESPACE:
            self._read_char()

    def _read_identifier(self) -> str:
        start = self.position
        while is_letter(self.ch):
            self._read_char()
        return self.source[start : self.position]

    def _read_number(self) -> tuple[TokenKind, str]:
        start = self.position
        kind = TokenKind.INT
        while is_digit(self.ch):
            self._read_char()
        if self.ch == "." and is_digit(self._peek_char()):
            kind = TokenKind.FLOAT
            self._read_char()
            while is_digit(self.ch):
                self._read_char()
        return kind, self.source[start : self.position]

    def next_token(self) -> Token:
        """Skip whitespace, then consume and return exactly one token."""
        self._skip_whitespace()
        start = self.position
        ch = self.ch

        if ch == _END:
            return Token(TokenKind.EOF, "", start)

        if ch in _MAYBE_TWO_CHAR:
            single, double = _MAYBE_TWO_CHAR[ch]
            if self._peek_char() == "=":
                self._read_char()
                self._read_char()
                return Token(double, ch + "=", start)
            self._read_char()
            return Token(single, ch, start)

        if ch in _SINGLE_CHAR:
            self._read_char()
            return Token(_SINGLE_CHAR[ch], ch, start)

        if is_letter(ch):
            word = self._read_identifier()
            return Token(lookup_ident(word), word, start)

        if is_digit(ch):
            kind, literal = self._read_number()
            return Token(kind, literal, start)

        self._read_char()
        return Token(TokenKind.ILLEGAL, ch, start)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to, but not including, end of input."""
        while True:
            tok = self.next_token()
            if tok.kind == TokenKind.EOF:
                return
            yield tok


def tokenize(source: str) -> list[Token]:
    """Tokenize a whole source string, including the trailing EOF token."""
    lexer = Lexer(source)
    tokens = list(lexer)
    tokens.append(lexer.next_token())
    return tokens
