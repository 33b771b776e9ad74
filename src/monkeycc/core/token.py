"""
Token model for the monkeycc language.

A token is the smallest lexical unit: a kind from a closed set plus the
literal source text it was read from.
"""

from __future__ import annotations

from enum import StrEnum


class TokenKind(StrEnum):
    """Lexical categories produced by the lexer."""

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"
    FLOAT = "FLOAT"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"
    TRUE = "TRUE"
    FALSE = "FALSE"


class Token:
    """A single token from the lexer.

    Equality is structural over ``kind`` and ``literal``; ``pos`` is the
    source offset the token started at and does not take part in it.
    """

    __slots__ = ("kind", "literal", "pos")

    def __init__(self, kind: TokenKind, literal: str, pos: int = 0) -> None:
        self.kind = kind
        self.literal = literal
        self.pos = pos

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.literal == other.literal

    def __hash__(self) -> int:
        return hash((self.kind, self.literal))

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.literal!r}, pos={self.pos})"


KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}


def lookup_ident(word: str) -> TokenKind:
    """Classify an identifier-shaped word as a keyword or a plain identifier."""
    return KEYWORDS.get(word, TokenKind.IDENT)
