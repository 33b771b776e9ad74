"""
monkeycc - a small dynamically-typed expression language.

Lexer, Pratt parser and tree-walking evaluator, plus a command line front
end (``monkeycc run``, ``monkeycc repl``).
"""

from __future__ import annotations

from ._version import get_version
from .core import Environment, Lexer, Parser, Token, TokenKind, Value, evaluate, parse, tokenize
from .core.errors import ConfigError, MonkeyError, ParseError

__version__ = get_version()

__all__ = [
    "__version__",
    "ConfigError",
    "Environment",
    "Lexer",
    "MonkeyError",
    "ParseError",
    "Parser",
    "Token",
    "TokenKind",
    "Value",
    "evaluate",
    "parse",
    "tokenize",
]
