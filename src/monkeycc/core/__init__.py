"""
monkeycc core: lexer, parser, AST, evaluator.

Usage:
    from monkeycc.core import Lexer, Parser, evaluate

    parser = Parser(Lexer("let x = 5; x * 2"))
    program = parser.parse_program()
    if not parser.errors:
        result = evaluate(program)
        # result.inspect() == "10"
"""

from monkeycc.core.environment import Environment
from monkeycc.core.evaluator import evaluate
from monkeycc.core.lexer import Lexer, tokenize
from monkeycc.core.parser import Parser, parse
from monkeycc.core.token import Token, TokenKind
from monkeycc.core.values import Value

__all__ = [
    "Environment",
    "Lexer",
    "Parser",
    "Token",
    "TokenKind",
    "Value",
    "evaluate",
    "parse",
    "tokenize",
]
