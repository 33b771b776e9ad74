"""
Parser for the monkeycc language.

Statements are parsed by recursive descent; expressions by Pratt parsing,
where each token kind may have a prefix rule (how an expression starts with
it) and an infix rule (how it continues one), and a precedence bound decides
how far the infix fold loop may extend the left operand.

Precedence (low to high):
    LOWEST < EQUALS (== !=) < LESSGREATER (< > <= >=) < SUM (+ -)
    < PRODUCT (* /) < PREFIX (!x -x +x) < CALL (f(x))

The parser never raises on malformed input. Every structural mismatch is
recorded as a diagnostic and the offending construct degrades to a
MissingExpr placeholder, so ``parse_program()`` always returns a Program.
Check ``errors`` before trusting the tree, or use ``parse()`` which raises.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from enum import IntEnum
from pathlib import Path

from monkeycc.core.ast import (
    MISSING,
    NO_STATEMENT,
    BlockStatement,
    BooleanLiteral,
    CallExpr,
    Expr,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    IfExpr,
    InfixExpr,
    InfixOp,
    IntegerLiteral,
    LetStatement,
    NoStatement,
    PrefixExpr,
    PrefixOp,
    Program,
    ReturnStatement,
    Statement,
)
from monkeycc.core.errors import make_parse_error
from monkeycc.core.lexer import Lexer
from monkeycc.core.token import Token, TokenKind
from monkeycc.core.values import INT64_MAX

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Binding strength of operators, weakest first."""

    LOWEST = 0
    EQUALS = 1
    LESSGREATER = 2
    SUM = 3
    PRODUCT = 4
    PREFIX = 5
    CALL = 6


PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.LE: Precedence.LESSGREATER,
    TokenKind.GE: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}

PrefixParseFn = Callable[[], Expr]
InfixParseFn = Callable[[Expr], Expr]


class Parser:
    """Pulls tokens from a Lexer and builds a Program."""

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self._errors: list[str] = []
        self.cur_token = Token(TokenKind.EOF, "")
        self.peek_token = Token(TokenKind.EOF, "")

        self._prefix_parse_fns: dict[TokenKind, PrefixParseFn] = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.FLOAT: self.parse_float_literal,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.PLUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function,
        }
        self._infix_parse_fns: dict[TokenKind, InfixParseFn] = {
            kind: self.parse_infix_expression for kind in PRECEDENCES
        }
        self._infix_parse_fns[TokenKind.LPAREN] = self.parse_call_expression

        # Fill cur_token and peek_token
        self.next_token()
        self.next_token()

    @property
    def errors(self) -> list[str]:
        """Diagnostics recorded so far, in order."""
        return list(self._errors)

    # -- Token helpers --

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind == kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind == kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the next token is ``kind``; otherwise record a diagnostic."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self._peek_error(kind)
        return False

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def _record(self, message: str) -> None:
        logger.debug("parse diagnostic at offset %d: %s", self.cur_token.pos, message)
        self._errors.append(message)

    def _peek_error(self, kind: TokenKind) -> None:
        self._record(f"expected next token to be {kind}, got {self.peek_token.kind} instead")

    def _skip_to_semicolon(self) -> None:
        while not self.cur_token_is(TokenKind.SEMICOLON) and not self.cur_token_is(TokenKind.EOF):
            self.next_token()

    # -- Statements --

    def parse_program(self) -> Program:
        """Parse statements until end of input."""
        statements: list[Statement] = []
        while not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if not isinstance(stmt, NoStatement):
                statements.append(stmt)
            self.next_token()
        return Program(statements=statements)

    def parse_statement(self) -> Statement:
        if self.cur_token.kind == TokenKind.LET:
            return self.parse_let_statement()
        if self.cur_token.kind == TokenKind.RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Statement:
        """let <ident> = <expr> ... ;

        Tokens after the value are skipped through the terminating ``;`` (or to
        end of input). A malformed head is dropped the same way.
        """
        if not self.expect_peek(TokenKind.IDENT):
            self._skip_to_semicolon()
            return NO_STATEMENT
        name = Identifier(value=self.cur_token.literal)

        if not self.expect_peek(TokenKind.ASSIGN):
            self._skip_to_semicolon()
            return NO_STATEMENT

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        self._skip_to_semicolon()
        return LetStatement(name=name, value=value)

    def parse_return_statement(self) -> ReturnStatement:
        """return <expr> ... ;"""
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        self._skip_to_semicolon()
        return ReturnStatement(value=value)

    def parse_expression_statement(self) -> ExpressionStatement:
        """<expr> [;]"""
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ExpressionStatement(expression=expression)

    def parse_block_statement(self) -> BlockStatement:
        """'{' <statement>* '}' with cur_token on the opening brace."""
        statements: list[Statement] = []
        self.next_token()

        while not self.cur_token_is(TokenKind.RBRACE) and not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if not isinstance(stmt, NoStatement):
                statements.append(stmt)
            self.next_token()

        if self.cur_token_is(TokenKind.EOF):
            self._record(
                f"expected next token to be {TokenKind.RBRACE}, got {TokenKind.EOF} instead"
            )
        return BlockStatement(statements=statements)

    # -- Expressions --

    def parse_expression(self, precedence: Precedence) -> Expr:
        """Parse one expression whose operators all bind tighter than ``precedence``."""
        prefix = self._prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self._record(f"no prefix parse function for {self.cur_token.kind} found")
            return MISSING
        left = prefix()

        while (
            not self.peek_token_is(TokenKind.SEMICOLON)
            and not self.peek_token_is(TokenKind.EOF)
            and precedence < self.peek_precedence()
        ):
            infix = self._infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(value=self.cur_token.literal)

    def parse_integer_literal(self) -> Expr:
        literal = self.cur_token.literal
        value = int(literal)
        if value > INT64_MAX:
            self._record(f"could not parse {literal} as integer")
            return MISSING
        return IntegerLiteral(value=value)

    def parse_float_literal(self) -> Expr:
        literal = self.cur_token.literal
        value = float(literal)
        if not math.isfinite(value):
            self._record(f"could not parse {literal} as float")
            return MISSING
        return FloatLiteral(value=value)

    def parse_boolean(self) -> BooleanLiteral:
        return BooleanLiteral(value=self.cur_token_is(TokenKind.TRUE))

    def parse_prefix_expression(self) -> PrefixExpr:
        operator = PrefixOp(self.cur_token.literal)
        self.next_token()
        operand = self.parse_expression(Precedence.PREFIX)
        return PrefixExpr(operator=operator, operand=operand)

    def parse_infix_expression(self, left: Expr) -> InfixExpr:
        precedence = self.cur_precedence()
        operator = InfixOp(self.cur_token.literal)
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpr(left=left, operator=operator, right=right)

    def parse_grouped_expression(self) -> Expr:
        """'(' <expr> ')'"""
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenKind.RPAREN):
            return MISSING
        return expression

    def parse_if_expression(self) -> Expr:
        """if '(' <cond> ')' <block> [else <block>]"""
        if not self.expect_peek(TokenKind.LPAREN):
            return MISSING

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TokenKind.RPAREN):
            return MISSING
        if not self.expect_peek(TokenKind.LBRACE):
            return MISSING

        consequence = self.parse_block_statement()

        alternative: BlockStatement | NoStatement = NO_STATEMENT
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return MISSING
            alternative = self.parse_block_statement()

        return IfExpr(condition=condition, consequence=consequence, alternative=alternative)

    def parse_function(self) -> Expr:
        """fn '(' <params> ')' <block>"""
        if not self.expect_peek(TokenKind.LPAREN):
            return MISSING

        parameters = self.parse_function_parameters()
        if parameters is None:
            return MISSING

        if not self.expect_peek(TokenKind.LBRACE):
            return MISSING

        body = self.parse_block_statement()
        return FunctionLiteral(parameters=parameters, body=body)

    def parse_function_parameters(self) -> list[Identifier] | None:
        """Comma-separated identifiers up to ')', with cur_token on '('."""
        identifiers: list[Identifier] = []

        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenKind.IDENT):
            return None
        identifiers.append(Identifier(value=self.cur_token.literal))

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            identifiers.append(Identifier(value=self.cur_token.literal))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, callee: Expr) -> Expr:
        arguments = self.parse_call_arguments()
        if arguments is None:
            return MISSING
        return CallExpr(callee=callee, arguments=arguments)

    def parse_call_arguments(self) -> list[Expr] | None:
        """Comma-separated expressions up to ')', with cur_token on '('."""
        args: list[Expr] = []

        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return args

        self.next_token()
        args.append(self.parse_expression(Precedence.LOWEST))

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            args.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return args


def parse(source: str, file: Path | None = None) -> Program:
    """Parse source text into a Program.

    Args:
        source: Program text (e.g., "let x = 5; x * 2")
        file: Where the source came from, used in the error message

    Returns:
        Parsed Program.

    Raises:
        ParseError: If the parser recorded any diagnostics.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    if parser.errors:
        raise make_parse_error(parser.errors, file)
    return program
