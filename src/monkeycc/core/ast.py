"""
Abstract syntax tree for the monkeycc language.

Every node is a frozen pydantic model that exclusively owns its children,
so a parsed Program is a strict, immutable tree. ``str(node)`` renders the
node in fully-parenthesized canonical form, which is what diagnostics and
tests compare against.

Statements:
- let x = <expr>;
- return <expr>;
- <expr>
- { <statement>* }

Expressions:
- Identifiers, integer/float/boolean literals
- Prefix: !x, -x, +x
- Infix: + - * / < > <= >= == !=
- if (<cond>) { ... } else { ... }
- fn(<params>) { ... }
- <callee>(<args>)
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class PrefixOp(StrEnum):
    """Unary prefix operators."""

    BANG = "!"
    MINUS = "-"
    PLUS = "+"


class InfixOp(StrEnum):
    """Binary infix operators."""

    # Arithmetic
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    # Comparison
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    EQ = "=="
    NOT_EQ = "!="


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


class Identifier(BaseModel):
    """A reference to a name."""

    value: str = Field(description="The identifier name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.value


class IntegerLiteral(BaseModel):
    """A 64-bit signed integer literal."""

    value: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class FloatLiteral(BaseModel):
    """A 64-bit floating point literal.

    Rendered in positional notation with at least one fractional digit, so
    the text always lexes back as a single FLOAT token.
    """

    value: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        text = format(Decimal(repr(self.value)), "f")
        if "." not in text:
            text += ".0"
        return text


class BooleanLiteral(BaseModel):
    """``true`` or ``false``."""

    value: bool

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "true" if self.value else "false"


class PrefixExpr(BaseModel):
    """Prefix operation: op operand."""

    operator: PrefixOp
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.operator.value}{self.operand})"


class InfixExpr(BaseModel):
    """Infix operation: left op right."""

    left: Expr
    operator: InfixOp
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.operator.value} {self.right})"


class IfExpr(BaseModel):
    """
    Conditional expression: if (cond) { ... } else { ... }.

    A missing else branch is the NoStatement sentinel, never an empty block.
    """

    condition: Expr
    consequence: BlockStatement
    alternative: BlockStatement | NoStatement = Field(default_factory=lambda: NoStatement())

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if isinstance(self.alternative, BlockStatement):
            out += f"else {self.alternative}"
        return out


class FunctionLiteral(BaseModel):
    """Function literal: fn(a, b) { ... }."""

    parameters: list[Identifier] = Field(default_factory=list)
    body: BlockStatement

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


class CallExpr(BaseModel):
    """Call expression: callee(arg1, arg2, ...)."""

    callee: Expr
    arguments: list[Expr] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.callee}({args})"


class MissingExpr(BaseModel):
    """Placeholder for an expression the parser could not build.

    The parser records a diagnostic whenever it produces one of these.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return ""


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class LetStatement(BaseModel):
    """Binding: let name = value;"""

    name: Identifier
    value: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


class ReturnStatement(BaseModel):
    """Early exit: return value;"""

    value: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"return {self.value};"


class ExpressionStatement(BaseModel):
    """A bare expression whose value becomes the statement's result."""

    expression: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.expression)


class BlockStatement(BaseModel):
    """A braced statement sequence (function bodies, if/else arms)."""

    statements: list[Statement] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


class NoStatement(BaseModel):
    """Sentinel for an absent statement, e.g. an if without else."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return ""


class Program(BaseModel):
    """Root node: the ordered statements of one source text."""

    statements: list[Statement] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


# ---------------------------------------------------------------------------
# Union types
# ---------------------------------------------------------------------------

Expr = (
    Identifier
    | IntegerLiteral
    | FloatLiteral
    | BooleanLiteral
    | PrefixExpr
    | InfixExpr
    | IfExpr
    | FunctionLiteral
    | CallExpr
    | MissingExpr
)

Statement = LetStatement | ReturnStatement | ExpressionStatement | BlockStatement | NoStatement

NO_STATEMENT = NoStatement()
MISSING = MissingExpr()

# Rebuild models for recursive forward references
PrefixExpr.model_rebuild()
InfixExpr.model_rebuild()
IfExpr.model_rebuild()
FunctionLiteral.model_rebuild()
CallExpr.model_rebuild()
LetStatement.model_rebuild()
ReturnStatement.model_rebuild()
ExpressionStatement.model_rebuild()
BlockStatement.model_rebuild()
Program.model_rebuild()
