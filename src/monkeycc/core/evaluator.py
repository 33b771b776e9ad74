"""
Tree-walking evaluator for the monkeycc language.

Reduces a parsed Program to a single runtime Value. Pure evaluation: no I/O,
no host exceptions for semantic errors. Two things travel alongside each
intermediate value:

- a control-flow signal, VALUE for normal fallthrough or RETURN for an early
  exit that bubbles up through nested blocks unchanged;
- sticky errors: an ErrorValue stops the enclosing statement list and is
  never fed into further arithmetic, comparison or branching.

Function literals, calls and float literals have no runtime counterpart yet
and reduce to null.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from monkeycc.core.ast import (
    BlockStatement,
    BooleanLiteral,
    Expr,
    ExpressionStatement,
    Identifier,
    IfExpr,
    InfixExpr,
    InfixOp,
    IntegerLiteral,
    LetStatement,
    PrefixExpr,
    PrefixOp,
    Program,
    ReturnStatement,
    Statement,
)
from monkeycc.core.environment import Environment
from monkeycc.core.values import (
    NULL,
    BooleanValue,
    ErrorValue,
    IntegerValue,
    Value,
    is_error,
    native_bool,
    wrap_int64,
)

logger = logging.getLogger(__name__)


class Signal(StrEnum):
    VALUE = "value"
    RETURN = "return"


@dataclass(frozen=True, slots=True)
class Flow:
    """A value together with how control leaves the node that produced it."""

    signal: Signal
    value: Value

    @property
    def interrupts(self) -> bool:
        """True when the enclosing statement list must stop here."""
        return self.signal is Signal.RETURN or is_error(self.value)


def _value(value: Value) -> Flow:
    return Flow(Signal.VALUE, value)


def evaluate(program: Program, env: Environment | None = None) -> Value:
    """Evaluate a Program and return its final value.

    A top-level ``return`` and a trailing expression are indistinguishable
    to the caller: both yield their carried value.

    Args:
        program: Parsed program.
        env: Scope for ``let`` bindings and identifier lookup. A fresh one is
            created when omitted; pass one in to keep bindings across calls.

    Returns:
        The program's value; an ErrorValue if evaluation failed.
    """
    if env is None:
        env = Environment()
    logger.debug("evaluating program with %d statements", len(program.statements))
    result = _eval_statements(program.statements, env).value
    logger.debug("program evaluated to %s", result.inspect())
    return result


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


def _eval_statements(statements: list[Statement], env: Environment) -> Flow:
    """Evaluate left to right, stopping at the first return or error."""
    last: Value = NULL
    for stmt in statements:
        flow = _eval_statement(stmt, env)
        if flow.interrupts:
            return flow
        if not isinstance(stmt, LetStatement):
            last = flow.value
    return _value(last)


def _eval_statement(stmt: Statement, env: Environment) -> Flow:
    if isinstance(stmt, BlockStatement):
        return _eval_statements(stmt.statements, env)

    if isinstance(stmt, ExpressionStatement):
        return _eval_expr(stmt.expression, env)

    if isinstance(stmt, ReturnStatement):
        return Flow(Signal.RETURN, _eval_expr(stmt.value, env).value)

    if isinstance(stmt, LetStatement):
        flow = _eval_expr(stmt.value, env)
        if flow.interrupts:
            return flow
        env.set(stmt.name.value, flow.value)
        return _value(NULL)

    # NoStatement
    return _value(NULL)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


def _eval_expr(expr: Expr, env: Environment) -> Flow:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, IntegerLiteral):
        return _value(IntegerValue(value=expr.value))

    if isinstance(expr, BooleanLiteral):
        return _value(native_bool(expr.value))

    if isinstance(expr, Identifier):
        return _value(_eval_identifier(expr, env))

    if isinstance(expr, PrefixExpr):
        operand = _eval_expr(expr.operand, env)
        if operand.interrupts:
            return operand
        return _value(_eval_prefix(expr.operator, operand.value))

    if isinstance(expr, InfixExpr):
        left = _eval_expr(expr.left, env)
        if left.interrupts:
            return left
        right = _eval_expr(expr.right, env)
        if right.interrupts:
            return right
        return _value(_eval_infix(expr.operator, left.value, right.value))

    if isinstance(expr, IfExpr):
        return _eval_if(expr, env)

    # FloatLiteral, FunctionLiteral, CallExpr, MissingExpr
    return _value(NULL)


def _eval_identifier(expr: Identifier, env: Environment) -> Value:
    value = env.get(expr.value)
    if value is None:
        return ErrorValue(message=f"identifier not found: {expr.value}")
    return value


def _eval_if(expr: IfExpr, env: Environment) -> Flow:
    condition = _eval_expr(expr.condition, env)
    if condition.interrupts:
        return condition

    if is_truthy(condition.value):
        return _eval_statement(expr.consequence, env)
    return _eval_statement(expr.alternative, env)


def is_truthy(value: Value) -> bool:
    """Boolean by its value, Integer when nonzero, Null never."""
    if isinstance(value, BooleanValue):
        return value.value
    if isinstance(value, IntegerValue):
        return value.value != 0
    return False


def _eval_prefix(op: PrefixOp, operand: Value) -> Value:
    if op == PrefixOp.BANG:
        return native_bool(not is_truthy(operand))

    if not isinstance(operand, IntegerValue):
        return ErrorValue(message=f"unknown operator: {op.value}{operand.kind}")

    if op == PrefixOp.MINUS:
        return IntegerValue(value=wrap_int64(-operand.value))
    return operand


def _eval_infix(op: InfixOp, left: Value, right: Value) -> Value:
    if isinstance(left, IntegerValue) and isinstance(right, IntegerValue):
        return _eval_integer_infix(op, left.value, right.value)

    if isinstance(left, BooleanValue) and isinstance(right, BooleanValue):
        if op == InfixOp.EQ:
            return native_bool(left.value == right.value)
        if op == InfixOp.NOT_EQ:
            return native_bool(left.value != right.value)

    if left.kind != right.kind:
        return ErrorValue(message=f"type mismatch: {left.kind} {op.value} {right.kind}")
    return ErrorValue(message=f"unknown operator: {left.kind} {op.value} {right.kind}")


def _eval_integer_infix(op: InfixOp, left: int, right: int) -> Value:
    if op == InfixOp.PLUS:
        return IntegerValue(value=wrap_int64(left + right))
    if op == InfixOp.MINUS:
        return IntegerValue(value=wrap_int64(left - right))
    if op == InfixOp.ASTERISK:
        return IntegerValue(value=wrap_int64(left * right))
    if op == InfixOp.SLASH:
        if right == 0:
            return ErrorValue(message="division by zero")
        return IntegerValue(value=wrap_int64(_truncating_div(left, right)))

    if op == InfixOp.LT:
        return native_bool(left < right)
    if op == InfixOp.GT:
        return native_bool(left > right)
    if op == InfixOp.LE:
        return native_bool(left <= right)
    if op == InfixOp.GE:
        return native_bool(left >= right)
    if op == InfixOp.EQ:
        return native_bool(left == right)
    if op == InfixOp.NOT_EQ:
        return native_bool(left != right)

    return ErrorValue(message=f"unknown operator: INTEGER {op.value} INTEGER")


def _truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient

