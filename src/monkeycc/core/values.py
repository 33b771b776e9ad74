"""
Runtime values produced by the evaluator.

Values are small immutable models compared structurally; no reference
identity is observable. Runtime errors are values too, so they travel
through the evaluator on the same path as ordinary results.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(StrEnum):
    """Kinds of runtime values, as shown in error messages."""

    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    ERROR = "ERROR"


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    return (value - INT64_MIN) % 2**64 + INT64_MIN


class IntegerValue(BaseModel):
    value: int

    kind: ClassVar[ValueKind] = ValueKind.INTEGER
    model_config = ConfigDict(frozen=True)

    def inspect(self) -> str:
        return str(self.value)


class BooleanValue(BaseModel):
    value: bool

    kind: ClassVar[ValueKind] = ValueKind.BOOLEAN
    model_config = ConfigDict(frozen=True)

    def inspect(self) -> str:
        return "true" if self.value else "false"


class NullValue(BaseModel):
    """The absence of a meaningful value."""

    kind: ClassVar[ValueKind] = ValueKind.NULL
    model_config = ConfigDict(frozen=True)

    def inspect(self) -> str:
        return "null"


class ErrorValue(BaseModel):
    """A runtime error; sticky once produced."""

    message: str

    kind: ClassVar[ValueKind] = ValueKind.ERROR
    model_config = ConfigDict(frozen=True)

    def inspect(self) -> str:
        return f"Error: {self.message}"


Value = IntegerValue | BooleanValue | NullValue | ErrorValue

NULL = NullValue()
TRUE = BooleanValue(value=True)
FALSE = BooleanValue(value=False)


def native_bool(value: bool) -> BooleanValue:
    """Return the shared Boolean value for a Python bool."""
    return TRUE if value else FALSE


def is_error(value: Value) -> bool:
    return isinstance(value, ErrorValue)
