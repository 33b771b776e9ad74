"""Tests for runtime values."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from monkeycc.core.values import (
    FALSE,
    NULL,
    TRUE,
    BooleanValue,
    ErrorValue,
    IntegerValue,
    ValueKind,
    is_error,
    native_bool,
    wrap_int64,
)


class TestInspect:
    """inspect() renders values for display."""

    @pytest.mark.parametrize(
        "value,text",
        [
            (IntegerValue(value=5), "5"),
            (IntegerValue(value=-12), "-12"),
            (TRUE, "true"),
            (FALSE, "false"),
            (NULL, "null"),
            (ErrorValue(message="division by zero"), "Error: division by zero"),
        ],
    )
    def test_inspect(self, value, text: str) -> None:
        assert value.inspect() == text


class TestValueSemantics:
    """Values compare structurally and are immutable."""

    def test_structural_equality(self) -> None:
        assert IntegerValue(value=3) == IntegerValue(value=3)
        assert BooleanValue(value=True) == TRUE
        assert IntegerValue(value=1) != TRUE

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            TRUE.value = False  # type: ignore[misc]

    def test_kinds(self) -> None:
        assert IntegerValue(value=0).kind == ValueKind.INTEGER
        assert TRUE.kind == ValueKind.BOOLEAN
        assert NULL.kind == ValueKind.NULL
        assert ErrorValue(message="x").kind == ValueKind.ERROR

    def test_native_bool(self) -> None:
        assert native_bool(True) is TRUE
        assert native_bool(False) is FALSE

    def test_is_error(self) -> None:
        assert is_error(ErrorValue(message="x"))
        assert not is_error(NULL)


class TestWrapInt64:
    """Two's-complement wrapping."""

    @pytest.mark.parametrize(
        "raw,wrapped",
        [
            (0, 0),
            (2**63 - 1, 2**63 - 1),
            (2**63, -(2**63)),
            (-(2**63) - 1, 2**63 - 1),
            (2**64 + 5, 5),
        ],
    )
    def test_wrap(self, raw: int, wrapped: int) -> None:
        assert wrap_int64(raw) == wrapped
