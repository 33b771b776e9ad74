"""Tests for the monkeycc evaluator.

Covers:
- Integer arithmetic and comparison
- Truthiness, prefix operators, conditionals
- Return bubbling through nested blocks
- Sticky runtime errors
- let bindings through the environment
"""

from __future__ import annotations

import pytest

from monkeycc.core.environment import Environment
from monkeycc.core.evaluator import evaluate, is_truthy
from monkeycc.core.parser import parse
from monkeycc.core.values import (
    FALSE,
    NULL,
    TRUE,
    BooleanValue,
    ErrorValue,
    IntegerValue,
)


class TestIntegers:
    """Integer arithmetic."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("5", 5),
            ("10", 10),
            ("-5", -5),
            ("-10", -10),
            ("+5", 5),
            ("5 + 5 + 5 + 5 - 10", 10),
            ("2 * 2 * 2 * 2 * 2", 32),
            ("-50 + 100 + -50", 0),
            ("5 * 2 + 10", 20),
            ("5 + 2 * 10", 25),
            ("20 + 2 * -10", 0),
            ("50 / 2 * 2 + 10", 60),
            ("2 * (5 + 10)", 30),
            ("3 * 3 * 3 + 10", 37),
            ("3 * (3 * 3) + 10", 37),
            ("(5 + 10 * 2 + 15 / 3) * 2 + -10", 50),
        ],
    )
    def test_integer_expressions(self, run, source: str, expected: int) -> None:
        assert run(source) == IntegerValue(value=expected)

    @pytest.mark.parametrize(
        "source,expected",
        [("7 / 2", 3), ("-7 / 2", -3), ("7 / -2", -3), ("-7 / -2", 3)],
    )
    def test_division_truncates_toward_zero(self, run, source: str, expected: int) -> None:
        assert run(source) == IntegerValue(value=expected)

    def test_overflow_wraps_to_64_bits(self, run) -> None:
        assert run("9223372036854775807 + 1") == IntegerValue(value=-(2**63))
        assert run("-9223372036854775807 - 2") == IntegerValue(value=2**63 - 1)


class TestBooleans:
    """Comparison and equality."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("true", True),
            ("false", False),
            ("1 < 2", True),
            ("1 > 2", False),
            ("1 < 1", False),
            ("1 > 1", False),
            ("1 <= 1", True),
            ("2 >= 3", False),
            ("1 == 1", True),
            ("1 != 1", False),
            ("1 == 2", False),
            ("1 != 2", True),
            ("true == true", True),
            ("false == false", True),
            ("true == false", False),
            ("true != false", True),
            ("(1 < 2) == true", True),
            ("(1 < 2) == false", False),
            ("(1 > 2) == true", False),
        ],
    )
    def test_boolean_expressions(self, run, source: str, expected: bool) -> None:
        assert run(source) == BooleanValue(value=expected)

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("!true", False),
            ("!false", True),
            ("!5", False),
            ("!0", True),
            ("!!true", True),
            ("!!false", False),
            ("!!5", True),
            ("!!0", False),
            ("!(if (false) { 1 })", True),
        ],
    )
    def test_bang_operator(self, run, source: str, expected: bool) -> None:
        assert run(source) == BooleanValue(value=expected)

    def test_truthiness(self) -> None:
        assert is_truthy(TRUE)
        assert not is_truthy(FALSE)
        assert is_truthy(IntegerValue(value=-1))
        assert not is_truthy(IntegerValue(value=0))
        assert not is_truthy(NULL)


class TestConditionals:
    """if / else evaluation."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("if (true) { 10 }", 10),
            ("if (1) { 10 }", 10),
            ("if (1 < 2) { 10 }", 10),
            ("if (1 > 2) { 10 } else { 20 }", 20),
            ("if (1 < 2) { 10 } else { 20 }", 10),
            ("if (0) { 10 } else { 20 }", 20),
            ("if (true) { 1; 2; 3 }", 3),
        ],
    )
    def test_branch_values(self, run, source: str, expected: int) -> None:
        assert run(source) == IntegerValue(value=expected)

    @pytest.mark.parametrize(
        "source",
        ["if (false) { 10 }", "if (1 > 2) { 10 }", "if (true) { }", "if (false) { 1 } else { }"],
    )
    def test_null_results(self, run, source: str) -> None:
        assert run(source) == NULL


class TestReturn:
    """return exits the program and bubbles through blocks."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("return 10;", 10),
            ("return 10; 9;", 10),
            ("return 2 * 5; 9;", 10),
            ("9; return 2 * 5; 9;", 10),
            ("if (10 > 1) { if (10 > 1) { return 10; } return 1; }", 10),
            ("if (10 > 1) { if (10 > 1) { return 10; } 129 }", 10),
            ("if (true) { return 1; }; 2", 1),
            ("1 + if (true) { return 5; }", 5),
        ],
    )
    def test_return_values(self, run, source: str, expected: int) -> None:
        assert run(source) == IntegerValue(value=expected)

    def test_return_without_trailing_statements(self, run) -> None:
        assert run("return true") == TRUE


class TestErrors:
    """Runtime errors are values and propagate unchanged."""

    @pytest.mark.parametrize(
        "source,message",
        [
            ("5 + true;", "type mismatch: INTEGER + BOOLEAN"),
            ("5 + true; 5;", "type mismatch: INTEGER + BOOLEAN"),
            ("true > 5", "type mismatch: BOOLEAN > INTEGER"),
            ("-true", "unknown operator: -BOOLEAN"),
            ("+false", "unknown operator: +BOOLEAN"),
            ("true + false;", "unknown operator: BOOLEAN + BOOLEAN"),
            ("true < false", "unknown operator: BOOLEAN < BOOLEAN"),
            ("5; true + false; 5", "unknown operator: BOOLEAN + BOOLEAN"),
            ("if (10 > 1) { true + false; }", "unknown operator: BOOLEAN + BOOLEAN"),
            (
                "if (10 > 1) { if (10 > 1) { return true + false; } return 1; }",
                "unknown operator: BOOLEAN + BOOLEAN",
            ),
            ("1 / 0", "division by zero"),
            ("foobar", "identifier not found: foobar"),
            ("5 + if (false) { 1 }", "type mismatch: INTEGER + NULL"),
            ("if (false) { 1 } == if (false) { 2 }", "unknown operator: NULL == NULL"),
            ("-if (false) { 1 }", "unknown operator: -NULL"),
        ],
    )
    def test_error_messages(self, run, source: str, message: str) -> None:
        assert run(source) == ErrorValue(message=message)

    @pytest.mark.parametrize(
        "source",
        [
            "(1 / 0) + true",
            "-(1 / 0)",
            "!(1 / 0)",
            "if (1 / 0) { 1 } else { 2 }",
            "let x = 1 / 0; 5",
            "return 1 / 0; 5",
            "1 / 0; 5",
            "if (true) { 1 / 0 }; 7",
            "(2 * (3 + 1 / 0)) == 4",
        ],
    )
    def test_errors_are_sticky(self, run, source: str) -> None:
        assert run(source) == ErrorValue(message="division by zero")

    def test_left_error_skips_right_operand(self, run) -> None:
        # The right operand would fail differently if it were evaluated.
        assert run("(1 / 0) + missing") == ErrorValue(message="division by zero")

    def test_inspect(self, run) -> None:
        assert run("1 / 0").inspect() == "Error: division by zero"


class TestLetBindings:
    """let binds through the environment."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("let a = 5; a;", 5),
            ("let a = 5 * 5; a;", 25),
            ("let a = 5; let b = a; b;", 5),
            ("let a = 5; let b = a; let c = a + b + 5; c;", 15),
            ("let a = 1; let a = a + 1; a", 2),
            ("let a = if (true) { 3 }; a", 3),
        ],
    )
    def test_bindings(self, run, source: str, expected: int) -> None:
        assert run(source) == IntegerValue(value=expected)

    def test_tokens_after_let_value_are_skipped_to_semicolon(self, run) -> None:
        assert run("let x = 1 return 2; 3") == IntegerValue(value=3)
        assert run("let x = 1 return 2; x") == IntegerValue(value=1)

    def test_let_leaves_last_value_unchanged(self, run) -> None:
        assert run("let a = 5;") == NULL
        assert run("7; let a = 5;") == IntegerValue(value=7)

    def test_blocks_share_the_enclosing_scope(self, run) -> None:
        assert run("if (true) { let inner = 4; }; inner * 2") == IntegerValue(value=8)

    def test_environment_persists_across_programs(self) -> None:
        env = Environment()
        evaluate(parse("let x = 20;"), env)
        assert evaluate(parse("x + 1"), env) == IntegerValue(value=21)
        assert env.get("x") == IntegerValue(value=20)

    def test_outer_scope_is_visible(self) -> None:
        outer = Environment()
        outer.set("base", IntegerValue(value=100))
        assert evaluate(parse("base / 4"), outer.enclosed()) == IntegerValue(value=25)

    def test_failed_let_does_not_bind(self) -> None:
        env = Environment()
        evaluate(parse("let x = 1 / 0;"), env)
        assert "x" not in env


class TestUnsupportedNodes:
    """Nodes without runtime semantics reduce to null."""

    @pytest.mark.parametrize("source", ["fn(x) { x }", "add(1, 2)", "3.14", "fn() { 1 }()"])
    def test_reduces_to_null(self, run, source: str) -> None:
        assert run(source) == NULL

    def test_missing_expression_is_null(self) -> None:
        from monkeycc.core.lexer import Lexer
        from monkeycc.core.parser import Parser

        parser = Parser(Lexer("(1 + 2"))
        program = parser.parse_program()
        assert parser.errors
        assert evaluate(program) == NULL

    def test_empty_program_is_null(self, run) -> None:
        assert run("") == NULL
