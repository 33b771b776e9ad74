"""Shared pytest fixtures for monkeycc tests."""

from collections.abc import Callable

import pytest

from monkeycc.core.ast import Program
from monkeycc.core.evaluator import evaluate
from monkeycc.core.lexer import Lexer
from monkeycc.core.parser import Parser
from monkeycc.core.values import Value


def _parse_clean(source: str) -> Program:
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    assert parser.errors == [], f"unexpected parser errors for {source!r}: {parser.errors}"
    return program


@pytest.fixture
def parse_clean() -> Callable[[str], Program]:
    """Parse source text, failing the test on any parser diagnostic."""
    return _parse_clean


@pytest.fixture
def run() -> Callable[[str], Value]:
    """Parse and evaluate source text in a fresh environment."""

    def _run(source: str) -> Value:
        return evaluate(_parse_clean(source))

    return _run
