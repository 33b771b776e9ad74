"""
Host-level error types for monkeycc.

Parse diagnostics and runtime errors are normally data (a list of strings on
the parser, ErrorValue results from the evaluator). These exceptions are for
callers that want a hard failure instead, and for configuration problems.
"""

from dataclasses import dataclass
from pathlib import Path


class MonkeyError(Exception):
    """Base exception for all monkeycc errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(MonkeyError):
    """
    Raised when source text produced parser diagnostics.

    The individual diagnostics are kept in ``diagnostics`` in the order the
    parser recorded them.
    """

    def __init__(
        self,
        message: str,
        diagnostics: list[str] | None = None,
        context: "ErrorContext | None" = None,
    ):
        self.diagnostics = list(diagnostics or [])
        super().__init__(message, context)


class ConfigError(MonkeyError):
    """
    Raised when configuration cannot be loaded.

    Examples:
    - Malformed monkey.toml
    - Unknown REPL mode
    - Unknown log level
    """

    pass


@dataclass
class ErrorContext:
    """Where an error came from."""

    file: Path

    def format(self) -> str:
        return str(self.file)


def make_parse_error(diagnostics: list[str], file: Path | None = None) -> ParseError:
    """
    Helper to create a ParseError from parser diagnostics.

    Args:
        diagnostics: Messages recorded by the parser
        file: Optional source file path

    Returns:
        ParseError summarising the diagnostics
    """
    count = len(diagnostics)
    noun = "error" if count == 1 else "errors"
    message = f"parser has {count} {noun}:\n" + "\n".join(f"  - {d}" for d in diagnostics)
    context = ErrorContext(file=file) if file else None
    return ParseError(message, diagnostics, context)
