"""
monkeycc command line interface.

Commands:
    monkeycc run FILE        evaluate a source file
    monkeycc eval SOURCE     evaluate an inline snippet
    monkeycc tokens SOURCE   show the token stream
    monkeycc parse SOURCE    show the canonical rendering of the parsed program
    monkeycc repl            read-eval-print loop
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from monkeycc._version import get_version
from monkeycc.config import MonkeyConfig, ReplMode, load_config, parse_log_level
from monkeycc.core.ast import Program
from monkeycc.core.environment import Environment
from monkeycc.core.errors import ConfigError, ParseError
from monkeycc.core.evaluator import evaluate
from monkeycc.core.lexer import tokenize
from monkeycc.core.parser import parse
from monkeycc.core.values import ErrorValue, Value

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="monkeycc - lexer, Pratt parser and evaluator for a small expression language",
    no_args_is_help=True,
)

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

QUIT_COMMANDS = frozenset({":q", ":quit", ":exit"})


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"monkeycc {get_version()}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to monkey.toml (default: ./monkey.toml if present)"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Override the configured log level (DEBUG, INFO, ...)"
    ),
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Load configuration and set up logging."""
    try:
        config = load_config(config_path)
        if log_level:
            config.logging.level = parse_log_level(log_level)
    except ConfigError as e:
        err_console.print(f"Configuration error: {e}", markup=False)
        raise typer.Exit(code=2) from e

    logging.basicConfig(
        level=config.logging.level_number,
        stream=sys.stderr,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = config


def _parse_or_exit(source: str, file: Path | None = None) -> Program:
    try:
        return parse(source, file)
    except ParseError as e:
        err_console.print(str(e), markup=False)
        raise typer.Exit(code=1) from e


def _report(value: Value) -> None:
    console.print(value.inspect(), markup=False)
    if isinstance(value, ErrorValue):
        raise typer.Exit(code=1)


@app.command("run")
def run_command(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Source file"),
) -> None:
    """Evaluate a source file and print its value."""
    program = _parse_or_exit(path.read_text(), path)
    _report(evaluate(program))


@app.command("eval")
def eval_command(source: str = typer.Argument(..., help="Source text")) -> None:
    """Evaluate inline source text and print its value."""
    _report(evaluate(_parse_or_exit(source)))


@app.command("tokens")
def tokens_command(source: str = typer.Argument(..., help="Source text")) -> None:
    """Print one token per line."""
    for tok in tokenize(source):
        console.print(f"{tok.kind.name:<10} {tok.literal}", markup=False)


@app.command("parse")
def parse_command(source: str = typer.Argument(..., help="Source text")) -> None:
    """Print the fully-parenthesized rendering of the parsed program."""
    console.print(str(_parse_or_exit(source)), markup=False)


def _repl_line(line: str, mode: ReplMode, env: Environment) -> None:
    if mode == ReplMode.TOKENS:
        for tok in tokenize(line)[:-1]:
            console.print(repr(tok), markup=False)
        return

    try:
        program = parse(line)
    except ParseError as e:
        for diagnostic in e.diagnostics:
            err_console.print(f"  parser error: {diagnostic}", markup=False)
        return

    if mode == ReplMode.AST:
        console.print(str(program), markup=False)
        return

    console.print(evaluate(program, env).inspect(), markup=False)


@app.command("repl")
def repl_command(
    ctx: typer.Context,
    mode: ReplMode | None = typer.Option(
        None, "--mode", "-m", help="eval (default), tokens or ast"
    ),
) -> None:
    """Start an interactive session. Bindings persist between lines."""
    config: MonkeyConfig = ctx.obj or MonkeyConfig()
    active_mode = mode or config.repl.mode
    env = Environment()
    logger.info("starting REPL in %s mode", active_mode)

    console.print(f"monkeycc {get_version()} ({active_mode} mode). Type :q to quit.", markup=False)
    while True:
        try:
            line = console.input(config.repl.prompt).strip()
        except EOFError:
            break
        if not line:
            continue
        if line in QUIT_COMMANDS:
            break
        _repl_line(line, active_mode, env)

    console.print("Bye.", markup=False)


if __name__ == "__main__":
    app()
