"""
Configuration for the monkeycc command line front end.

Settings come from an optional ``monkey.toml`` and can be overridden by
environment variables:

    [repl]
    prompt = ">> "
    mode = "eval"      # eval | tokens | ast

    [logging]
    level = "WARNING"

Environment overrides:
    MONKEYCC_PROMPT     REPL prompt
    MONKEYCC_LOG_LEVEL  logging level name
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from monkeycc.core.errors import ConfigError

CONFIG_FILENAME = "monkey.toml"
PROMPT_ENV_VAR = "MONKEYCC_PROMPT"
LOG_LEVEL_ENV_VAR = "MONKEYCC_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ReplMode(StrEnum):
    """What the REPL does with each line."""

    EVAL = "eval"
    TOKENS = "tokens"
    AST = "ast"


@dataclass
class ReplConfig:
    prompt: str = ">> "
    mode: ReplMode = ReplMode.EVAL


@dataclass
class LoggingConfig:
    level: str = "WARNING"

    @property
    def level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.level]


@dataclass
class MonkeyConfig:
    """Top-level configuration."""

    repl: ReplConfig = field(default_factory=ReplConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _parse_mode(value: str) -> ReplMode:
    try:
        return ReplMode(value.lower())
    except ValueError:
        choices = ", ".join(m.value for m in ReplMode)
        raise ConfigError(f"Unknown REPL mode '{value}' (expected one of: {choices})") from None


def parse_log_level(value: str) -> str:
    level = value.upper().strip()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"Unknown log level '{value}' (expected one of: {', '.join(_LOG_LEVELS)})")
    return level


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] in {CONFIG_FILENAME} must be a table")
    return section


def load_config(path: Path | None = None) -> MonkeyConfig:
    """Load configuration from ``path`` (default ./monkey.toml) and the environment.

    A missing file is not an error; defaults apply.

    Raises:
        ConfigError: If the file is malformed or holds unknown values.
    """
    config_path = path or Path.cwd() / CONFIG_FILENAME
    data: dict = {}
    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid {config_path.name}: {e}") from e
    elif path is not None:
        raise ConfigError(f"Config file not found: {config_path}")

    repl_data = _section(data, "repl")
    logging_data = _section(data, "logging")

    repl = ReplConfig(
        prompt=str(repl_data.get("prompt", ReplConfig.prompt)),
        mode=_parse_mode(str(repl_data.get("mode", ReplConfig.mode.value))),
    )
    log = LoggingConfig(level=parse_log_level(str(logging_data.get("level", LoggingConfig.level))))

    if prompt := os.environ.get(PROMPT_ENV_VAR):
        repl.prompt = prompt
    if level := os.environ.get(LOG_LEVEL_ENV_VAR):
        log.level = parse_log_level(level)

    return MonkeyConfig(repl=repl, logging=log)
