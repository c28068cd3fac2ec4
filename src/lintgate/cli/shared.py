# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors

"""Option declarations and helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from ..config import ConfigError
from ..config_loader import LoadedConfig, load_config
from ..console import console_for, detect_tty
from ..logging import ConsoleLogger, build_logger

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ERROR = 2

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Configuration file (lintgate.toml or pyproject.toml)."),
]
REPORT_DIR_OPTION = Annotated[
    Path | None,
    typer.Option("--report-dir", help="Override the directory receiving the local report."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = EXIT_FAILED) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def build_cli_logger(*, emoji: bool, debug: bool = False) -> ConsoleLogger:
    return build_logger(emoji=emoji, color=detect_tty(), debug=debug)


def cli_console(*, emoji: bool) -> Console:
    return console_for(color=True, emoji=emoji)


def load_cli_config(
    root: Path,
    config_path: Path | None,
    *,
    report_dir: Path | None = None,
    logger: ConsoleLogger,
) -> LoadedConfig:
    """Load configuration for ``root`` and apply CLI overrides.

    Raises:
        CLIError: If the configuration cannot be loaded or validated.
    """

    try:
        loaded = load_config(root, config_path)
        if report_dir is not None:
            loaded.config.report_dir = report_dir
    except (ConfigError, ValueError) as exc:
        logger.fail(f"Invalid configuration: {exc}")
        raise CLIError(str(exc), exit_code=EXIT_ERROR) from exc
    logger.debug(f"config source={loaded.source}")
    return loaded


__all__ = [
    "CLIError",
    "CONFIG_OPTION",
    "EMOJI_OPTION",
    "EXIT_ERROR",
    "EXIT_FAILED",
    "EXIT_OK",
    "REPORT_DIR_OPTION",
    "ROOT_OPTION",
    "build_cli_logger",
    "cli_console",
    "load_cli_config",
]
