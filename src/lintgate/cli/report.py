# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors

"""CLI command rendering the status persisted by the last check."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from ..models import CheckStatus
from ..reporting.emitters import StatusFileError, load_status
from ..reporting.formatters import render_status
from .shared import (
    CONFIG_OPTION,
    EMOJI_OPTION,
    EXIT_ERROR,
    EXIT_FAILED,
    EXIT_OK,
    REPORT_DIR_OPTION,
    ROOT_OPTION,
    CLIError,
    build_cli_logger,
    cli_console,
    load_cli_config,
)

REPORT_COMMAND_NAME = "report"


def run_report_step(status: CheckStatus, console: Console) -> int:
    """Render ``status`` and return the exit code the report step signals."""

    render_status(status, console)
    return EXIT_OK if status.succeeded else EXIT_FAILED


def report_command(
    root: ROOT_OPTION = Path("."),
    config: CONFIG_OPTION = None,
    report_dir: REPORT_DIR_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Render the outcome of the most recent check."""

    logger = build_cli_logger(emoji=emoji)
    try:
        loaded = load_cli_config(root, config, report_dir=report_dir, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    directory = loaded.config.report_directory(root)
    try:
        status = load_status(directory)
    except StatusFileError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_ERROR) from exc
    if status is None:
        logger.warn(f"No check status found in {directory}; run 'lintgate check' first.")
        raise typer.Exit(code=EXIT_ERROR)
    raise typer.Exit(code=run_report_step(status, cli_console(emoji=emoji)))


__all__ = ["REPORT_COMMAND_NAME", "report_command", "run_report_step"]
