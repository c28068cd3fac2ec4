# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors

"""CLI command running one aggregation pass."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..config import ConfigError
from ..errors import DetectorError, HardAbort, SoftHalt
from ..pipeline import run_check
from .report import run_report_step
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

FAIL_ON_ERROR_OPTION = Annotated[
    bool | None,
    typer.Option(
        "--fail-on-error/--no-fail-on-error",
        help="Fail the invocation when violations are found (defaults to the configured value).",
    ),
]
REPORT_OPTION = Annotated[
    bool,
    typer.Option("--report", help="Run the report step after the check in this invocation."),
]
ONLY_OPTION = Annotated[
    list[str] | None,
    typer.Option("--only", help="Restrict the pass to the named detector (repeatable)."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Print tool command lines and configuration sources."),
]


def check_command(
    root: ROOT_OPTION = Path("."),
    config: CONFIG_OPTION = None,
    report_dir: REPORT_DIR_OPTION = None,
    fail_on_error: FAIL_ON_ERROR_OPTION = None,
    report: REPORT_OPTION = False,
    only: ONLY_OPTION = None,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Run the configured violation detectors and apply the gate."""

    logger = build_cli_logger(emoji=emoji, debug=debug)
    try:
        loaded = load_cli_config(root, config, report_dir=report_dir, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc
    settings = loaded.config
    if fail_on_error is not None:
        settings.fail_on_error = fail_on_error

    try:
        status = run_check(
            settings,
            root,
            report_step_scheduled=lambda: report,
            logger=logger,
            only=tuple(only or ()),
        )
    except HardAbort as exc:
        logger.fail(exc.message)
        raise typer.Exit(code=EXIT_FAILED) from exc
    except SoftHalt as exc:
        code = run_report_step(exc.status, cli_console(emoji=emoji)) if report else EXIT_OK
        raise typer.Exit(code=code) from exc
    except (DetectorError, ConfigError) as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_ERROR) from exc

    if status is not None and report:
        raise typer.Exit(code=run_report_step(status, cli_console(emoji=emoji)))
    raise typer.Exit(code=EXIT_OK)


__all__ = ["check_command"]
