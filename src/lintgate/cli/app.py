# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .check import check_command
from .detectors import detectors_command
from .report import REPORT_COMMAND_NAME, report_command

app = typer.Typer(help="Static-analysis quality gate.", no_args_is_help=True)
app.command("check")(check_command)
app.command(REPORT_COMMAND_NAME)(report_command)
app.command("detectors")(detectors_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
