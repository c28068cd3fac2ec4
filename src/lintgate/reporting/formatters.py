# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Console formatters for persisted check status."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models import CheckStatus
from ..severity import Severity

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.NOTICE: "cyan",
    Severity.NOTE: "dim",
}


def build_status_table(status: CheckStatus) -> Table:
    """Return a table with one row per violation carried by ``status``."""

    table = Table(box=box.SIMPLE_HEAVY, show_lines=False, header_style="bold")
    table.add_column("Location", overflow="fold")
    table.add_column("Detector")
    table.add_column("Rule")
    table.add_column("Severity")
    table.add_column("Message", overflow="fold")
    for violation in status.violations:
        table.add_row(
            violation.location(),
            violation.detector,
            violation.rule or "-",
            Text(violation.severity.value, style=_SEVERITY_STYLES.get(violation.severity, "")),
            violation.message,
        )
    return table


def render_status(status: CheckStatus, console: Console) -> None:
    if status.succeeded:
        console.print(Text("Last check passed with no violations.", style="green"))
        return
    count = len(status.violations)
    console.print(build_status_table(status))
    noun = "violation" if count == 1 else "violations"
    console.print(Text(f"Last check failed with {count} {noun}.", style="bold red"))


__all__ = ["build_status_table", "render_status"]
