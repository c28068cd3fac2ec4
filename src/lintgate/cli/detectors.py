# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors

"""CLI command listing the detector catalog for a project."""

from __future__ import annotations

from pathlib import Path

import typer
from rich import box
from rich.table import Table

from ..detectors.registry import DetectorStatus, describe_detectors
from ..project import inspect_project
from .shared import CONFIG_OPTION, EMOJI_OPTION, ROOT_OPTION, CLIError, build_cli_logger, cli_console, load_cli_config


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def build_detector_table(statuses: list[DetectorStatus]) -> Table:
    """Return a table with one row per catalog entry."""

    table = Table(title="Detectors", box=box.SIMPLE, expand=False)
    table.add_column("Detector", style="bold")
    table.add_column("Enabled")
    table.add_column("Applies")
    table.add_column("Version")
    table.add_column("Mode")
    for status in statuses:
        definition = status.definition
        table.add_row(
            definition.kind.value,
            _yes_no(status.enabled),
            _yes_no(status.applicable),
            status.tool_version or "-",
            "runs tool" if definition.executed else "reads report",
        )
    return table


def detectors_command(
    root: ROOT_OPTION = Path("."),
    config: CONFIG_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """List detectors with their enablement, applicability and tool version."""

    logger = build_cli_logger(emoji=emoji)
    try:
        loaded = load_cli_config(root, config, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc
    layout = inspect_project(root, loaded.config.source_dirs)
    cli_console(emoji=emoji).print(build_detector_table(describe_detectors(loaded.config, layout)))
    logger.info(f"Configuration: {loaded.source}")


__all__ = ["build_detector_table", "detectors_command"]
