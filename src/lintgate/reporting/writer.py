# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Persist and clear the local HTML report and its stylesheet."""

from __future__ import annotations

from collections.abc import Collection
from importlib import resources
from pathlib import Path
from typing import Final

from ..errors import ReportPreconditionError
from ..logging import ConsoleLogger
from ..models import Violation
from .html import render_violations_html

REPORT_FILE_NAME: Final[str] = "lintgate.html"
CSS_FILE_NAME: Final[str] = "lintgate.css"

HTML_REPORT_PREFIX: Final[str] = (
    "<!DOCTYPE html>"
    "<html>"
    f'<link rel="stylesheet" href="{CSS_FILE_NAME}">'
    '<article class="markdown-body">'
)
HTML_REPORT_SUFFIX: Final[str] = "</article></html>"


def report_path(directory: Path) -> Path:
    """Return the location of the HTML report inside ``directory``."""

    return directory / REPORT_FILE_NAME


def stylesheet_path(directory: Path) -> Path:
    return directory / CSS_FILE_NAME


def render_report(violations: Collection[Violation]) -> str:
    """Return the complete HTML document for ``violations``."""

    return f"{HTML_REPORT_PREFIX}{render_violations_html(violations)}{HTML_REPORT_SUFFIX}"


def write_report(
    violations: Collection[Violation],
    directory: Path,
    *,
    logger: ConsoleLogger | None = None,
) -> bool:
    """Write the HTML report and copy the stylesheet next to it.

    Args:
        violations: Non-empty violation set to render.
        directory: Output directory, created with parents when missing.
        logger: Logger receiving I/O failure messages.

    Returns:
        bool: ``True`` when both files were written, ``False`` on I/O failure.

    Raises:
        ReportPreconditionError: If ``violations`` is empty.
    """

    if not violations:
        raise ReportPreconditionError("a report can only be written when violations were detected")
    log = logger or ConsoleLogger()
    try:
        directory.mkdir(parents=True, exist_ok=True)
        report_path(directory).write_text(render_report(violations), encoding="utf-8")
    except OSError as exc:
        log.fail(f"Error writing local report to {directory}: {exc}")
        return False
    return _copy_stylesheet(directory, log)


def _copy_stylesheet(directory: Path, log: ConsoleLogger) -> bool:
    try:
        asset = resources.files(__package__).joinpath(CSS_FILE_NAME)
        stylesheet_path(directory).write_bytes(asset.read_bytes())
    except OSError as exc:
        log.fail(f"Error copying stylesheet for local report: {exc}")
        return False
    return True


def delete_report(directory: Path, *, logger: ConsoleLogger | None = None) -> bool:
    """Remove the HTML report and stylesheet from ``directory``.

    Missing files are not an error.

    Returns:
        bool: ``False`` when an existing file could not be removed.
    """

    log = logger or ConsoleLogger()
    removed = True
    for path in (report_path(directory), stylesheet_path(directory)):
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            log.warn(f"Unable to remove stale report file {path}: {exc}")
            removed = False
    return removed


__all__ = [
    "CSS_FILE_NAME",
    "HTML_REPORT_PREFIX",
    "HTML_REPORT_SUFFIX",
    "REPORT_FILE_NAME",
    "delete_report",
    "render_report",
    "report_path",
    "stylesheet_path",
    "write_report",
]
