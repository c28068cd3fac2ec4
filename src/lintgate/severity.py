# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels normalising different tool vocabularies."""

    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"
    NOTE = "note"


CHECKSTYLE_SEVERITIES: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "info": Severity.NOTICE,
    "ignore": Severity.NOTE,
}

ANDROID_LINT_SEVERITIES: Final[dict[str, Severity]] = {
    "fatal": Severity.ERROR,
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "information": Severity.NOTICE,
    "informational": Severity.NOTICE,
    "ignore": Severity.NOTE,
}


def map_label(label: str | None, mapping: Mapping[str, Severity], default: Severity) -> Severity:
    """Return the severity matching ``label`` in ``mapping``.

    Args:
        label: Tool-native severity label, compared case-insensitively.
        mapping: Lower-case label to severity lookup.
        default: Severity returned when ``label`` is missing or unknown.

    Returns:
        Severity: Normalised severity.
    """

    if not label:
        return default
    return mapping.get(label.strip().lower(), default)


def severity_from_priority(priority: str | int | None, *, high: int = 1, medium: int = 2) -> Severity:
    """Map numeric tool priorities (1 = most severe) onto :class:`Severity`.

    PMD uses priorities 1-5 and SpotBugs 1-3; ``high`` and ``medium`` are the
    largest values still treated as errors and warnings respectively.
    """

    try:
        value = int(priority) if priority is not None else None
    except (TypeError, ValueError):
        value = None
    if value is None:
        return Severity.WARNING
    if value <= high:
        return Severity.ERROR
    if value <= medium:
        return Severity.WARNING
    return Severity.NOTICE


_SEVERITY_TO_SARIF_LEVEL: Final[dict[Severity, str]] = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.NOTICE: "note",
    Severity.NOTE: "note",
}


def severity_to_sarif(severity: Severity) -> str:
    """Map :class:`Severity` to a SARIF reporting level.

    Args:
        severity: Severity value to translate.

    Returns:
        str: SARIF level string compatible with SARIF output.
    """
    return _SEVERITY_TO_SARIF_LEVEL.get(severity, "warning")
