# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Emit machine-readable artifacts for aggregation results."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from ..models import AggregationResult, CheckStatus, Violation
from ..severity import severity_to_sarif

STATUS_FILE_NAME: Final[str] = "status.json"
SARIF_VERSION = "2.1.0"
SARIF_SCHEMA = "https://schemastore.azurewebsites.net/schemas/json/sarif-2.1.0.json"


class StatusFileError(Exception):
    """Raised when a persisted status file cannot be read back."""


def status_path(directory: Path) -> Path:
    return directory / STATUS_FILE_NAME


def write_status(status: CheckStatus, directory: Path) -> Path:
    """Persist ``status`` as JSON for the downstream report step.

    Returns:
        Path: Location of the written status file.
    """

    directory.mkdir(parents=True, exist_ok=True)
    path = status_path(directory)
    path.write_text(status.model_dump_json(indent=2), encoding="utf-8")
    return path


def load_status(directory: Path) -> CheckStatus | None:
    """Return the persisted status, or ``None`` when no pass has run yet.

    Raises:
        StatusFileError: If the file exists but is not a valid status document.
    """

    path = status_path(directory)
    if not path.is_file():
        return None
    try:
        return CheckStatus.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise StatusFileError(f"unable to read {path}: {exc}") from exc


def write_json_report(result: AggregationResult, path: Path) -> None:
    """Write a JSON report listing violations and per-detector counts."""
    payload = {
        "clean": result.is_clean(),
        "detectors": [count.model_dump(mode="json") for count in result.counts],
        "violations": [
            violation.model_dump(mode="json")
            for violations in result.by_detector().values()
            for violation in violations
        ],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def write_sarif_report(
    result: AggregationResult,
    path: Path,
    tool_versions: Mapping[str, str | None] | None = None,
) -> None:
    """Emit a SARIF document compatible with GitHub and other tools."""
    versions = tool_versions or {}
    runs = [
        _build_sarif_run(name, violations, versions.get(name))
        for name, violations in result.by_detector().items()
    ]
    sarif_doc = {
        "version": SARIF_VERSION,
        "$schema": SARIF_SCHEMA,
        "runs": runs,
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(sarif_doc, indent=2), encoding="utf-8")


def _build_sarif_run(
    detector: str,
    violations: Sequence[Violation],
    version: str | None,
) -> dict[str, object]:
    """Construct the SARIF run dictionary for a single detector."""
    rules: dict[str, dict[str, object]] = {}
    results: list[dict[str, object]] = []

    for violation in violations:
        rule_id = violation.rule or detector
        if rule_id not in rules:
            rule: dict[str, object] = {
                "id": rule_id,
                "name": rule_id,
                "shortDescription": {"text": violation.message[:120]},
            }
            if violation.url:
                rule["helpUri"] = violation.url
            rules[rule_id] = rule

        result_entry: dict[str, object] = {
            "ruleId": rule_id,
            "level": severity_to_sarif(violation.severity),
            "message": {"text": violation.message},
        }
        if violation.file:
            physical_location: dict[str, object] = {
                "artifactLocation": {"uri": violation.file},
            }
            region: dict[str, int] = {}
            if violation.line is not None:
                region["startLine"] = violation.line
            if violation.column is not None:
                region["startColumn"] = violation.column
            if region:
                physical_location["region"] = region
            result_entry["locations"] = [{"physicalLocation": physical_location}]
        results.append(result_entry)

    return {
        "tool": {
            "driver": {
                "name": detector,
                "version": version or "unknown",
                "rules": list(rules.values()),
            },
        },
        "results": results,
    }


__all__ = [
    "SARIF_SCHEMA",
    "SARIF_VERSION",
    "STATUS_FILE_NAME",
    "StatusFileError",
    "load_status",
    "status_path",
    "write_json_report",
    "write_sarif_report",
    "write_status",
]
