# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors

"""One aggregation pass from configuration to gate decision."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from pathlib import Path

from .aggregator import aggregate
from .config import Config
from .detectors.base import BaseViolationDetector, ViolationDetector
from .detectors.registry import build_detectors
from .gate import ReportStepQuery, decide, never_scheduled
from .logging import ConsoleLogger
from .models import AggregationResult, CheckStatus
from .process_utils import CommandRunner
from .project import inspect_project
from .reporting.emitters import write_json_report, write_sarif_report, write_status


def _status_for(result: AggregationResult) -> CheckStatus:
    if result.is_clean():
        return CheckStatus.success()
    return CheckStatus.failure(result.violations)


def _tool_versions(detectors: Sequence[ViolationDetector]) -> dict[str, str | None]:
    return {
        detector.name: detector.tool_version
        for detector in detectors
        if isinstance(detector, BaseViolationDetector)
    }


def _write_status(result: AggregationResult, report_dir: Path, log: ConsoleLogger) -> None:
    try:
        write_status(_status_for(result), report_dir)
    except OSError as exc:
        log.fail(f"Error writing check status to {report_dir}: {exc}")


def _write_exports(
    config: Config,
    root: Path,
    result: AggregationResult,
    detectors: Sequence[ViolationDetector],
    log: ConsoleLogger,
) -> None:
    if config.json_report is not None:
        path = config.resolve_path(root, config.json_report)
        try:
            write_json_report(result, path)
        except OSError as exc:
            log.fail(f"Error writing JSON report to {path}: {exc}")
    if config.sarif_report is not None:
        path = config.resolve_path(root, config.sarif_report)
        try:
            write_sarif_report(result, path, _tool_versions(detectors))
        except OSError as exc:
            log.fail(f"Error writing SARIF report to {path}: {exc}")


def run_check(
    config: Config,
    root: Path,
    *,
    detectors: Sequence[ViolationDetector] | None = None,
    report_step_scheduled: ReportStepQuery | None = None,
    logger: ConsoleLogger | None = None,
    runner: CommandRunner | None = None,
    only: Collection[str] = (),
) -> CheckStatus | None:
    """Run every configured detector, persist the outcome and apply the gate.

    Failures writing the status file or the exports are logged and do not
    prevent the gate decision.

    Args:
        config: Gate configuration.
        root: Project root the detectors analyse.
        detectors: Pre-built detectors; built from ``config`` when omitted.
        report_step_scheduled: Query answering whether the downstream report
            step runs in this invocation.
        logger: Logger used by every stage of the pass.
        runner: Command runner for executed detectors.
        only: Optional detector names restricting the selection.

    Returns:
        CheckStatus | None: Successful status, or ``None`` when the gate is
        disabled.

    Raises:
        DetectorError: When a detector fails under the ``abort`` policy.
        HardAbort: When violations are found and the failure is fatal.
        SoftHalt: When violations are found and only this step stops.
    """

    log = logger or ConsoleLogger()
    if not config.enabled:
        log.info("lintgate is disabled; skipping violation detectors.")
        return None

    if detectors is None:
        layout = inspect_project(root, config.source_dirs)
        detectors = build_detectors(config, layout, logger=log, runner=runner, only=only)
    if not detectors:
        log.warn("No violation detectors apply to this project.")

    result = aggregate(detectors, on_tool_failure=config.on_tool_failure, logger=log)
    report_dir = config.report_directory(root)
    _write_status(result, report_dir, log)
    _write_exports(config, root, result, detectors, log)
    return decide(
        result.violations,
        report_dir=report_dir,
        fail_on_error=config.fail_on_error,
        report_step_scheduled=report_step_scheduled or never_scheduled,
        logger=log,
    )


__all__ = ["run_check"]
