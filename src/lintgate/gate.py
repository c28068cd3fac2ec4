# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors

"""Pass/fail decision and its enforcement policy."""

from __future__ import annotations

from collections.abc import Callable, Collection
from enum import Enum
from pathlib import Path
from typing import Final

from typing_extensions import TypeAliasType

from .errors import HardAbort, SoftHalt
from .logging import ConsoleLogger
from .models import CheckStatus, Violation
from .reporting.writer import delete_report, report_path, write_report

SUCCESS_MESSAGE: Final[str] = "No violations found, the build is clean!"

ReportStepQuery = TypeAliasType("ReportStepQuery", Callable[[], bool])


class Termination(str, Enum):
    """How a failing pass stops the invocation."""

    HARD_ABORT = "hard_abort"
    SOFT_HALT = "soft_halt"


def resolve_termination(*, fail_on_error: bool, report_step_scheduled: bool) -> Termination:
    """Return the termination a failing pass must use.

    A hard abort only happens when failures are fatal and no downstream report
    step will run in this invocation.
    """

    if fail_on_error and not report_step_scheduled:
        return Termination.HARD_ABORT
    return Termination.SOFT_HALT


def failure_message(directory: Path) -> str:
    return (
        "One or more violation detectors has found violations. "
        f"Check the report at {report_path(directory)} for details."
    )


def never_scheduled() -> bool:
    return False


def decide(
    violations: Collection[Violation],
    *,
    report_dir: Path,
    fail_on_error: bool = True,
    report_step_scheduled: ReportStepQuery = never_scheduled,
    logger: ConsoleLogger | None = None,
) -> CheckStatus:
    """Turn an aggregated violation set into a status and enforce the gate.

    Args:
        violations: Deduplicated violation set from one aggregation pass.
        report_dir: Directory holding the local HTML report.
        fail_on_error: Whether violations should fail the invocation.
        report_step_scheduled: Query answering whether the downstream report
            step runs in this invocation. Only consulted on failure.
        logger: Logger receiving the success or failure message.

    Returns:
        CheckStatus: Successful status when ``violations`` is empty.

    Raises:
        HardAbort: When violations were found, ``fail_on_error`` is set and no
            report step is scheduled.
        SoftHalt: When violations were found under any other policy.
    """

    log = logger or ConsoleLogger()
    if not violations:
        delete_report(report_dir, logger=log)
        log.ok(SUCCESS_MESSAGE)
        return CheckStatus.success()

    status = CheckStatus.failure(violations)
    write_report(violations, report_dir, logger=log)
    message = failure_message(report_dir)
    termination = resolve_termination(
        fail_on_error=fail_on_error,
        report_step_scheduled=report_step_scheduled(),
    )
    if termination is Termination.HARD_ABORT:
        raise HardAbort(message, status=status, report_path=report_path(report_dir))
    log.fail(message)
    raise SoftHalt(message, status=status, report_path=report_path(report_dir))


__all__ = [
    "ReportStepQuery",
    "SUCCESS_MESSAGE",
    "Termination",
    "decide",
    "failure_message",
    "never_scheduled",
    "resolve_termination",
]
