# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Exception hierarchy raised by detectors, the report writer and the gate."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import CheckStatus


class DetectorError(RuntimeError):
    """Raised when a detector cannot produce a trustworthy result."""

    def __init__(self, detector: str, message: str) -> None:
        """Initialise the error with the failing detector name.

        Args:
            detector: Name of the detector that failed.
            message: Human-readable description of the failure.
        """

        super().__init__(f"{detector}: {message}")
        self.detector = detector
        self.reason = message


class ToolInvocationError(DetectorError):
    """The external tool could not be started, timed out, or exited unexpectedly."""

    def __init__(self, detector: str, message: str, *, returncode: int | None = None) -> None:
        super().__init__(detector, message)
        self.returncode = returncode


class ReportParseError(DetectorError):
    """The tool report is missing or is not well-formed."""


class ReportPreconditionError(ValueError):
    """Raised when a report is requested for an empty violation set."""


class GateFailure(Exception):
    """Base class for the termination signals raised when violations are found."""

    def __init__(self, message: str, *, status: CheckStatus, report_path: Path) -> None:
        """Initialise the signal with the status it carries.

        Args:
            message: Message naming the report location.
            status: Failing check status produced by the pass.
            report_path: Location of the rendered report.
        """

        super().__init__(message)
        self.message = message
        self.status = status
        self.report_path = report_path


class HardAbort(GateFailure):
    """Fail the whole invocation."""


class SoftHalt(GateFailure):
    """Stop the check step only, letting downstream steps run."""
