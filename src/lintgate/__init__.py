# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""lintgate: run static-analysis detectors and gate the build on their findings."""

from .aggregator import aggregate
from .config import Config, ConfigError, ToolFailurePolicy
from .config_loader import load_config
from .errors import (
    DetectorError,
    GateFailure,
    HardAbort,
    ReportParseError,
    ReportPreconditionError,
    SoftHalt,
    ToolInvocationError,
)
from .gate import Termination, decide, resolve_termination
from .models import AggregationResult, CheckState, CheckStatus, DetectorCount, Violation
from .pipeline import run_check
from .severity import Severity

__version__ = "0.1.0"

__all__ = [
    "AggregationResult",
    "CheckState",
    "CheckStatus",
    "Config",
    "ConfigError",
    "DetectorCount",
    "DetectorError",
    "GateFailure",
    "HardAbort",
    "ReportParseError",
    "ReportPreconditionError",
    "Severity",
    "SoftHalt",
    "Termination",
    "ToolFailurePolicy",
    "ToolInvocationError",
    "Violation",
    "__version__",
    "aggregate",
    "decide",
    "load_config",
    "resolve_termination",
    "run_check",
]
