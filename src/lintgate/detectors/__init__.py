# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Detector variants wrapping external static-analysis tools."""

from .base import (
    BaseViolationDetector,
    DetectorKind,
    ExecutedViolationDetector,
    ReportViolationDetector,
    ViolationDetector,
)
from .builtins import (
    AndroidLintViolationDetector,
    CheckstyleViolationDetector,
    DetektViolationDetector,
    FindbugsViolationDetector,
    KtlintViolationDetector,
    PMDViolationDetector,
)
from .registry import (
    DETECTOR_CATALOG,
    DetectorDefinition,
    DetectorStatus,
    build_detectors,
    definition_for,
    describe_detectors,
    resolve_tool_version,
)

__all__ = [
    "AndroidLintViolationDetector",
    "BaseViolationDetector",
    "CheckstyleViolationDetector",
    "DETECTOR_CATALOG",
    "DetectorDefinition",
    "DetectorKind",
    "DetectorStatus",
    "DetektViolationDetector",
    "ExecutedViolationDetector",
    "FindbugsViolationDetector",
    "KtlintViolationDetector",
    "PMDViolationDetector",
    "ReportViolationDetector",
    "ViolationDetector",
    "build_detectors",
    "definition_for",
    "describe_detectors",
    "resolve_tool_version",
]
