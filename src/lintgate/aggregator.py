# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors

"""Run each configured detector once and merge the findings."""

from __future__ import annotations

from collections.abc import Sequence

from .config import ToolFailurePolicy
from .detectors.base import ViolationDetector
from .errors import DetectorError
from .logging import ConsoleLogger
from .models import AggregationResult, DetectorCount, Violation


def aggregate(
    detectors: Sequence[ViolationDetector],
    *,
    on_tool_failure: ToolFailurePolicy = ToolFailurePolicy.ABORT,
    logger: ConsoleLogger | None = None,
) -> AggregationResult:
    """Run ``detectors`` in order and union their violations.

    Each detector runs its tool (when it has one) before its findings are
    collected. Findings with identical identity tuples collapse into one entry.

    Args:
        detectors: Enabled detectors in configuration order.
        on_tool_failure: Whether a failing detector aborts the pass or is
            recorded with zero violations.
        logger: Logger receiving per-detector progress lines.

    Returns:
        AggregationResult: Deduplicated violations plus per-detector counts.

    Raises:
        DetectorError: When a detector fails and ``on_tool_failure`` is
            :attr:`ToolFailurePolicy.ABORT`.
    """

    log = logger or ConsoleLogger()
    merged: set[Violation] = set()
    counts: list[DetectorCount] = []
    for detector in detectors:
        try:
            detector.run_if_needed()
            found = detector.collect()
        except DetectorError as exc:
            if on_tool_failure is ToolFailurePolicy.ABORT:
                log.fail(f"{detector.name} failed: {exc.reason}")
                raise
            log.warn(f"{detector.name} failed and was skipped: {exc.reason}")
            counts.append(DetectorCount(name=detector.name, count=0, failed=True, error=exc.reason))
            continue
        unique = set(found)
        merged.update(unique)
        counts.append(DetectorCount(name=detector.name, count=len(unique)))
        log.lifecycle(f"{detector.name} detected {len(unique)} violations.")
    return AggregationResult(violations=frozenset(merged), counts=tuple(counts))


__all__ = ["aggregate"]
