# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from lintgate.errors import DetectorError
from lintgate.logging import ConsoleLogger
from lintgate.models import Violation


@dataclass(slots=True)
class RecordingLogger(ConsoleLogger):
    """Logger capturing ``(level, message)`` pairs instead of printing."""

    records: list[tuple[str, str]] = field(default_factory=list)

    def info(self, message: str) -> None:
        self.records.append(("info", message))

    def ok(self, message: str) -> None:
        self.records.append(("ok", message))

    def warn(self, message: str) -> None:
        self.records.append(("warn", message))

    def fail(self, message: str) -> None:
        self.records.append(("fail", message))

    def lifecycle(self, message: str) -> None:
        self.records.append(("lifecycle", message))

    def debug(self, message: str) -> None:
        self.records.append(("debug", message))

    def messages(self, level: str) -> list[str]:
        return [message for recorded, message in self.records if recorded == level]


class StaticDetector:
    """Detector returning canned violations, optionally failing."""

    def __init__(
        self,
        name: str,
        violations: Sequence[Violation] = (),
        *,
        error: DetectorError | None = None,
    ) -> None:
        self._name = name
        self._violations = list(violations)
        self._error = error
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    def run_if_needed(self) -> None:
        self.calls.append("run")
        if self._error is not None:
            raise self._error

    def collect(self) -> list[Violation]:
        self.calls.append("collect")
        return list(self._violations)


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger(use_emoji=False, use_color=False)


@pytest.fixture
def make_detector() -> Callable[..., StaticDetector]:
    return StaticDetector


@pytest.fixture
def make_violation() -> Callable[..., Violation]:
    def factory(detector: str = "A", **overrides: object) -> Violation:
        values: dict[str, object] = {
            "detector": detector,
            "rule": "Rule",
            "message": "message",
            "file": "src/Main.java",
            "line": 1,
        }
        values.update(overrides)
        return Violation.model_validate(values)

    return factory


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).resolve().parent / "fixtures"
