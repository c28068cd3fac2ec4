# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Core data models shared across the lintgate package."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import TypeAliasType

from .severity import Severity

JsonScalar = TypeAliasType("JsonScalar", str | int | float | bool | None)
JsonValue = TypeAliasType(
    "JsonValue", "JsonScalar | list[JsonValue] | dict[str, JsonValue]"
)
ViolationKey = TypeAliasType(
    "ViolationKey", tuple[str, str | None, str | None, int | None, str]
)


class Violation(BaseModel):
    """A single issue reported by one detector.

    Equality and hashing only consider the identity tuple returned by
    :meth:`identity`, so two findings that differ only in display metadata
    collapse into one entry of a violation set.
    """

    model_config = ConfigDict(frozen=True)

    detector: str
    rule: str | None = None
    severity: Severity = Severity.WARNING
    message: str
    file: str | None = None
    line: int | None = None
    column: int | None = None
    url: str | None = None
    category: str | None = None
    meta: dict[str, JsonValue] = Field(default_factory=dict)

    @field_validator("file", mode="before")
    @classmethod
    def _normalise_file(cls, value: str | Path | None) -> str | None:
        """Store file paths as POSIX strings.

        Args:
            value: Path reported by the tool, if any.

        Returns:
            str | None: POSIX path string or ``None`` when the tool omitted it.
        """

        if value is None:
            return None
        text = value.as_posix() if isinstance(value, Path) else str(value).strip()
        return text or None

    @field_validator("line", "column", mode="before")
    @classmethod
    def _drop_non_positive(cls, value: int | str | None) -> int | None:
        if value is None or value == "":
            return None
        number = int(value)
        return number if number > 0 else None

    def identity(self) -> ViolationKey:
        """Return the ``(detector, rule, file, line, message)`` identity tuple."""

        return (self.detector, self.rule, self.file, self.line, self.message)

    def sort_key(self) -> tuple[str, int, str, str, str]:
        """Return a key giving violations a stable, reproducible order."""

        return (self.file or "", self.line or 0, self.detector, self.rule or "", self.message)

    def location(self) -> str:
        """Return ``file:line`` style location text for display."""

        if not self.file:
            return "<project>"
        if self.line is None:
            return self.file
        return f"{self.file}:{self.line}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Violation):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())


def sorted_violations(violations: Iterable[Violation]) -> list[Violation]:
    """Return ``violations`` in deterministic file/line/detector order."""

    return sorted(violations, key=Violation.sort_key)


class DetectorCount(BaseModel):
    """Number of violations a detector contributed to an aggregation pass."""

    model_config = ConfigDict(frozen=True)

    name: str
    count: int
    failed: bool = False
    error: str | None = None


class AggregationResult(BaseModel):
    """Union of every detector's findings for one aggregation pass."""

    model_config = ConfigDict(frozen=True)

    violations: frozenset[Violation] = Field(default_factory=frozenset)
    counts: tuple[DetectorCount, ...] = Field(default_factory=tuple)

    def is_clean(self) -> bool:
        """Return ``True`` when no detector reported a violation."""

        return not self.violations

    def by_detector(self) -> dict[str, list[Violation]]:
        """Group violations by detector name, each list in stable order."""

        buckets: dict[str, list[Violation]] = {}
        for violation in sorted_violations(self.violations):
            buckets.setdefault(violation.detector, []).append(violation)
        return dict(sorted(buckets.items()))


class CheckState(str, Enum):
    """Outcome of the most recent aggregation pass."""

    SUCCESS = "success"
    FAILURE = "failure"


class CheckStatus(BaseModel):
    """Pass/fail status handed to whatever reports build status upstream."""

    model_config = ConfigDict(frozen=True)

    state: CheckState
    violations: tuple[Violation, ...] = Field(default_factory=tuple)

    @classmethod
    def success(cls) -> CheckStatus:
        """Return a successful status carrying no violations."""

        return cls(state=CheckState.SUCCESS)

    @classmethod
    def failure(cls, violations: Iterable[Violation]) -> CheckStatus:
        """Return a failing status carrying ``violations`` in stable order."""

        return cls(state=CheckState.FAILURE, violations=tuple(sorted_violations(violations)))

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when the pass found no violations."""

        return self.state is CheckState.SUCCESS
