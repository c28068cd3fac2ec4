# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Detector capability interface and the two shared detector shapes."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import ClassVar, Final, Protocol, runtime_checkable

from ..config import SOURCES_PLACEHOLDER, DetectorSettings
from ..errors import ToolInvocationError
from ..logging import ConsoleLogger
from ..models import Violation
from ..process_utils import CommandOptions, CommandRunner, run_command
from ..project import ProjectLayout
from .parsers import ParseContext, ReportParser, parse_file

_STDERR_TAIL_LINES: Final[int] = 5


class DetectorKind(str, Enum):
    """Closed set of supported analysis tools."""

    CHECKSTYLE = "checkstyle"
    PMD = "pmd"
    FINDBUGS = "findbugs"
    KTLINT = "ktlint"
    DETEKT = "detekt"
    ANDROID_LINT = "android_lint"


@runtime_checkable
class ViolationDetector(Protocol):
    """Uniform two-phase interface every detector variant implements."""

    @property
    def name(self) -> str:
        """Return the display name used in logs and reports."""
        ...

    def run_if_needed(self) -> None:
        """Run the underlying tool when results are not already on disk."""
        ...

    def collect(self) -> list[Violation]:
        """Return the violations found by the most recent tool run."""
        ...


class BaseViolationDetector(ABC):
    """Shared state for detectors backed by one XML report file."""

    kind: ClassVar[DetectorKind]
    display_name: ClassVar[str]
    parser: ClassVar[ReportParser]
    default_report_name: ClassVar[str]

    def __init__(
        self,
        *,
        layout: ProjectLayout,
        settings: DetectorSettings,
        report_dir: Path,
        tool_version: str | None = None,
        logger: ConsoleLogger | None = None,
    ) -> None:
        """Bind the detector to a project and its configuration.

        Args:
            layout: Inspected project layout.
            settings: Detector configuration section.
            report_dir: Directory receiving intermediate tool reports.
            tool_version: Resolved tool version, if the tool is versioned.
            logger: Logger receiving debug output.
        """

        self.layout = layout
        self.settings = settings
        self.report_dir = report_dir
        self.tool_version = tool_version
        self.logger = logger or ConsoleLogger()

    @property
    def name(self) -> str:
        return self.display_name

    @property
    def root(self) -> Path:
        return self.layout.root

    @property
    def report_file(self) -> Path:
        """Return the absolute location of the tool's XML report."""

        configured = self.settings.report_file
        if configured is None:
            return self.report_dir / self.default_report_name
        return configured if configured.is_absolute() else self.root / configured

    def parse_context(self) -> ParseContext:
        return ParseContext(detector=self.name, root=self.root, source_dirs=self.layout.source_dirs)

    def run_if_needed(self) -> None:
        """Report-reading detectors have nothing to run."""

    def collect(self) -> list[Violation]:
        return parse_file(self.report_file, type(self).parser, self.parse_context())


class ReportViolationDetector(BaseViolationDetector):
    """Detector that reads a report an earlier build step already produced."""


class ExecutedViolationDetector(BaseViolationDetector):
    """Detector that must run its tool before results can be collected."""

    executable: ClassVar[str]
    ok_exit_codes: ClassVar[frozenset[int]] = frozenset({0})

    def __init__(
        self,
        *,
        layout: ProjectLayout,
        settings: DetectorSettings,
        report_dir: Path,
        tool_version: str | None = None,
        logger: ConsoleLogger | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        super().__init__(
            layout=layout,
            settings=settings,
            report_dir=report_dir,
            tool_version=tool_version,
            logger=logger,
        )
        self.runner: CommandRunner = runner or run_command

    @abstractmethod
    def default_command(self) -> list[str]:
        """Return the tool command used when no override is configured."""

    def accepts_exit_code(self, returncode: int) -> bool:
        """Return ``True`` when ``returncode`` means the tool finished its analysis."""

        return returncode in self.ok_exit_codes

    def placeholders(self) -> dict[str, str]:
        config_file = self.settings.config_file
        return {
            "version": self.tool_version or "",
            "report": str(self.report_file),
            "config": str(self.root / config_file) if config_file is not None else "",
            "root": str(self.root),
        }

    def source_arguments(self) -> list[str]:
        return [str(path) for path in self.layout.existing_source_dirs()]

    def build_command(self) -> list[str]:
        """Return the full command line, honouring a configured override.

        Raises:
            ToolInvocationError: If an override token cannot be expanded or the
                resulting command is empty.
        """

        if self.settings.command is None:
            return [*self.default_command(), *self.settings.args]
        values = self.placeholders()
        command: list[str] = []
        for token in self.settings.command:
            if token == SOURCES_PLACEHOLDER:
                command.extend(self.source_arguments())
                continue
            try:
                command.append(token.format(**values))
            except (KeyError, IndexError, ValueError) as exc:
                raise ToolInvocationError(self.name, f"cannot expand command token {token!r}: {exc}") from exc
        if not command:
            raise ToolInvocationError(self.name, "configured command is empty")
        return [*command, *self.settings.args]

    def run_if_needed(self) -> None:
        """Run the tool synchronously and verify it produced a usable result.

        Raises:
            ToolInvocationError: If the tool cannot be started, times out, or
                exits with a status outside :attr:`ok_exit_codes`.
        """

        command = self.build_command()
        self.report_file.parent.mkdir(parents=True, exist_ok=True)
        self.report_file.unlink(missing_ok=True)
        self.logger.debug(f"detector={self.name} cmd={' '.join(command)}")
        try:
            completed = self.runner(
                command,
                options=CommandOptions(cwd=self.root, timeout=self.settings.timeout),
            )
        except FileNotFoundError as exc:
            raise ToolInvocationError(self.name, str(exc)) from exc
        except subprocess.TimeoutExpired as exc:
            raise ToolInvocationError(self.name, f"{command[0]} timed out after {exc.timeout:.1f}s") from exc
        except OSError as exc:
            raise ToolInvocationError(self.name, f"unable to start {command[0]}: {exc}") from exc
        if not self.accepts_exit_code(completed.returncode):
            raise ToolInvocationError(
                self.name,
                f"{command[0]} exited with status {completed.returncode}: {_tail(completed.stderr)}",
                returncode=completed.returncode,
            )


def _tail(stream: str | None) -> str:
    if not stream or not stream.strip():
        return "<no stderr>"
    lines = stream.strip().splitlines()
    return " | ".join(lines[-_STDERR_TAIL_LINES:])


def source_suffix_globs(dirs: Sequence[Path], suffixes: Sequence[str]) -> list[str]:
    """Return ``dir/**/*suffix`` patterns for tools that expand globs themselves."""

    return [f"{path.as_posix()}/**/*{suffix}" for path in dirs for suffix in suffixes]


__all__ = [
    "BaseViolationDetector",
    "DetectorKind",
    "ExecutedViolationDetector",
    "ReportViolationDetector",
    "SOURCES_PLACEHOLDER",
    "ViolationDetector",
    "source_suffix_globs",
]
