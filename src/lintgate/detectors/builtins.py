# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Concrete detector variants for the supported analysis tools."""

from __future__ import annotations

from typing import ClassVar, Final

from ..config import FindbugsSettings, PMDSettings
from .base import (
    DetectorKind,
    ExecutedViolationDetector,
    ReportViolationDetector,
    source_suffix_globs,
)
from .parsers import parse_android_lint, parse_checkstyle, parse_pmd, parse_spotbugs

CHECKSTYLE_BUILTIN_CONFIG: Final[str] = "/google_checks.xml"
KOTLIN_SUFFIXES: Final[tuple[str, ...]] = (".kt", ".kts")


class CheckstyleViolationDetector(ExecutedViolationDetector):
    """Run Checkstyle over the Java sources."""

    kind = DetectorKind.CHECKSTYLE
    display_name = "Checkstyle"
    parser = parse_checkstyle
    default_report_name = "checkstyle.xml"
    executable = "checkstyle"

    def accepts_exit_code(self, returncode: int) -> bool:
        # Checkstyle exits with the number of errors it reported.
        return returncode >= 0

    def default_command(self) -> list[str]:
        config = self.placeholders()["config"] or CHECKSTYLE_BUILTIN_CONFIG
        return [
            self.executable,
            "-c",
            config,
            "-f",
            "xml",
            "-o",
            str(self.report_file),
            *self.source_arguments(),
        ]


class PMDViolationDetector(ExecutedViolationDetector):
    """Run PMD 7 over the Java sources."""

    kind = DetectorKind.PMD
    display_name = "PMD"
    parser = parse_pmd
    default_report_name = "pmd.xml"
    executable = "pmd"
    ok_exit_codes: ClassVar[frozenset[int]] = frozenset({0, 4})

    def default_command(self) -> list[str]:
        rulesets = self.settings.rulesets if isinstance(self.settings, PMDSettings) else []
        if self.settings.config_file is not None:
            rulesets = [self.placeholders()["config"]]
        return [
            self.executable,
            "check",
            "--dir",
            ",".join(self.source_arguments()),
            "--rulesets",
            ",".join(rulesets),
            "--format",
            "xml",
            "--report-file",
            str(self.report_file),
            "--no-progress",
        ]


class FindbugsViolationDetector(ExecutedViolationDetector):
    """Run SpotBugs, the maintained FindBugs successor, over compiled classes."""

    kind = DetectorKind.FINDBUGS
    display_name = "Findbugs"
    parser = parse_spotbugs
    default_report_name = "findbugs.xml"
    executable = "spotbugs"

    def default_command(self) -> list[str]:
        command = [self.executable, "-textui", "-xml:withMessages", "-output", str(self.report_file)]
        if isinstance(self.settings, FindbugsSettings):
            if self.settings.exclude_filter is not None:
                command.extend(["-exclude", str(self.root / self.settings.exclude_filter)])
            command.append(str(self.root / self.settings.classes_dir))
        return command


class KtlintViolationDetector(ExecutedViolationDetector):
    """Run ktlint with its checkstyle reporter."""

    kind = DetectorKind.KTLINT
    display_name = "ktlint"
    parser = parse_checkstyle
    default_report_name = "ktlint.xml"
    executable = "ktlint"
    ok_exit_codes: ClassVar[frozenset[int]] = frozenset({0, 1})

    def default_command(self) -> list[str]:
        # ktlint expands the globs itself, relative to the working directory.
        dirs = [
            path.relative_to(self.root) if path.is_relative_to(self.root) else path
            for path in self.layout.existing_source_dirs()
        ]
        globs = source_suffix_globs(dirs, KOTLIN_SUFFIXES)
        return [self.executable, f"--reporter=checkstyle,output={self.report_file}", *globs]


class DetektViolationDetector(ExecutedViolationDetector):
    """Run detekt-cli and read its checkstyle-format XML report."""

    kind = DetectorKind.DETEKT
    display_name = "detekt"
    parser = parse_checkstyle
    default_report_name = "detekt.xml"
    executable = "detekt"
    # 2 signals that the configured maximum issue count was exceeded.
    ok_exit_codes: ClassVar[frozenset[int]] = frozenset({0, 2})

    def default_command(self) -> list[str]:
        command = [
            self.executable,
            "--input",
            ",".join(self.source_arguments()),
            "--report",
            f"xml:{self.report_file}",
        ]
        config = self.placeholders()["config"]
        if config:
            command.extend(["--config", config])
        return command


class AndroidLintViolationDetector(ReportViolationDetector):
    """Read the report written by the Android Gradle plugin's lint task."""

    kind = DetectorKind.ANDROID_LINT
    display_name = "Android Lint"
    parser = parse_android_lint
    default_report_name = "lint-results.xml"


__all__ = [
    "AndroidLintViolationDetector",
    "CheckstyleViolationDetector",
    "DetektViolationDetector",
    "FindbugsViolationDetector",
    "KtlintViolationDetector",
    "PMDViolationDetector",
]
