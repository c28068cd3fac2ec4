# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Tests for detector variants, command construction and the catalog."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest
from pydantic import ValidationError

from lintgate.aggregator import aggregate
from lintgate.config import Config, ConfigError, DetectorSettings, FindbugsSettings, PMDSettings, ToolFailurePolicy
from lintgate.detectors import (
    DETECTOR_CATALOG,
    AndroidLintViolationDetector,
    CheckstyleViolationDetector,
    DetectorKind,
    DetektViolationDetector,
    FindbugsViolationDetector,
    KtlintViolationDetector,
    PMDViolationDetector,
    ViolationDetector,
    build_detectors,
    describe_detectors,
    resolve_tool_version,
)
from lintgate.errors import ReportParseError, ToolInvocationError
from lintgate.process_utils import CommandOptions
from lintgate.project import ProjectLayout

from .conftest import RecordingLogger

CHECKSTYLE_REPORT = (
    '<checkstyle version="8.45.1"><file name="src/App.java">'
    '<error line="1" severity="warning" message="Missing javadoc." '
    'source="com.puppycrawl.tools.checkstyle.checks.javadoc.MissingJavadocTypeCheck"/>'
    "</file></checkstyle>"
)


class FakeRunner:
    """Command runner recording invocations and optionally writing a report."""

    def __init__(
        self,
        *,
        returncode: int = 0,
        report_text: str | None = None,
        stderr: str = "",
        error: Exception | None = None,
    ) -> None:
        self.returncode = returncode
        self.report_text = report_text
        self.stderr = stderr
        self.error = error
        self.report_path: Path | None = None
        self.calls: list[tuple[list[str], CommandOptions]] = []

    def __call__(self, args: Sequence[str], *, options: CommandOptions) -> subprocess.CompletedProcess[str]:
        self.calls.append((list(args), options))
        if self.error is not None:
            raise self.error
        if self.report_text is not None and self.report_path is not None:
            self.report_path.write_text(self.report_text, encoding="utf-8")
        return subprocess.CompletedProcess(list(args), self.returncode, "", self.stderr)


def _layout(root: Path, *, java: bool = True, kotlin: bool = False, android: bool = False) -> ProjectLayout:
    (root / "src").mkdir(exist_ok=True)
    return ProjectLayout(
        root=root,
        source_dirs=(Path("src"), Path("missing")),
        has_java_sources=java,
        has_kotlin_sources=kotlin,
        is_android_project=android,
    )


def test_checkstyle_runs_then_collects(tmp_path: Path, recording_logger: RecordingLogger) -> None:
    runner = FakeRunner(returncode=1, report_text=CHECKSTYLE_REPORT)
    detector = CheckstyleViolationDetector(
        layout=_layout(tmp_path),
        settings=DetectorSettings(),
        report_dir=tmp_path / "work",
        tool_version="8.45.1",
        logger=recording_logger,
        runner=runner,
    )
    runner.report_path = detector.report_file

    detector.run_if_needed()
    violations = detector.collect()

    command, options = runner.calls[0]
    assert command == [
        "checkstyle",
        "-c",
        "/google_checks.xml",
        "-f",
        "xml",
        "-o",
        str(tmp_path / "work" / "checkstyle.xml"),
        str(tmp_path / "src"),
    ]
    assert options.cwd == tmp_path
    assert [item.rule for item in violations] == ["MissingJavadocType"]
    assert violations[0].detector == "Checkstyle"
    assert isinstance(detector, ViolationDetector)
    assert recording_logger.messages("debug")


def test_executed_detector_removes_stale_report(tmp_path: Path) -> None:
    runner = FakeRunner()
    detector = CheckstyleViolationDetector(
        layout=_layout(tmp_path),
        settings=DetectorSettings(),
        report_dir=tmp_path / "work",
        runner=runner,
    )
    detector.report_file.parent.mkdir(parents=True)
    detector.report_file.write_text(CHECKSTYLE_REPORT, encoding="utf-8")

    detector.run_if_needed()

    with pytest.raises(ReportParseError, match="report not found"):
        detector.collect()


def test_pmd_command_and_exit_codes(tmp_path: Path) -> None:
    runner = FakeRunner(returncode=4)
    detector = PMDViolationDetector(
        layout=_layout(tmp_path),
        settings=PMDSettings(rulesets=["rulesets/java/quickstart.xml"], args=["--threads", "1"]),
        report_dir=tmp_path,
        runner=runner,
    )

    detector.run_if_needed()

    assert runner.calls[0][0] == [
        "pmd",
        "check",
        "--dir",
        str(tmp_path / "src"),
        "--rulesets",
        "rulesets/java/quickstart.xml",
        "--format",
        "xml",
        "--report-file",
        str(tmp_path / "pmd.xml"),
        "--no-progress",
        "--threads",
        "1",
    ]
    runner.returncode = 1
    with pytest.raises(ToolInvocationError) as excinfo:
        detector.run_if_needed()
    assert excinfo.value.returncode == 1


def test_pmd_config_file_replaces_rulesets(tmp_path: Path) -> None:
    detector = PMDViolationDetector(
        layout=_layout(tmp_path),
        settings=PMDSettings(config_file=Path("config/pmd.xml")),
        report_dir=tmp_path,
    )

    command = detector.build_command()

    assert command[command.index("--rulesets") + 1] == str(tmp_path / "config" / "pmd.xml")


def test_findbugs_command_uses_classes_dir(tmp_path: Path) -> None:
    detector = FindbugsViolationDetector(
        layout=_layout(tmp_path),
        settings=FindbugsSettings(exclude_filter=Path("config/exclude.xml")),
        report_dir=tmp_path,
    )

    assert detector.build_command() == [
        "spotbugs",
        "-textui",
        "-xml:withMessages",
        "-output",
        str(tmp_path / "findbugs.xml"),
        "-exclude",
        str(tmp_path / "config" / "exclude.xml"),
        str(tmp_path / "build" / "classes"),
    ]
    assert detector.name == "Findbugs"


def test_ktlint_passes_relative_globs(tmp_path: Path) -> None:
    detector = KtlintViolationDetector(
        layout=_layout(tmp_path, java=False, kotlin=True),
        settings=DetectorSettings(),
        report_dir=tmp_path,
    )

    assert detector.build_command() == [
        "ktlint",
        f"--reporter=checkstyle,output={tmp_path / 'ktlint.xml'}",
        "src/**/*.kt",
        "src/**/*.kts",
    ]
    assert detector.accepts_exit_code(1)
    assert not detector.accepts_exit_code(2)


def test_detekt_command_with_config(tmp_path: Path) -> None:
    detector = DetektViolationDetector(
        layout=_layout(tmp_path, java=False, kotlin=True),
        settings=DetectorSettings(config_file=Path("detekt.yml")),
        report_dir=tmp_path,
    )

    assert detector.build_command() == [
        "detekt",
        "--input",
        str(tmp_path / "src"),
        "--report",
        f"xml:{tmp_path / 'detekt.xml'}",
        "--config",
        str(tmp_path / "detekt.yml"),
    ]
    assert detector.accepts_exit_code(2)
    assert not detector.accepts_exit_code(1)


def test_command_override_expands_placeholders(tmp_path: Path) -> None:
    settings = DetectorSettings(
        command=["java", "-jar", "tools/checkstyle-{version}.jar", "-o", "{report}", "{sources}"],
        args=["--debug"],
    )
    detector = CheckstyleViolationDetector(
        layout=_layout(tmp_path),
        settings=settings,
        report_dir=tmp_path,
        tool_version="10.12.0",
    )

    assert detector.build_command() == [
        "java",
        "-jar",
        "tools/checkstyle-10.12.0.jar",
        "-o",
        str(tmp_path / "checkstyle.xml"),
        str(tmp_path / "src"),
        "--debug",
    ]


@pytest.mark.parametrize(
    "command",
    [[], ["java", "-Dprop={unknown}"], ["java", "{}"], ["java", "{0}"], ["java", "-o {"]],
)
def test_command_override_rejects_unexpandable_tokens(command: list[str]) -> None:
    with pytest.raises(ValidationError):
        DetectorSettings(command=command)


def test_command_override_keeps_escaped_braces(tmp_path: Path) -> None:
    detector = CheckstyleViolationDetector(
        layout=_layout(tmp_path),
        settings=DetectorSettings(command=["checkstyle", "-Dformat={{json}}", "{root}"]),
        report_dir=tmp_path,
    )

    assert detector.build_command() == ["checkstyle", "-Dformat={json}", str(tmp_path)]


def test_unexpandable_command_falls_under_tool_failure_policy(
    tmp_path: Path,
    recording_logger: RecordingLogger,
) -> None:
    runner = FakeRunner()
    detector = CheckstyleViolationDetector(
        layout=_layout(tmp_path),
        settings=DetectorSettings.model_construct(command=["java", "-Dprop={unknown}"]),
        report_dir=tmp_path,
        runner=runner,
    )

    with pytest.raises(ToolInvocationError, match="cannot expand command token"):
        detector.run_if_needed()

    result = aggregate([detector], on_tool_failure=ToolFailurePolicy.IGNORE, logger=recording_logger)

    assert result.counts[0].failed
    assert runner.calls == []


@pytest.mark.parametrize(
    ("error", "match"),
    [
        (FileNotFoundError("Executable 'checkstyle' was not found on PATH"), "not found on PATH"),
        (subprocess.TimeoutExpired(["checkstyle"], 5.0), "timed out after 5.0s"),
        (PermissionError("permission denied"), "unable to start checkstyle"),
    ],
)
def test_invocation_failures_become_tool_errors(tmp_path: Path, error: Exception, match: str) -> None:
    detector = CheckstyleViolationDetector(
        layout=_layout(tmp_path),
        settings=DetectorSettings(timeout=5),
        report_dir=tmp_path,
        runner=FakeRunner(error=error),
    )

    with pytest.raises(ToolInvocationError, match=match) as excinfo:
        detector.run_if_needed()
    assert excinfo.value.detector == "Checkstyle"


def test_unexpected_exit_code_reports_stderr_tail(tmp_path: Path) -> None:
    stderr = "\n".join(f"line {index}" for index in range(10))
    detector = PMDViolationDetector(
        layout=_layout(tmp_path),
        settings=PMDSettings(),
        report_dir=tmp_path,
        runner=FakeRunner(returncode=2, stderr=stderr),
    )

    with pytest.raises(ToolInvocationError) as excinfo:
        detector.run_if_needed()
    assert excinfo.value.reason == "pmd exited with status 2: line 5 | line 6 | line 7 | line 8 | line 9"


def test_android_lint_reads_existing_report(tmp_path: Path, fixtures_dir: Path) -> None:
    report = tmp_path / "build" / "reports" / "lint-results.xml"
    report.parent.mkdir(parents=True)
    report.write_text((fixtures_dir / "lint-results.xml").read_text(encoding="utf-8"), encoding="utf-8")
    detector = AndroidLintViolationDetector(
        layout=_layout(tmp_path, android=True),
        settings=Config().android_lint,
        report_dir=tmp_path / "work",
    )

    detector.run_if_needed()

    assert detector.report_file == report
    assert {item.rule for item in detector.collect()} == {"HardcodedText", "MissingPermission"}


def test_catalog_covers_every_kind_in_order() -> None:
    assert [definition.kind for definition in DETECTOR_CATALOG] == list(DetectorKind)
    executed = {definition.kind for definition in DETECTOR_CATALOG if definition.executed}
    assert DetectorKind.ANDROID_LINT not in executed
    assert len(executed) == 5


def test_resolve_tool_version_prefers_override() -> None:
    config = Config.model_validate({"ktlint": {"tool_version": "0.36.0"}, "detekt": {"tool_version": "  "}})

    assert resolve_tool_version(config, DetectorKind.KTLINT) == "0.36.0"
    assert resolve_tool_version(config, DetectorKind.DETEKT) == "1.0.1"
    assert resolve_tool_version(config, DetectorKind.ANDROID_LINT) is None


def test_build_detectors_filters_by_enablement_and_layout(tmp_path: Path) -> None:
    config = Config.model_validate({"pmd": {"enabled": False}})

    java_only = build_detectors(config, _layout(tmp_path))
    everything = build_detectors(config, _layout(tmp_path, kotlin=True, android=True))

    assert [detector.name for detector in java_only] == ["Checkstyle", "Findbugs"]
    assert [detector.name for detector in everything] == [
        "Checkstyle",
        "Findbugs",
        "ktlint",
        "detekt",
        "Android Lint",
    ]
    assert all(detector.report_dir == tmp_path / "build" / "lintgate" for detector in everything)


def test_build_detectors_only_selection(tmp_path: Path) -> None:
    layout = _layout(tmp_path, kotlin=True)

    selected = build_detectors(Config(), layout, only=["detekt"])

    assert [detector.name for detector in selected] == ["detekt"]
    with pytest.raises(ConfigError, match="unknown detector 'eslint'"):
        build_detectors(Config(), layout, only=["eslint"])


def test_selection_cannot_reorder_detectors(tmp_path: Path) -> None:
    layout = _layout(tmp_path, kotlin=True)

    selected = build_detectors(Config(), layout, only=["detekt", "ktlint", "checkstyle"])

    assert [detector.name for detector in selected] == ["Checkstyle", "ktlint", "detekt"]


def test_describe_detectors_reports_applicability(tmp_path: Path) -> None:
    statuses = describe_detectors(Config(), _layout(tmp_path))

    by_kind = {status.definition.kind: status for status in statuses}
    assert by_kind[DetectorKind.CHECKSTYLE].active
    assert not by_kind[DetectorKind.KTLINT].applicable
    assert by_kind[DetectorKind.PMD].tool_version == "7.0.0"
