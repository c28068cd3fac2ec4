# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Tests for tool report parsers."""

from __future__ import annotations

from pathlib import Path

import pytest

from lintgate.detectors.parsers import (
    ParseContext,
    load_report,
    parse_android_lint,
    parse_checkstyle,
    parse_file,
    parse_pmd,
    parse_report_text,
    parse_spotbugs,
    rule_from_source,
)
from lintgate.errors import ReportParseError
from lintgate.severity import Severity


def _context(root: Path, detector: str = "tool") -> ParseContext:
    return ParseContext(detector=detector, root=root, source_dirs=(Path("src/main/java"),))


def test_parse_checkstyle_report(fixtures_dir: Path, tmp_path: Path) -> None:
    violations = parse_file(fixtures_dir / "checkstyle.xml", parse_checkstyle, _context(tmp_path, "Checkstyle"))

    assert len(violations) == 2
    magic = next(item for item in violations if item.rule == "MagicNumber")
    assert magic.detector == "Checkstyle"
    assert magic.file == "src/main/java/com/example/App.java"
    assert magic.line == 12
    assert magic.column == 5
    assert magic.severity is Severity.WARNING
    assert magic.message == "'42' is a magic number."
    unused = next(item for item in violations if item.rule == "UnusedImports")
    assert unused.severity is Severity.ERROR
    assert unused.column is None


def test_parse_checkstyle_relativises_absolute_paths(tmp_path: Path) -> None:
    source = tmp_path / "src" / "Main.kt"
    document = parse_report_text(
        f'<checkstyle><file name="{source}"><error line="4" severity="info" '
        'message="Unexpected blank line" source="standard:no-blank-line"/></file></checkstyle>',
        "ktlint",
    )

    [violation] = parse_checkstyle(document, _context(tmp_path, "ktlint"))

    assert violation.file == "src/Main.kt"
    assert violation.rule == "standard:no-blank-line"
    assert violation.severity is Severity.NOTICE


def test_parse_pmd_report_with_namespace(fixtures_dir: Path, tmp_path: Path) -> None:
    violations = parse_file(fixtures_dir / "pmd.xml", parse_pmd, _context(tmp_path, "PMD"))

    by_rule = {item.rule: item for item in violations}
    assert set(by_rule) == {"UnusedLocalVariable", "EmptyCatchBlock"}
    unused = by_rule["UnusedLocalVariable"]
    assert unused.message == "Avoid unused local variables such as 'x'."
    assert unused.line == 7
    assert unused.severity is Severity.WARNING
    assert unused.category == "Best Practices"
    assert unused.url is not None and unused.url.endswith("#unusedlocalvariable")
    assert by_rule["EmptyCatchBlock"].severity is Severity.ERROR


def test_parse_spotbugs_locates_sources(fixtures_dir: Path, tmp_path: Path) -> None:
    app = tmp_path / "src" / "main" / "java" / "com" / "example" / "App.java"
    app.parent.mkdir(parents=True)
    app.write_text("class App {}\n", encoding="utf-8")

    violations = parse_file(fixtures_dir / "spotbugs.xml", parse_spotbugs, _context(tmp_path, "Findbugs"))

    by_rule = {item.rule: item for item in violations}
    null_deref = by_rule["NP_NULL_ON_SOME_PATH"]
    assert null_deref.file == "src/main/java/com/example/App.java"
    assert null_deref.line == 18
    assert null_deref.severity is Severity.ERROR
    assert null_deref.message.startswith("Possible null pointer dereference of name")
    bad_field = by_rule["SE_BAD_FIELD"]
    # Falls back to the class-level source line and the package-relative path.
    assert bad_field.file == "com/example/Model.java"
    assert bad_field.line == 5
    assert bad_field.severity is Severity.NOTICE
    assert bad_field.message == "Non-transient non-serializable instance field in serializable class"


def test_parse_android_lint_report(fixtures_dir: Path, tmp_path: Path) -> None:
    violations = parse_file(fixtures_dir / "lint-results.xml", parse_android_lint, _context(tmp_path, "Android Lint"))

    by_rule = {item.rule: item for item in violations}
    hardcoded = by_rule["HardcodedText"]
    assert hardcoded.file == "app/src/main/res/layout/activity_main.xml"
    assert hardcoded.line == 14
    assert hardcoded.column == 9
    assert hardcoded.severity is Severity.WARNING
    assert hardcoded.url == "https://developer.android.com/guide/topics/resources/localization"
    assert by_rule["MissingPermission"].severity is Severity.ERROR
    assert by_rule["MissingPermission"].column is None


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("com.puppycrawl.tools.checkstyle.checks.coding.MagicNumberCheck", "MagicNumber"),
        ("detekt.LongMethod", "LongMethod"),
        ("standard:no-wildcard-imports", "standard:no-wildcard-imports"),
        ("Check", "Check"),
        (None, None),
    ],
)
def test_rule_from_source(source: str | None, expected: str | None) -> None:
    assert rule_from_source(source) == expected


def test_load_report_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ReportParseError, match="report not found"):
        load_report(tmp_path / "absent.xml", "PMD")


def test_parse_report_text_rejects_empty_and_malformed() -> None:
    with pytest.raises(ReportParseError, match="is empty"):
        parse_report_text("   ", "PMD")
    with pytest.raises(ReportParseError, match="malformed") as excinfo:
        parse_report_text("<pmd><file>", "PMD")
    assert excinfo.value.detector == "PMD"
