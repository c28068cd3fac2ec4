# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Translate tool-native XML reports into :class:`Violation` objects."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import ReportParseError
from ..models import Violation
from ..severity import (
    ANDROID_LINT_SEVERITIES,
    CHECKSTYLE_SEVERITIES,
    Severity,
    map_label,
    severity_from_priority,
)

ReportParser = Callable[[ET.Element, "ParseContext"], list[Violation]]

_CHECK_SUFFIX = "Check"


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Information a parser needs to build violations for one detector."""

    detector: str
    root: Path
    source_dirs: tuple[Path, ...] = field(default_factory=tuple)

    def relative_file(self, raw: str | None) -> str | None:
        """Return ``raw`` relative to the project root when it lies inside it."""

        if not raw:
            return None
        path = Path(raw)
        if not path.is_absolute():
            return path.as_posix()
        try:
            return path.resolve().relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return path.as_posix()

    def locate_source(self, sourcepath: str | None) -> str | None:
        """Resolve a package-relative source path against the source directories."""

        if not sourcepath:
            return None
        for base in self.source_dirs:
            anchored = base if base.is_absolute() else self.root / base
            for candidate in (anchored / sourcepath, *anchored.glob(f"*/*/{sourcepath}")):
                if candidate.is_file():
                    return self.relative_file(str(candidate))
        return sourcepath


def _local(tag: str) -> str:
    """Strip an XML namespace from ``tag``."""

    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    for child in element:
        if _local(child.tag) == name:
            yield child


def _descendants(element: ET.Element, name: str) -> Iterator[ET.Element]:
    for child in element.iter():
        if _local(child.tag) == name:
            yield child


def _first_child(element: ET.Element, name: str) -> ET.Element | None:
    return next(_children(element, name), None)


def _text(element: ET.Element | None) -> str:
    if element is None or element.text is None:
        return ""
    return " ".join(element.text.split())


def _optional_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def rule_from_source(source: str | None) -> str | None:
    """Return a short rule identifier from a checkstyle-format ``source``.

    ``com.puppycrawl.tools.checkstyle.checks.coding.MagicNumberCheck`` becomes
    ``MagicNumber`` and ``detekt.LongMethod`` becomes ``LongMethod``; ktlint
    identifiers such as ``standard:no-wildcard-imports`` are kept verbatim.
    """

    if not source:
        return None
    name = source.rsplit(".", 1)[-1] if ":" not in source else source
    if name.endswith(_CHECK_SUFFIX) and len(name) > len(_CHECK_SUFFIX):
        name = name[: -len(_CHECK_SUFFIX)]
    return name or None


def load_report(path: Path, detector: str) -> ET.Element:
    """Parse the XML report at ``path``.

    Raises:
        ReportParseError: If the file is missing or is not well-formed XML.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ReportParseError(detector, f"report not found at {path}") from exc
    except OSError as exc:
        raise ReportParseError(detector, f"unable to read report {path}: {exc}") from exc
    return parse_report_text(text, detector, source=str(path))


def parse_report_text(text: str, detector: str, *, source: str = "<report>") -> ET.Element:
    """Parse report ``text`` into an element tree root.

    Raises:
        ReportParseError: If ``text`` is empty or not well-formed XML.
    """

    if not text.strip():
        raise ReportParseError(detector, f"report {source} is empty")
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        raise ReportParseError(detector, f"malformed report {source}: {exc}") from exc


def parse_checkstyle(document: ET.Element, context: ParseContext) -> list[Violation]:
    """Parse the checkstyle XML format (also written by ktlint and detekt)."""

    results: list[Violation] = []
    for file_node in _descendants(document, "file"):
        filename = context.relative_file(file_node.get("name"))
        for error in _children(file_node, "error"):
            source = error.get("source")
            results.append(
                Violation(
                    detector=context.detector,
                    rule=rule_from_source(source),
                    severity=map_label(error.get("severity"), CHECKSTYLE_SEVERITIES, Severity.WARNING),
                    message=" ".join((error.get("message") or "").split()),
                    file=filename,
                    line=_optional_int(error.get("line")),
                    column=_optional_int(error.get("column")),
                    meta={"source": source} if source else {},
                ),
            )
    return results


def parse_pmd(document: ET.Element, context: ParseContext) -> list[Violation]:
    """Parse PMD's XML report, priorities 1-2 are errors and 3 warnings."""

    results: list[Violation] = []
    for file_node in _descendants(document, "file"):
        filename = context.relative_file(file_node.get("name"))
        for violation in _children(file_node, "violation"):
            ruleset = violation.get("ruleset")
            results.append(
                Violation(
                    detector=context.detector,
                    rule=violation.get("rule"),
                    severity=severity_from_priority(violation.get("priority"), high=2, medium=3),
                    message=_text(violation),
                    file=filename,
                    line=_optional_int(violation.get("beginline")),
                    column=_optional_int(violation.get("begincolumn")),
                    url=violation.get("externalInfoUrl"),
                    category=ruleset,
                    meta={"priority": violation.get("priority")} if violation.get("priority") else {},
                ),
            )
    return results


def parse_spotbugs(document: ET.Element, context: ParseContext) -> list[Violation]:
    """Parse a FindBugs/SpotBugs ``BugCollection`` report."""

    results: list[Violation] = []
    for bug in _descendants(document, "BugInstance"):
        source_line = _first_child(bug, "SourceLine")
        if source_line is None:
            class_node = _first_child(bug, "Class")
            source_line = _first_child(class_node, "SourceLine") if class_node is not None else None
        sourcepath = source_line.get("sourcepath") if source_line is not None else None
        bug_type = bug.get("type")
        message = _text(_first_child(bug, "LongMessage")) or _text(_first_child(bug, "ShortMessage")) or bug_type
        results.append(
            Violation(
                detector=context.detector,
                rule=bug_type,
                severity=severity_from_priority(bug.get("priority"), high=1, medium=2),
                message=message or "",
                file=context.locate_source(sourcepath),
                line=_optional_int(source_line.get("start")) if source_line is not None else None,
                category=bug.get("category"),
                meta={"rank": bug.get("rank")} if bug.get("rank") else {},
            ),
        )
    return results


def parse_android_lint(document: ET.Element, context: ParseContext) -> list[Violation]:
    """Parse the ``lint-results.xml`` report written by Android Lint."""

    results: list[Violation] = []
    for issue in _descendants(document, "issue"):
        location = _first_child(issue, "location")
        results.append(
            Violation(
                detector=context.detector,
                rule=issue.get("id"),
                severity=map_label(issue.get("severity"), ANDROID_LINT_SEVERITIES, Severity.WARNING),
                message=" ".join((issue.get("message") or issue.get("summary") or "").split()),
                file=context.relative_file(location.get("file")) if location is not None else None,
                line=_optional_int(location.get("line")) if location is not None else None,
                column=_optional_int(location.get("column")) if location is not None else None,
                url=issue.get("url"),
                category=issue.get("category"),
            ),
        )
    return results


def parse_file(path: Path, parser: ReportParser, context: ParseContext) -> list[Violation]:
    """Load ``path`` and translate it with ``parser``."""

    return parser(load_report(path, context.detector), context)


__all__ = [
    "ParseContext",
    "ReportParser",
    "load_report",
    "parse_android_lint",
    "parse_checkstyle",
    "parse_file",
    "parse_pmd",
    "parse_report_text",
    "parse_spotbugs",
    "rule_from_source",
]
