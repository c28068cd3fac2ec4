# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Render violation sets into the HTML body of the local report."""

from __future__ import annotations

from collections.abc import Iterable
from html import escape

from ..models import Violation, sorted_violations

PROJECT_LEVEL_HEADING = "Project"


def _group_by_file(violations: Iterable[Violation]) -> dict[str, list[Violation]]:
    groups: dict[str, list[Violation]] = {}
    for violation in sorted_violations(violations):
        groups.setdefault(violation.file or "", []).append(violation)
    return groups


def _rule_markup(violation: Violation) -> str:
    if not violation.rule:
        return ""
    rule = escape(violation.rule)
    if violation.url:
        return f'<a href="{escape(violation.url, quote=True)}">{rule}</a>'
    return f"<code>{rule}</code>"


def _item_markup(violation: Violation) -> str:
    parts = [f"<b>{escape(violation.detector)}</b>"]
    rule = _rule_markup(violation)
    if rule:
        parts.append(rule)
    if violation.line is not None:
        parts.append(f"line {violation.line}")
    parts.append(f"<i>{escape(violation.severity.value)}</i>")
    header = " &middot; ".join(parts)
    return f"<li>{header}<br>{escape(violation.message)}</li>"


def render_violations_html(violations: Iterable[Violation]) -> str:
    """Return an HTML fragment listing ``violations`` grouped by file.

    Files appear in path order with project-level findings first; entries
    inside a file follow :meth:`Violation.sort_key`. The fragment is a pure
    function of the input set, so identical sets render identical text.
    """

    groups = _group_by_file(violations)
    total = sum(len(items) for items in groups.values())
    lines = [f"<h1>{total} violation{'s' if total != 1 else ''} found</h1>"]
    for file, items in groups.items():
        heading = escape(file) if file else PROJECT_LEVEL_HEADING
        lines.append(f"<h2>{heading}</h2>")
        lines.append("<ul>")
        lines.extend(_item_markup(item) for item in items)
        lines.append("</ul>")
    return "".join(lines)


__all__ = ["PROJECT_LEVEL_HEADING", "render_violations_html"]
