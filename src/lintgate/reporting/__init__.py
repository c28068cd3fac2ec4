# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Reporting helpers: the local HTML report, status artifacts and exports."""

from .emitters import (
    STATUS_FILE_NAME,
    StatusFileError,
    load_status,
    status_path,
    write_json_report,
    write_sarif_report,
    write_status,
)
from .formatters import build_status_table, render_status
from .html import render_violations_html
from .writer import (
    CSS_FILE_NAME,
    REPORT_FILE_NAME,
    delete_report,
    render_report,
    report_path,
    stylesheet_path,
    write_report,
)

__all__ = [
    "CSS_FILE_NAME",
    "REPORT_FILE_NAME",
    "STATUS_FILE_NAME",
    "StatusFileError",
    "build_status_table",
    "delete_report",
    "load_status",
    "render_report",
    "render_status",
    "render_violations_html",
    "report_path",
    "status_path",
    "stylesheet_path",
    "write_json_report",
    "write_report",
    "write_sarif_report",
    "write_status",
]
