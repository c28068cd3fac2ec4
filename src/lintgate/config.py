# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Configuration models for the lintgate quality gate."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from string import Formatter
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REPORT_DIR: Final[Path] = Path("build") / "reports" / "lintgate"
DEFAULT_WORK_DIR: Final[Path] = Path("build") / "lintgate"

# ``{sources}`` must be a whole token; it expands to one argument per source directory.
SOURCES_PLACEHOLDER: Final[str] = "{sources}"
COMMAND_PLACEHOLDERS: Final[frozenset[str]] = frozenset({"version", "report", "config", "root"})


def _unknown_placeholders(token: str) -> list[str]:
    if token == SOURCES_PLACEHOLDER:
        return []
    try:
        fields = [field for _, field, _, _ in Formatter().parse(token) if field is not None]
    except ValueError as exc:
        raise ValueError(f"malformed command token {token!r}: {exc}") from exc
    return [field or "{}" for field in fields if field not in COMMAND_PLACEHOLDERS]


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class ToolFailurePolicy(str, Enum):
    """How the aggregator treats a detector whose tool run failed."""

    ABORT = "abort"
    IGNORE = "ignore"


class DetectorSettings(BaseModel):
    """Settings shared by every detector variant."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    enabled: bool = True
    tool_version: str | None = None
    config_file: Path | None = None
    report_file: Path | None = None
    command: list[str] | None = None
    args: list[str] = Field(default_factory=list)
    timeout: float | None = None

    @field_validator("tool_version", mode="before")
    @classmethod
    def _blank_version_is_unset(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("command")
    @classmethod
    def _command_uses_known_placeholders(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        if not value:
            raise ValueError("command must not be empty")
        for token in value:
            unknown = _unknown_placeholders(token)
            if unknown:
                allowed = ", ".join(f"{{{name}}}" for name in sorted(COMMAND_PLACEHOLDERS))
                raise ValueError(
                    f"unknown placeholder {unknown[0]!r} in command token {token!r} "
                    f"(expected {allowed} or {SOURCES_PLACEHOLDER})",
                )
        return value

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout must be positive")
        return value


class PMDSettings(DetectorSettings):
    """PMD specific settings."""

    rulesets: list[str] = Field(
        default_factory=lambda: [
            "category/java/bestpractices.xml",
            "category/java/errorprone.xml",
        ],
    )


class FindbugsSettings(DetectorSettings):
    """SpotBugs (FindBugs) specific settings."""

    classes_dir: Path = Field(default_factory=lambda: Path("build") / "classes")
    exclude_filter: Path | None = None


class AndroidLintSettings(DetectorSettings):
    """Android Lint reads the XML report produced by the Android build."""

    report_file: Path | None = Field(default_factory=lambda: Path("build") / "reports" / "lint-results.xml")


class Config(BaseModel):
    """Top-level gate configuration."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    enabled: bool = True
    fail_on_error: bool = True
    report_dir: Path = Field(default_factory=lambda: DEFAULT_REPORT_DIR)
    work_dir: Path = Field(default_factory=lambda: DEFAULT_WORK_DIR)
    on_tool_failure: ToolFailurePolicy = ToolFailurePolicy.ABORT
    source_dirs: list[Path] = Field(default_factory=lambda: [Path("src")])
    json_report: Path | None = None
    sarif_report: Path | None = None

    checkstyle: DetectorSettings = Field(default_factory=DetectorSettings)
    pmd: PMDSettings = Field(default_factory=PMDSettings)
    findbugs: FindbugsSettings = Field(default_factory=FindbugsSettings)
    ktlint: DetectorSettings = Field(default_factory=DetectorSettings)
    detekt: DetectorSettings = Field(default_factory=DetectorSettings)
    android_lint: AndroidLintSettings = Field(default_factory=AndroidLintSettings)

    def detector_settings(self, name: str) -> DetectorSettings:
        """Return the settings section for detector ``name``.

        Raises:
            ConfigError: If ``name`` does not name a detector section.
        """

        settings = getattr(self, name, None)
        if not isinstance(settings, DetectorSettings):
            raise ConfigError(f"unknown detector '{name}'")
        return settings

    def resolve_path(self, root: Path, path: Path) -> Path:
        """Return ``path`` anchored at ``root`` when it is relative."""

        return path if path.is_absolute() else root / path

    def report_directory(self, root: Path) -> Path:
        """Return the absolute report directory for ``root``."""

        return self.resolve_path(root, self.report_dir)

    def work_directory(self, root: Path) -> Path:
        """Return the absolute directory receiving intermediate tool reports."""

        return self.resolve_path(root, self.work_dir)


__all__ = [
    "AndroidLintSettings",
    "COMMAND_PLACEHOLDERS",
    "Config",
    "ConfigError",
    "DEFAULT_REPORT_DIR",
    "DEFAULT_WORK_DIR",
    "DetectorSettings",
    "FindbugsSettings",
    "PMDSettings",
    "SOURCES_PLACEHOLDER",
    "ToolFailurePolicy",
]
