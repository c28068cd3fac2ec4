# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Catalog of detector variants and construction of the configured detector list."""

from __future__ import annotations

from collections.abc import Callable, Collection
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..config import Config, ConfigError
from ..logging import ConsoleLogger
from ..process_utils import CommandRunner
from ..project import ProjectLayout
from .base import BaseViolationDetector, DetectorKind, ExecutedViolationDetector
from .builtins import (
    AndroidLintViolationDetector,
    CheckstyleViolationDetector,
    DetektViolationDetector,
    FindbugsViolationDetector,
    KtlintViolationDetector,
    PMDViolationDetector,
)

LayoutPredicate = Callable[[ProjectLayout], bool]


def _java(layout: ProjectLayout) -> bool:
    return layout.has_java_sources


def _kotlin(layout: ProjectLayout) -> bool:
    return layout.has_kotlin_sources


def _android(layout: ProjectLayout) -> bool:
    return layout.is_android_project


@dataclass(frozen=True, slots=True)
class DetectorDefinition:
    """Static description of one detector variant."""

    kind: DetectorKind
    factory: type[BaseViolationDetector]
    default_version: str | None
    applies_to: LayoutPredicate

    @property
    def executed(self) -> bool:
        """Return ``True`` when the variant runs its tool before collecting."""

        return issubclass(self.factory, ExecutedViolationDetector)


# Detectors always run in this order; configuration enables or disables entries but cannot reorder them.
DETECTOR_CATALOG: Final[tuple[DetectorDefinition, ...]] = (
    DetectorDefinition(DetectorKind.CHECKSTYLE, CheckstyleViolationDetector, "8.45.1", _java),
    DetectorDefinition(DetectorKind.PMD, PMDViolationDetector, "7.0.0", _java),
    DetectorDefinition(DetectorKind.FINDBUGS, FindbugsViolationDetector, "4.7.3", _java),
    DetectorDefinition(DetectorKind.KTLINT, KtlintViolationDetector, "0.35.0", _kotlin),
    DetectorDefinition(DetectorKind.DETEKT, DetektViolationDetector, "1.0.1", _kotlin),
    DetectorDefinition(DetectorKind.ANDROID_LINT, AndroidLintViolationDetector, None, _android),
)


def definition_for(kind: DetectorKind | str) -> DetectorDefinition:
    """Return the catalog entry for ``kind``.

    Raises:
        ConfigError: If ``kind`` does not name a known detector.
    """

    try:
        resolved = DetectorKind(kind)
    except ValueError as exc:
        known = ", ".join(item.value for item in DetectorKind)
        raise ConfigError(f"unknown detector '{kind}' (expected one of: {known})") from exc
    for definition in DETECTOR_CATALOG:
        if definition.kind is resolved:
            return definition
    raise ConfigError(f"detector '{kind}' has no catalog entry")


def resolve_tool_version(config: Config, kind: DetectorKind) -> str | None:
    """Return the configured tool version override, or the pinned default."""

    override = config.detector_settings(kind.value).tool_version
    return override if override is not None else definition_for(kind).default_version


@dataclass(frozen=True, slots=True)
class DetectorStatus:
    """Why a detector will or will not take part in a pass."""

    definition: DetectorDefinition
    enabled: bool
    applicable: bool
    tool_version: str | None

    @property
    def active(self) -> bool:
        return self.enabled and self.applicable


def describe_detectors(config: Config, layout: ProjectLayout) -> list[DetectorStatus]:
    """Return one :class:`DetectorStatus` per catalog entry, in catalog order."""

    return [
        DetectorStatus(
            definition=definition,
            enabled=config.detector_settings(definition.kind.value).enabled,
            applicable=definition.applies_to(layout),
            tool_version=resolve_tool_version(config, definition.kind),
        )
        for definition in DETECTOR_CATALOG
    ]


def build_detectors(
    config: Config,
    layout: ProjectLayout,
    *,
    logger: ConsoleLogger | None = None,
    runner: CommandRunner | None = None,
    only: Collection[str] = (),
) -> list[BaseViolationDetector]:
    """Instantiate every enabled detector that applies to ``layout``.

    Configuration decides which detectors take part; the run order is fixed
    by :data:`DETECTOR_CATALOG` and cannot be changed through configuration.

    Args:
        config: Gate configuration.
        layout: Inspected project layout.
        logger: Logger handed to each detector.
        runner: Command runner for executed detectors.
        only: Optional detector names restricting the selection.

    Returns:
        list[BaseViolationDetector]: Detectors in :data:`DETECTOR_CATALOG` order.

    Raises:
        ConfigError: If ``only`` names an unknown detector.
    """

    selected = {definition_for(name).kind for name in only}
    work_dir: Path = config.work_directory(layout.root)
    detectors: list[BaseViolationDetector] = []
    for status in describe_detectors(config, layout):
        kind = status.definition.kind
        if selected and kind not in selected:
            continue
        if not status.active:
            continue
        settings = config.detector_settings(kind.value)
        factory = status.definition.factory
        if issubclass(factory, ExecutedViolationDetector):
            detectors.append(
                factory(
                    layout=layout,
                    settings=settings,
                    report_dir=work_dir,
                    tool_version=status.tool_version,
                    logger=logger,
                    runner=runner,
                ),
            )
        else:
            detectors.append(
                factory(
                    layout=layout,
                    settings=settings,
                    report_dir=work_dir,
                    tool_version=status.tool_version,
                    logger=logger,
                ),
            )
    return detectors


__all__ = [
    "DETECTOR_CATALOG",
    "DetectorDefinition",
    "DetectorStatus",
    "build_detectors",
    "definition_for",
    "describe_detectors",
    "resolve_tool_version",
]
