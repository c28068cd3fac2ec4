# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Inspect a source tree to decide which detectors apply to it."""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset(
    {
        ".git",
        ".gradle",
        ".idea",
        "node_modules",
        ".venv",
        "build",
        "out",
        "__pycache__",
    },
)
JAVA_SUFFIXES: Final[frozenset[str]] = frozenset({".java"})
KOTLIN_SUFFIXES: Final[frozenset[str]] = frozenset({".kt", ".kts"})
ANDROID_MANIFEST: Final[str] = "AndroidManifest.xml"
_ANDROID_PLUGIN_MARKERS: Final[tuple[str, ...]] = (
    "com.android.application",
    "com.android.library",
)
_GRADLE_BUILD_FILES: Final[tuple[str, ...]] = ("build.gradle", "build.gradle.kts")


def iter_source_files(root: Path, source_dirs: Sequence[Path]) -> Iterator[Path]:
    """Yield files below the configured source directories of ``root``.

    Args:
        root: Project root directory.
        source_dirs: Source directories, relative paths anchored at ``root``.

    Yields:
        Path: Files found under existing source directories, skipping
        :data:`ALWAYS_EXCLUDE_DIRS`.
    """

    for entry in source_dirs:
        base = entry if entry.is_absolute() else root / entry
        if base.is_file():
            yield base
            continue
        if not base.is_dir():
            continue
        for dirpath, dirnames, filenames in os.walk(base):
            dirnames[:] = sorted(name for name in dirnames if name not in ALWAYS_EXCLUDE_DIRS)
            current = Path(dirpath)
            for filename in sorted(filenames):
                yield current / filename


@dataclass(frozen=True, slots=True)
class ProjectLayout:
    """Summary of which languages and build flavours a project uses."""

    root: Path
    source_dirs: tuple[Path, ...]
    has_java_sources: bool
    has_kotlin_sources: bool
    is_android_project: bool

    def existing_source_dirs(self) -> list[Path]:
        """Return absolute source directories that exist on disk."""

        resolved = (path if path.is_absolute() else self.root / path for path in self.source_dirs)
        return [path for path in resolved if path.exists()]


def _is_android_project(root: Path) -> bool:
    for name in _GRADLE_BUILD_FILES:
        build_file = root / name
        if not build_file.is_file():
            continue
        try:
            content = build_file.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            continue
        if any(marker in content for marker in _ANDROID_PLUGIN_MARKERS):
            return True
    return (root / "src" / "main" / ANDROID_MANIFEST).is_file() or (root / ANDROID_MANIFEST).is_file()


def inspect_project(root: Path, source_dirs: Sequence[Path]) -> ProjectLayout:
    """Return the :class:`ProjectLayout` of ``root``.

    Args:
        root: Project root directory.
        source_dirs: Configured source directories.

    Returns:
        ProjectLayout: Language and Android markers for the project.
    """

    has_java = False
    has_kotlin = False
    for path in iter_source_files(root, source_dirs):
        suffix = path.suffix.lower()
        has_java = has_java or suffix in JAVA_SUFFIXES
        has_kotlin = has_kotlin or suffix in KOTLIN_SUFFIXES
        if has_java and has_kotlin:
            break
    return ProjectLayout(
        root=root,
        source_dirs=tuple(source_dirs),
        has_java_sources=has_java,
        has_kotlin_sources=has_kotlin,
        is_android_project=_is_android_project(root),
    )


__all__ = ["ALWAYS_EXCLUDE_DIRS", "ProjectLayout", "inspect_project", "iter_source_files"]
