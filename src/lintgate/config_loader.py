# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Locate and load lintgate configuration from TOML documents."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .config import Config, ConfigError

CONFIG_FILE_NAME: Final[str] = "lintgate.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintgate"


@dataclass(frozen=True, slots=True)
class LoadedConfig:
    """Configuration together with a description of where it came from."""

    config: Config
    source: str


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"{path}: unable to read configuration: {exc}") from exc


def _pyproject_section(path: Path) -> Mapping[str, Any] | None:
    document = _read_toml(path)
    tool = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool, Mapping):
        return None
    section = tool.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return None
    if not isinstance(section, Mapping):
        raise ConfigError(f"{path}: [tool.{PYPROJECT_SECTION_KEY}] must be a table")
    return section


def config_from_mapping(data: Mapping[str, Any], *, source: str = "<mapping>") -> Config:
    """Validate ``data`` into a :class:`Config`.

    Args:
        data: Raw configuration mapping (one TOML table).
        source: Description used in error messages.

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigError: If validation fails.
    """

    try:
        return Config.model_validate(dict(data))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigError(f"{source}: {problems}") from exc


def load_config(root: Path, config_path: Path | None = None) -> LoadedConfig:
    """Load configuration for the project at ``root``.

    Sources are consulted in order and the first match wins: an explicit
    ``config_path``, ``lintgate.toml`` in ``root``, the ``[tool.lintgate]``
    table of ``pyproject.toml``, then built-in defaults.

    Args:
        root: Project root directory.
        config_path: Optional explicit configuration file.

    Returns:
        LoadedConfig: Validated configuration and its source description.

    Raises:
        ConfigError: If a configuration file is missing, unreadable or invalid.
    """

    if config_path is not None:
        candidate = config_path if config_path.is_absolute() else root / config_path
        if not candidate.is_file():
            raise ConfigError(f"configuration file not found: {candidate}")
        if candidate.name == PYPROJECT_FILE_NAME:
            section = _pyproject_section(candidate) or {}
        else:
            section = _read_toml(candidate)
        return LoadedConfig(config_from_mapping(section, source=str(candidate)), str(candidate))

    dedicated = root / CONFIG_FILE_NAME
    if dedicated.is_file():
        return LoadedConfig(config_from_mapping(_read_toml(dedicated), source=str(dedicated)), str(dedicated))

    pyproject = root / PYPROJECT_FILE_NAME
    if pyproject.is_file():
        section = _pyproject_section(pyproject)
        if section is not None:
            source = f"{pyproject} [tool.{PYPROJECT_SECTION_KEY}]"
            return LoadedConfig(config_from_mapping(section, source=source), source)

    return LoadedConfig(Config(), "built-in defaults")


__all__ = ["CONFIG_FILE_NAME", "LoadedConfig", "config_from_mapping", "load_config"]
