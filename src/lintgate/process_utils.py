# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Safe wrappers around ``subprocess`` execution of analysis tools."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; commands are argument lists and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Protocol


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Execution options applied to a single tool invocation."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None


class CommandRunner(Protocol):
    """Callable that executes a command and returns the completed process."""

    def __call__(self, args: Sequence[str], *, options: CommandOptions) -> CompletedProcess[str]:
        """Run ``args`` with ``options`` and capture text output."""
        ...


def find_executable(cmd: str) -> str | None:
    """Return the fully-qualified path to ``cmd`` if it exists on ``PATH``.

    Args:
        cmd: Executable name to resolve.

    Returns:
        str | None: Absolute path to the executable, or ``None`` when not found.
    """

    return shutil.which(cmd)


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` against ``PATH``.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = find_executable(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions) -> CompletedProcess[str]:
    """Execute ``args`` capturing text output without raising on exit status.

    The exit status is never checked; callers decide which codes mean the
    tool finished its analysis.

    Args:
        args: Command and argument sequence to execute.
        options: Working directory, environment and timeout settings.

    Returns:
        CompletedProcess[str]: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        subprocess.TimeoutExpired: If ``options.timeout`` elapses first.
    """

    normalized = _normalize_args(args)
    return subprocess.run(  # nosec B603 - argument list built from tool configuration
        normalized,
        cwd=str(options.cwd) if options.cwd is not None else None,
        env=dict(options.env) if options.env is not None else None,
        check=False,
        capture_output=True,
        text=True,
        timeout=options.timeout,
        stdin=subprocess.DEVNULL,
    )


__all__ = [
    "CommandOptions",
    "CommandRunner",
    "find_executable",
    "run_command",
]
