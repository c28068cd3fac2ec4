# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""Console construction shared by the logger and the CLI commands."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout is an interactive terminal."""

    isatty = getattr(sys.stdout, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


@lru_cache(maxsize=8)
def _build_console(color: bool, emoji: bool, tty: bool) -> Console:
    return Console(
        color_system="auto" if color else None,
        force_terminal=tty,
        no_color=not color,
        emoji=emoji,
        highlight=False,
        soft_wrap=True,
    )


def console_for(*, color: bool, emoji: bool) -> Console:
    """Return the shared console for the requested output flags.

    Colour is only honoured while stdout is a terminal, so piped gate output
    never carries ANSI escapes.
    """

    tty = detect_tty()
    return _build_console(color and tty, emoji, tty)


__all__ = ["console_for", "detect_tty"]
