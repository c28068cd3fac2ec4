# SPDX-License-Identifier: MIT
# Copyright (c) 2025 The lintgate Authors
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

from .console import console_for, detect_tty


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style name to apply when colour output is active.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = console_for(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    prefix = emoji("ℹ️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    prefix = emoji("✅ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    prefix = emoji("⚠️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    prefix = emoji("❌ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


@dataclass(slots=True)
class ConsoleLogger:
    """Adapter binding the module helpers to one set of presentation flags.

    Engine components receive an instance of this class instead of calling the
    module functions directly so tests can substitute a recording logger.
    """

    use_emoji: bool = True
    use_color: bool | None = None
    debug_enabled: bool = False

    def info(self, message: str) -> None:
        info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, message: str) -> None:
        fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def lifecycle(self, message: str) -> None:
        """Emit a plain progress line without any emoji prefix."""

        _print_line(message, style=None, use_emoji=self.use_emoji, use_color=self.use_color)

    def debug(self, message: str) -> None:
        """Emit ``message`` only when debug output is enabled."""

        if self.debug_enabled:
            _print_line(f"[debug] {message}", style="dim", use_emoji=False, use_color=self.use_color)


def build_logger(*, emoji: bool = True, color: bool | None = None, debug: bool = False) -> ConsoleLogger:
    """Return a :class:`ConsoleLogger` configured for the caller's preferences."""

    return ConsoleLogger(use_emoji=emoji, use_color=color, debug_enabled=debug)


__all__ = [
    "ConsoleLogger",
    "build_logger",
    "emoji",
    "fail",
    "info",
    "ok",
    "warn",
]
