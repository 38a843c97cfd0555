# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing console helpers and library logging setup."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import Final, Literal

from rich.console import Console
from rich.text import Text

PACKAGE_LOGGER: Final[str] = "kpb"


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def _console(color: bool, emoji: bool, tty: bool) -> Console:
    color_system: Literal["auto"] | None = "auto" if color and tty else None
    return Console(
        color_system=color_system,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        highlight=False,
        soft_wrap=True,
    )


def get_console(*, color: bool, emoji: bool) -> Console:
    """Return the shared console for ``color``/``emoji`` on the current stdout.

    Consoles are cached per flag combination and per stdout TTY state.
    """

    return _console(color, emoji, detect_tty())


def emoji(symbol: str, enable: bool) -> str:
    return symbol if enable else ""


def _print_line(msg: str, *, style: str | None, use_emoji: bool, use_color: bool | None = None) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _print_line(f"{emoji('ℹ️ ', use_emoji)}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _print_line(f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stderr`` is at emit time."""

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Stream ``kpb`` library log records to stderr at ``level``.

    Only one handler is ever attached; later calls just adjust the level.

    Args:
        level: Logging level name or number.

    Returns:
        logging.Logger: The configured package logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level if isinstance(level, int) else level.upper())
    if getattr(logger, "_kpb_configured", False):
        return logger
    handler = _StderrHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    setattr(logger, "_kpb_configured", True)
    return logger


__all__ = [
    "configure_logging",
    "detect_tty",
    "fail",
    "get_console",
    "info",
    "ok",
    "warn",
]
