# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, outcomes)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

import typer

from ..errors import Outcome
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import warn as core_warn

_T = TypeVar("_T")


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around the console helpers respecting CLI emoji settings."""

    use_emoji: bool

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji)

    def info(self, message: str) -> None:
        core_info(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)


def build_cli_logger(*, emoji: bool) -> CLILogger:
    """Return a ``CLILogger`` honouring the configured emoji preference."""

    return CLILogger(use_emoji=emoji)


def unwrap_outcome(outcome: Outcome[_T], *, action: str) -> _T:
    """Return the outcome value or raise :class:`CLIError` describing the failure.

    Args:
        outcome: Result returned by a persistence call.
        action: Short description of the attempted action for the message.

    Returns:
        _T: The successful value.

    Raises:
        CLIError: If the outcome carries an error.
    """

    if outcome.error is not None:
        raise CLIError(f"Failed to {action} [{outcome.error.kind.value}]: {outcome.error.message}")
    return outcome.unwrap()


__all__ = ["CLIError", "CLILogger", "build_cli_logger", "unwrap_outcome"]
