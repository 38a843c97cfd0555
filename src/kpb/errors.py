# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Closed set of error kinds raised by project composition and persistence."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Generic, ParamSpec, TypeVar, cast

_P = ParamSpec("_P")
_T = TypeVar("_T")


class ErrorKind(str, Enum):
    """Enumerate every failure category surfaced by the core."""

    INTEGRITY_VIOLATION = "integrity-violation"
    STRUCTURAL_MISMATCH = "structural-mismatch"
    REFERENCE_NOT_FOUND = "reference-not-found"
    PERSISTENCE_INTEGRITY = "persistence-integrity"
    CONTENT_NOT_FOUND = "content-not-found"


class KpbError(RuntimeError):
    """Base class for every error raised by the kpb core."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str) -> None:
        """Create the error with a human-readable ``message``."""

        super().__init__(message)
        self.message = message


class IntegrityViolation(KpbError):
    """Raised when a catalog or build file breaks a construction invariant."""

    kind = ErrorKind.INTEGRITY_VIOLATION


class StructuralMismatch(KpbError):
    """Raised when combining entities whose identity keys differ."""

    kind = ErrorKind.STRUCTURAL_MISMATCH


class ReferenceNotFound(KpbError):
    """Raised when a module or document referenced by name does not exist."""

    kind = ErrorKind.REFERENCE_NOT_FOUND


class PersistenceIntegrity(KpbError):
    """Raised when a persisted document is malformed, tampered or unsafe."""

    kind = ErrorKind.PERSISTENCE_INTEGRITY


@dataclass(frozen=True, slots=True)
class Outcome(Generic[_T]):
    """Result of an operation that either produced ``value`` or failed with ``error``."""

    value: _T | None = None
    error: KpbError | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the operation succeeded."""

        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        """Return the error kind when the operation failed."""

        return None if self.error is None else self.error.kind

    def unwrap(self) -> _T:
        """Return the produced value or raise the captured error.

        Returns:
            _T: Value produced by the successful operation.

        Raises:
            KpbError: The error captured when the operation failed.
        """

        if self.error is not None:
            raise self.error
        return cast(_T, self.value)

    @classmethod
    def success(cls, value: _T) -> Outcome[_T]:
        """Return a successful outcome wrapping ``value``."""

        return cls(value=value)

    @classmethod
    def failure(cls, error: KpbError) -> Outcome[_T]:
        """Return a failed outcome carrying ``error``."""

        return cls(error=error)


def attempt(func: Callable[_P, _T], *args: _P.args, **kwargs: _P.kwargs) -> Outcome[_T]:
    """Invoke ``func`` and capture any :class:`KpbError` as a failed outcome.

    Args:
        func: Callable performing the operation.
        *args: Positional arguments forwarded to ``func``.
        **kwargs: Keyword arguments forwarded to ``func``.

    Returns:
        Outcome[_T]: Successful outcome with the return value, or a failed
        outcome carrying the raised error.
    """

    try:
        return Outcome.success(func(*args, **kwargs))
    except KpbError as exc:
        return Outcome.failure(exc)


__all__ = [
    "ErrorKind",
    "IntegrityViolation",
    "KpbError",
    "Outcome",
    "PersistenceIntegrity",
    "ReferenceNotFound",
    "StructuralMismatch",
    "attempt",
]
