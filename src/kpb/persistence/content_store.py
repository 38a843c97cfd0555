# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Checksummed body storage for the folder form of a saved project."""

from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path
from typing import Final

from ..errors import ErrorKind, PersistenceIntegrity
from ..types import REF_PREFIX

LOGGER = logging.getLogger(__name__)

REF_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_.-]+$")
_GENERATED_REF: Final[re.Pattern[str]] = re.compile(rf"^{REF_PREFIX}(\d+)$")


def compute_checksum(content: str | bytes) -> str:
    """Return the hex SHA-256 digest of ``content`` (UTF-8 for text)."""

    payload = content.encode("utf-8") if isinstance(content, str) else content
    return hashlib.sha256(payload).hexdigest()


def validate_ref(ref: str) -> str:
    """Return ``ref`` when it names a plain file inside the body directory.

    Raises:
        PersistenceIntegrity: If ``ref`` contains path separators or other
            characters outside ``[A-Za-z0-9_.-]``, or is ``.``/``..``.
    """

    if not REF_PATTERN.fullmatch(ref) or ref in {".", ".."}:
        raise PersistenceIntegrity(f"Invalid ref path '{ref}'")
    return ref


class RefWriter:
    """Write bodies as ``f_<n>`` files, numbering them in call order.

    Identical bodies are written once per call; there is no deduplication.
    """

    def __init__(self, files_dir: Path) -> None:
        self.files_dir = files_dir
        self._counter = 0

    @property
    def count(self) -> int:
        """Return the number of refs written so far."""

        return self._counter

    def write(self, content: str | None) -> tuple[str | None, str | None]:
        """Store ``content`` and return its ``(ref, checksum)`` pair.

        Args:
            content: Body to store; ``None`` is recorded without a ref.

        Returns:
            tuple[str | None, str | None]: Ref name and checksum, both ``None``
            when the body is absent.
        """

        if content is None:
            return None, None
        ref = f"{REF_PREFIX}{self._counter}"
        self._counter += 1
        payload = content.encode("utf-8")
        self.files_dir.mkdir(parents=True, exist_ok=True)
        target = self.files_dir / ref
        temp_path = target.with_suffix(".tmp")
        temp_path.write_bytes(payload)
        temp_path.replace(target)
        return ref, compute_checksum(payload)

    def prune_stale(self) -> list[Path]:
        """Delete generated refs left over from an earlier, larger save.

        Returns:
            list[Path]: Paths that were removed.
        """

        removed: list[Path] = []
        if not self.files_dir.is_dir():
            return removed
        for candidate in sorted(self.files_dir.iterdir()):
            match = _GENERATED_REF.match(candidate.name)
            if match is None or int(match.group(1)) < self._counter or not candidate.is_file():
                continue
            candidate.unlink()
            removed.append(candidate)
        if removed:
            LOGGER.debug("Pruned %d stale refs from %s", len(removed), self.files_dir)
        return removed


class RefReader:
    """Resolve file bodies from inline content or checksummed refs."""

    def __init__(self, files_dir: Path | None) -> None:
        self.files_dir = files_dir

    def resolve(
        self,
        *,
        ref: str | None,
        checksum: str | None,
        inline: str | None,
        context: str,
    ) -> str | None:
        """Return the body described by a persisted file reference.

        Inline content always wins. Otherwise the ref is validated before any
        filesystem access, read, and compared against ``checksum``.

        Args:
            ref: Body file name under the ``files`` directory.
            checksum: Expected SHA-256 hex digest of the body.
            inline: Inline body, if present.
            context: Owner path used in log and error messages.

        Returns:
            str | None: Resolved body, or ``None`` when absent or missing.

        Raises:
            PersistenceIntegrity: If the ref is unsafe, the body is not UTF-8,
                or its checksum differs from the recorded one.
        """

        if inline is not None:
            return inline
        if ref is None:
            return None
        if self.files_dir is None:
            LOGGER.warning(
                "[%s] Referenced body '%s' for '%s' has no files directory to resolve from",
                ErrorKind.CONTENT_NOT_FOUND.value,
                ref,
                context,
            )
            return None
        target = self.files_dir / validate_ref(ref)
        if not target.is_file():
            LOGGER.warning(
                "[%s] Referenced body '%s' for '%s' not found in %s",
                ErrorKind.CONTENT_NOT_FOUND.value,
                ref,
                context,
                self.files_dir,
            )
            return None
        payload = target.read_bytes()
        if checksum is not None:
            actual = compute_checksum(payload)
            if actual != checksum:
                LOGGER.warning("Checksum mismatch for ref '%s': expected %s, got %s", ref, checksum, actual)
                raise PersistenceIntegrity(f"Checksum mismatch for ref '{ref}' ({context})")
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PersistenceIntegrity(f"Ref '{ref}' ({context}) is not valid UTF-8") from exc


__all__ = ["REF_PATTERN", "RefReader", "RefWriter", "compute_checksum", "validate_ref"]
