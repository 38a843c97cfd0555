# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Write rendered project trees to disk."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from .errors import PersistenceIntegrity
from .model.entries import FileEntry
from .model.project import Project

LOGGER = logging.getLogger(__name__)


def normalize_entry_path(path: str) -> PurePosixPath:
    """Return ``path`` as a relative POSIX path safe to join under a root.

    Backslashes are treated as separators and a leading slash is dropped.

    Raises:
        PersistenceIntegrity: If the path is empty or climbs out with ``..``.
    """

    relative = PurePosixPath(path.replace("\\", "/").lstrip("/"))
    if not relative.parts or ".." in relative.parts:
        raise PersistenceIntegrity(f"Refusing to write outside the project root: '{path}'")
    return relative


def materialize(entries: Iterable[FileEntry], root: Path) -> list[Path]:
    """Write every entry under ``root``, creating parent directories.

    Absent content is written as an empty file; existing files are overwritten.

    Args:
        entries: Rendered file entries.
        root: Destination directory.

    Returns:
        list[Path]: Paths written, in entry order.
    """

    written: list[Path] = []
    for entry in entries:
        target = root.joinpath(*normalize_entry_path(entry.path).parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(entry.content or "", encoding="utf-8")
        written.append(target)
    LOGGER.debug("Materialized %d files under %s", len(written), root)
    return written


def generate_project(project: Project, root: Path) -> Path:
    """Render a resolved ``project`` and write it to ``root/<project name>``.

    Templates are expected to be resolved already (see
    :meth:`~kpb.model.Project.parse`); nested catalogs are folded in first.

    Returns:
        Path: Directory holding the generated project.
    """

    destination = root / project.name
    LOGGER.info("Generating project '%s' into %s", project.name, destination)
    materialize(project.aggregate_catalogs().render(), destination)
    return destination


__all__ = ["generate_project", "materialize", "normalize_entry_path"]
