# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Save and load projects as a single JSON file or as a checksummed folder.

Every function returns an :class:`~kpb.errors.Outcome` instead of raising
:class:`~kpb.errors.KpbError` subclasses.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import Outcome, PersistenceIntegrity, ReferenceNotFound, attempt
from ..model.project import Project
from ..types import DOCUMENT_NAME, FILES_DIRECTORY
from .codec import decode_project, encode_project
from .content_store import RefReader, RefWriter
from .documents import ProjectDocument, dump_document, parse_document

LOGGER = logging.getLogger(__name__)


def _read_document(path: Path) -> ProjectDocument:
    if not path.is_file():
        raise ReferenceNotFound(f"Project document '{path}' not found")
    try:
        text = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PersistenceIntegrity(f"{path}: project document is not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise PersistenceIntegrity(f"{path}: project document could not be read ({exc})") from exc
    return parse_document(text, context=str(path))


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(f"{path.name}.tmp")
    temp_path.write_text(text, encoding="utf-8")
    temp_path.replace(path)


def _save_inline(project: Project, path: Path) -> Path:
    LOGGER.info("Saving project '%s' to file '%s'", project.name, path)
    _write_text(path, dump_document(encode_project(project)))
    return path


def _load_inline(path: Path, new_name: str | None, new_group: str | None) -> Project:
    LOGGER.info("Loading project from file '%s' (new_name=%s, new_group=%s)", path, new_name, new_group)
    return decode_project(_read_document(path), new_name=new_name, new_group=new_group)


def _save_folder(project: Project, folder: Path) -> Path:
    LOGGER.info("Saving project '%s' to folder '%s'", project.name, folder)
    writer = RefWriter(folder / FILES_DIRECTORY)
    document = encode_project(project, writer=writer)
    writer.prune_stale()
    _write_text(folder / DOCUMENT_NAME, dump_document(document))
    LOGGER.debug("Wrote %d refs under '%s'", writer.count, writer.files_dir)
    return folder


def _load_folder(folder: Path, new_name: str | None, new_group: str | None) -> Project:
    LOGGER.info("Loading project from folder '%s' (new_name=%s, new_group=%s)", folder, new_name, new_group)
    document = _read_document(folder / DOCUMENT_NAME)
    reader = RefReader(folder / FILES_DIRECTORY)
    return decode_project(document, reader=reader, new_name=new_name, new_group=new_group)


def save_inline(project: Project, path: Path) -> Outcome[Path]:
    """Write ``project`` to ``path`` with every body embedded.

    Args:
        project: Project to persist.
        path: Destination JSON file.

    Returns:
        Outcome[Path]: The written path, or the captured error.
    """

    return attempt(_save_inline, project, Path(path))


def load_inline(path: Path, *, new_name: str | None = None, new_group: str | None = None) -> Outcome[Project]:
    """Restore a project from a single JSON file.

    Args:
        path: JSON file produced by :func:`save_inline`.
        new_name: Optional replacement project name.
        new_group: Optional replacement group.

    Returns:
        Outcome[Project]: The restored project, or the captured error.
    """

    return attempt(_load_inline, Path(path), new_name, new_group)


def save_folder(project: Project, folder: Path) -> Outcome[Path]:
    """Write ``project`` to ``folder`` as ``project.json`` plus ``files/f_<n>`` bodies.

    Args:
        project: Project to persist.
        folder: Destination directory, created when missing.

    Returns:
        Outcome[Path]: The folder path, or the captured error.
    """

    return attempt(_save_folder, project, Path(folder))


def load_folder(folder: Path, *, new_name: str | None = None, new_group: str | None = None) -> Outcome[Project]:
    """Restore a project from a folder, verifying every body checksum.

    Returns:
        Outcome[Project]: The restored project; a checksum mismatch or unsafe
        ref yields a ``PERSISTENCE_INTEGRITY`` failure.
    """

    return attempt(_load_folder, Path(folder), new_name, new_group)


def load_any(path: Path, *, new_name: str | None = None, new_group: str | None = None) -> Outcome[Project]:
    """Load ``path`` as a folder when it is a directory, otherwise as a JSON file."""

    target = Path(path)
    if target.is_dir():
        return load_folder(target, new_name=new_name, new_group=new_group)
    return load_inline(target, new_name=new_name, new_group=new_group)


__all__ = ["load_any", "load_folder", "load_inline", "save_folder", "save_inline"]
