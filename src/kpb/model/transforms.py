# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Built-in project transforms carried by templates."""

from __future__ import annotations

from dataclasses import dataclass

from .build_file import BuildFile
from .entries import FileEntry
from .merge import distinct, merge_by_key
from .project import Project


@dataclass(frozen=True, slots=True)
class AppendBuildFile:
    """Merge ``build_file`` into the root build files of the project."""

    build_file: BuildFile

    @property
    def name(self) -> str:
        return f"append-build-file:{self.build_file.name}"

    def apply(self, project: Project) -> Project:
        build_files = merge_by_key(
            (*project.build_files, self.build_file),
            key=lambda build_file: build_file.name,
            combine=BuildFile.combine,
        )
        return project.replace(build_files=build_files)


@dataclass(frozen=True, slots=True)
class AppendRootFiles:
    """Add ``files`` to the root files of the project."""

    files: tuple[FileEntry, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))

    @property
    def name(self) -> str:
        return "append-root-files"

    def apply(self, project: Project) -> Project:
        return project.replace(files=distinct((*project.files, *self.files)))


__all__ = ["AppendBuildFile", "AppendRootFiles"]
