# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fluent builder producing :class:`~kpb.model.Module` values."""

from __future__ import annotations

import posixpath

from ..model.build_file import BuildFile
from ..model.catalog import combine_catalogs
from ..model.entries import FileEntry
from ..model.merge import first_wins, merge_by_key
from ..model.module import Module
from ..types import DEFAULT_BUILD_FILE
from .build_file import BuildFileBuilder


def module_group(base: str | None, simple_name: str) -> str:
    """Return the package group of a module derived from the project group."""

    return f"{base}.{simple_name}" if base else simple_name


def is_verbatim_path(path: str) -> bool:
    """Return ``True`` when ``path`` must be stored exactly as given.

    Paths already rooted in ``src/``, absolute paths and Windows style paths
    are not expanded under the module source tree.
    """

    return path.startswith(("src/", "/")) or "\\" in path


class ModuleBuilder:
    """Accumulate module files and build scripts and freeze them with :meth:`build`."""

    def __init__(self, name: str, simple_name: str, group: str) -> None:
        self.name = name
        self.simple_name = simple_name
        self.group = group
        self._files: list[FileEntry] = []
        self._build_files: list[BuildFile | BuildFileBuilder] = []

    @property
    def group_path(self) -> str:
        return self.group.replace(".", "/")

    def _source_path(self, source_set: str, path: str) -> str:
        if is_verbatim_path(path):
            return path
        return posixpath.join("src", source_set, "kotlin", self.group_path, path)

    def file(self, path: str, content: str | None = None) -> ModuleBuilder:
        """Add a file at ``path`` relative to the module directory."""

        self._files.append(FileEntry(path=path, content=content))
        return self

    def source_file(self, path: str, content: str | None = None, *, source_set: str = "main") -> ModuleBuilder:
        """Add a Kotlin source under ``src/<source_set>/kotlin/<group path>/``.

        Args:
            path: File path relative to the package directory.
            content: File body, ``None`` when absent.
            source_set: Gradle source set name.

        Returns:
            ModuleBuilder: This builder.
        """

        return self.file(self._source_path(source_set, path), content)

    def test_file(self, path: str, content: str | None = None) -> ModuleBuilder:
        return self.source_file(path, content, source_set="test")

    def resource_file(self, path: str, content: str | None = None) -> ModuleBuilder:
        """Add a resource under ``src/main/resources/``."""

        full_path = path if is_verbatim_path(path) else posixpath.join("src", "main", "resources", path)
        return self.file(full_path, content)

    def build_file(self, name: str = DEFAULT_BUILD_FILE) -> BuildFileBuilder:
        """Return a child builder for a module build script."""

        builder = BuildFileBuilder(name)
        self._build_files.append(builder)
        return builder

    def add_build_file(self, build_file: BuildFile) -> ModuleBuilder:
        self._build_files.append(build_file)
        return self

    def build(self) -> Module:
        """Freeze the module; a ``build.gradle.kts`` is always present."""

        built = [item.build() if isinstance(item, BuildFileBuilder) else item for item in self._build_files]
        if not any(build_file.name == DEFAULT_BUILD_FILE for build_file in built):
            built.append(BuildFile(name=DEFAULT_BUILD_FILE))
        build_files = merge_by_key(built, key=lambda build_file: build_file.name, combine=BuildFile.combine)
        return Module(
            name=self.name,
            simple_name=self.simple_name,
            group=self.group,
            files=first_wins(self._files, key=lambda entry: entry.path),
            build_files=build_files,
            catalog=combine_catalogs(build_file.catalog for build_file in build_files),
        )


__all__ = ["ModuleBuilder", "is_verbatim_path", "module_group"]
