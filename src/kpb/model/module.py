# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Gradle sub-project model."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import StructuralMismatch
from .build_file import BuildFile
from .catalog import Catalog, combine_catalogs
from .entries import FileEntry, ModuleRef
from .merge import first_wins, merge_by_key


@dataclass(frozen=True, slots=True)
class Module:
    """Describe a Gradle sub-project with its files, build scripts and catalog.

    Attributes:
        name: Directory name of the module inside the project.
        simple_name: Short name used to derive the package group.
        group: Fully qualified package group such as ``pt.x.lib``.
        files: Source and resource entries, paths relative to the module.
        build_files: Build scripts owned by the module.
        catalog: Catalog entries contributed by the module.
    """

    name: str
    simple_name: str
    group: str
    files: tuple[FileEntry, ...] = ()
    build_files: tuple[BuildFile, ...] = ()
    catalog: Catalog = field(default_factory=Catalog)

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))
        object.__setattr__(self, "build_files", tuple(self.build_files))

    @property
    def identity(self) -> tuple[str, str, str]:
        """Return the ``(name, simple_name, group)`` triple used by combine."""

        return (self.name, self.simple_name, self.group)

    @property
    def group_path(self) -> str:
        """Return the group expressed as a slash separated directory path."""

        return self.group.replace(".", "/")

    @property
    def base_group(self) -> str:
        """Return the group without its trailing simple name segment."""

        if self.group == self.simple_name:
            return ""
        suffix = f".{self.simple_name}"
        if self.group.endswith(suffix):
            return self.group[: -len(suffix)]
        return self.group

    @property
    def ref(self) -> ModuleRef:
        """Return a reference suitable for build file module dependencies."""

        return ModuleRef(name=self.name, simple_name=self.simple_name)

    def combine(self, other: Module) -> Module:
        """Merge two descriptions of the same module.

        Args:
            other: Module merged after this one.

        Returns:
            Module: Merged module; files are kept first-seen by path.

        Raises:
            StructuralMismatch: If name, simple name or group differ.
        """

        if self.identity != other.identity:
            raise StructuralMismatch(
                "Cannot combine modules with different identities: "
                f"{self.identity!r} and {other.identity!r}",
            )
        return Module(
            name=self.name,
            simple_name=self.simple_name,
            group=self.group,
            files=first_wins((*self.files, *other.files), key=lambda entry: entry.path),
            build_files=merge_by_key(
                (*self.build_files, *other.build_files),
                key=lambda build_file: build_file.name,
                combine=BuildFile.combine,
            ),
            catalog=self.catalog.combine(other.catalog),
        )

    def __add__(self, other: Module) -> Module:
        return self.combine(other)

    def remove(self, catalog: Catalog) -> Module:
        """Return a copy whose catalog no longer declares the keys of ``catalog``."""

        return self.replace(catalog=self.catalog.remove(catalog))

    def __sub__(self, catalog: Catalog) -> Module:
        return self.remove(catalog)

    def aggregated_catalog(self) -> Catalog:
        """Return the module catalog folded with every build file catalog."""

        return combine_catalogs((build_file.catalog for build_file in self.build_files), base=self.catalog)

    def replace(
        self,
        *,
        group: str | None = None,
        files: tuple[FileEntry, ...] | None = None,
        build_files: tuple[BuildFile, ...] | None = None,
        catalog: Catalog | None = None,
    ) -> Module:
        """Return a copy with the supplied attributes swapped in."""

        return Module(
            name=self.name,
            simple_name=self.simple_name,
            group=self.group if group is None else group,
            files=self.files if files is None else files,
            build_files=self.build_files if build_files is None else build_files,
            catalog=self.catalog if catalog is None else catalog,
        )

    def render(self) -> list[FileEntry]:
        """Return module files and build scripts located under the module directory."""

        prefix = f"{self.name}/"
        entries = [FileEntry(path=f"{prefix}{entry.path.lstrip('/')}", content=entry.content) for entry in self.files]
        entries.extend(build_file.render(prefix=prefix) for build_file in self.build_files)
        return entries


__all__ = ["Module"]
