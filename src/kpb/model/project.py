# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Top-level project model and the template application pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..errors import ReferenceNotFound
from .build_file import BuildFile
from .catalog import Catalog, combine_catalogs
from .entries import FileEntry
from .merge import distinct, merge_by_key, remove_by_key
from .module import Module
from .template import EMPTY_TEMPLATE, Template, combine_all

LOGGER = logging.getLogger(__name__)

_UNSET = object()


def _merge_modules(*groups: tuple[Module, ...]) -> tuple[Module, ...]:
    return merge_by_key(
        (module for group in groups for module in group),
        key=lambda module: module.name,
        combine=Module.combine,
    )


def _merge_build_files(*groups: tuple[BuildFile, ...]) -> tuple[BuildFile, ...]:
    return merge_by_key(
        (build_file for group in groups for build_file in group),
        key=lambda build_file: build_file.name,
        combine=BuildFile.combine,
    )


@dataclass(frozen=True, slots=True)
class Project:
    """Describe a complete multi-module Gradle project.

    ``templates`` records the templates applied so far. It is excluded from
    equality so a restored project compares equal to the one that was saved.
    """

    name: str
    group: str | None = None
    catalog: Catalog = field(default_factory=Catalog)
    modules: tuple[Module, ...] = ()
    build_files: tuple[BuildFile, ...] = ()
    files: tuple[FileEntry, ...] = ()
    templates: tuple[Template, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        for name in ("modules", "build_files", "files", "templates"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def module(self, name: str) -> Module:
        """Return the module called ``name``.

        Raises:
            ReferenceNotFound: If no module has that name.
        """

        for module in self.modules:
            if module.name == name:
                return module
        raise ReferenceNotFound(f"Module '{name}' not found")

    def has_module(self, name: str) -> bool:
        """Return ``True`` when a module called ``name`` exists."""

        return any(module.name == name for module in self.modules)

    def replace(
        self,
        *,
        name: str | None = None,
        group: str | None | object = _UNSET,
        catalog: Catalog | None = None,
        modules: tuple[Module, ...] | None = None,
        build_files: tuple[BuildFile, ...] | None = None,
        files: tuple[FileEntry, ...] | None = None,
        templates: tuple[Template, ...] | None = None,
    ) -> Project:
        """Return a copy with the supplied attributes swapped in."""

        return Project(
            name=self.name if name is None else name,
            group=self.group if group is _UNSET else group,  # type: ignore[arg-type]
            catalog=self.catalog if catalog is None else catalog,
            modules=self.modules if modules is None else modules,
            build_files=self.build_files if build_files is None else build_files,
            files=self.files if files is None else files,
            templates=self.templates if templates is None else templates,
        )

    def combine(self, other: Project) -> Project:
        """Merge ``other`` into this project.

        Args:
            other: Project merged after this one.

        Returns:
            Project: Merged project keeping this name; the left group wins when set.
        """

        LOGGER.debug("Combining project '%s' with '%s'", self.name, other.name)
        return Project(
            name=self.name,
            group=self.group if self.group is not None else other.group,
            catalog=self.catalog.combine(other.catalog),
            modules=_merge_modules(self.modules, other.modules),
            build_files=_merge_build_files(self.build_files, other.build_files),
            files=distinct((*self.files, *other.files)),
            templates=(*self.templates, *other.templates),
        )

    def __add__(self, other: Project) -> Project:
        return self.combine(other)

    def merge_delta(self, template: Template) -> Project:
        """Merge the structural part of ``template`` without recording it."""

        return self.replace(
            catalog=self.catalog.combine(template.catalog),
            modules=_merge_modules(self.modules, template.modules),
            build_files=_merge_build_files(self.build_files, template.build_files),
            files=distinct((*self.files, *template.files)),
        )

    def with_template(self, template: Template) -> Project:
        """Merge ``template`` structurally and record it for :meth:`parse`."""

        LOGGER.debug("Applying template with %d transforms to '%s'", len(template.transforms), self.name)
        merged = self.merge_delta(template)
        return merged.replace(templates=(*self.templates, template))

    def parse(self) -> Project:
        """Resolve the recorded templates into a final project.

        The templates are folded into one delta, merged into the project, then
        each transform runs in order. Catalogs of every module and build file
        are finally aggregated into the project catalog.

        Returns:
            Project: Resolved project still carrying its ``templates``.
        """

        folded = combine_all(self.templates) if self.templates else EMPTY_TEMPLATE
        result = self.merge_delta(folded)
        for transform in folded.transforms:
            LOGGER.debug("Running transform '%s'", transform.name)
            result = transform.apply(result)
        return result.aggregate_catalogs()

    def aggregate_catalogs(self) -> Project:
        """Return a copy whose catalog includes every nested catalog."""

        nested = [module.aggregated_catalog() for module in self.modules]
        nested.extend(build_file.catalog for build_file in self.build_files)
        return self.replace(catalog=combine_catalogs(nested, base=self.catalog))

    def remove(self, other: Project) -> Project:
        """Return this project without the modules, build files, files and catalog keys of ``other``."""

        return self.replace(
            catalog=self.catalog.remove(other.catalog),
            modules=remove_by_key(self.modules, {module.name for module in other.modules}, key=lambda m: m.name),
            build_files=remove_by_key(
                self.build_files,
                {build_file.name for build_file in other.build_files},
                key=lambda build_file: build_file.name,
            ),
            files=remove_by_key(self.files, {entry.path for entry in other.files}, key=lambda entry: entry.path),
        )

    def __sub__(self, other: Project) -> Project:
        return self.remove(other)

    def remove_module(self, name: str) -> Project:
        """Drop module ``name`` together with references and catalog entries only it used.

        Args:
            name: Name of the module to remove.

        Returns:
            Project: Project without the module.

        Raises:
            ReferenceNotFound: If no module has that name.
        """

        removed = self.module(name)
        modules = tuple(
            module.replace(build_files=tuple(build_file.without_module(name) for build_file in module.build_files))
            for module in self.modules
            if module.name != name
        )
        build_files = tuple(build_file.without_module(name) for build_file in self.build_files)
        remaining = combine_catalogs(
            [module.aggregated_catalog() for module in modules] + [build_file.catalog for build_file in build_files],
        )
        exclusive = removed.aggregated_catalog().remove(remaining)
        LOGGER.debug("Removing module '%s' and %d exclusive catalog entries", name, exclusive.size)
        return self.replace(catalog=self.catalog.remove(exclusive), modules=modules, build_files=build_files)

    def render(self) -> list[FileEntry]:
        """Return every file entry that makes up the generated project tree."""

        entries = [build_file.render() for build_file in self.build_files]
        entries.extend(self.files)
        for module in self.modules:
            entries.extend(module.render())
        entries.append(self.catalog.render())
        return entries

    def structure(self) -> list[str]:
        """Return a human-readable listing of the project tree."""

        lines = [f"- Project: {self.name}" + (f" ({self.group})" if self.group else "")]
        lines.extend(f"  - Build File: {build_file.name}" for build_file in self.build_files)
        lines.extend(f"  - File: {entry.path}" for entry in self.files)
        for module in self.modules:
            lines.append(f"  - Module: {module.name} [{module.group}]")
            lines.extend(f"    - Build File: {build_file.name}" for build_file in module.build_files)
            lines.extend(f"    - File: {entry.path}" for entry in module.files)
        return lines


__all__ = ["Project"]
