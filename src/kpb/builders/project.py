# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fluent builder producing :class:`~kpb.model.Project` values."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Final, TypeAlias

from ..errors import IntegrityViolation, ReferenceNotFound
from ..model.build_file import BuildFile
from ..model.catalog import combine_catalogs
from ..model.entries import FileEntry
from ..model.merge import merge_by_key
from ..model.module import Module
from ..model.project import Project
from ..model.template import Template
from .build_file import BuildFileBuilder
from .module import ModuleBuilder, module_group

LOGGER = logging.getLogger(__name__)

TemplateFactory: TypeAlias = Callable[[Project], Template]

_GROUP_SEGMENT: Final[re.Pattern[str]] = re.compile(r"^[^\s./\\]+$")


def validate_group(group: str) -> str:
    """Return ``group`` when it is a usable dotted package group.

    Args:
        group: Candidate group such as ``pt.example``.

    Returns:
        str: The validated group.

    Raises:
        IntegrityViolation: If the group is blank, contains whitespace or
            slashes, or has empty dot-separated segments.
    """

    if not group or not group.strip():
        raise IntegrityViolation("Group cannot be blank")
    if not all(_GROUP_SEGMENT.fullmatch(segment) for segment in group.split(".")):
        raise IntegrityViolation(f"Invalid group '{group}'")
    return group


class ProjectBuilder:
    """Accumulate project parts and freeze them with :meth:`build`.

    Template factories registered with :meth:`template` receive the
    pre-merge :meth:`snapshot` of the project.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._group: str | None = None
        self._files: list[FileEntry] = []
        self._build_files: list[BuildFile | BuildFileBuilder] = []
        self._modules: list[Module | ModuleBuilder] = []
        self._factories: list[TemplateFactory] = []

    def group(self, group: str) -> ProjectBuilder:
        self._group = validate_group(group)
        return self

    def file(self, path: str, content: str | None = None) -> ProjectBuilder:
        """Add a root file such as ``README.md``."""

        self._files.append(FileEntry(path=path, content=content))
        return self

    def build_file(self, name: str) -> BuildFileBuilder:
        """Return a child builder for a root build script."""

        builder = BuildFileBuilder(name)
        self._build_files.append(builder)
        return builder

    def add_build_file(self, build_file: BuildFile) -> ProjectBuilder:
        self._build_files.append(build_file)
        return self

    def module(self, name: str, simple_name: str) -> ModuleBuilder:
        """Return a child builder for a module grouped under the current project group."""

        builder = ModuleBuilder(name, simple_name, module_group(self._group, simple_name))
        self._modules.append(builder)
        return builder

    def add_module(self, module: Module) -> ProjectBuilder:
        self._modules.append(module)
        return self

    def remove_module(self, name: str) -> ProjectBuilder:
        """Forget every module registered under ``name``.

        Raises:
            ReferenceNotFound: If no module with that name was registered.
        """

        kept = [module for module in self._modules if module.name != name]
        if len(kept) == len(self._modules):
            raise ReferenceNotFound(f"Module '{name}' not found")
        self._modules = kept
        return self

    def template(self, factory: TemplateFactory) -> ProjectBuilder:
        self._factories.append(factory)
        return self

    def snapshot(self) -> Project:
        """Return the project as declared, before any template is applied."""

        build_files = merge_by_key(
            (item.build() if isinstance(item, BuildFileBuilder) else item for item in self._build_files),
            key=lambda build_file: build_file.name,
            combine=BuildFile.combine,
        )
        modules = merge_by_key(
            (item.build() if isinstance(item, ModuleBuilder) else item for item in self._modules),
            key=lambda module: module.name,
            combine=Module.combine,
        )
        catalog = combine_catalogs(
            [build_file.catalog for build_file in build_files] + [module.catalog for module in modules],
        )
        return Project(
            name=self.name,
            group=self._group,
            catalog=catalog,
            modules=modules,
            build_files=build_files,
            files=tuple(self._files),
        )

    def build(self) -> Project:
        """Apply every registered template to the snapshot and parse the result."""

        snapshot = self.snapshot()
        project = snapshot
        for factory in self._factories:
            project = project.with_template(factory(snapshot))
        LOGGER.debug("Built project '%s' with %d templates", self.name, len(self._factories))
        return project.parse()


__all__ = ["ProjectBuilder", "TemplateFactory", "validate_group"]
