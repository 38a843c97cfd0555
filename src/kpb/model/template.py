# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Reusable project deltas plus the post-merge transforms they carry."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .build_file import BuildFile
from .catalog import Catalog
from .entries import FileEntry
from .merge import merge_by_key
from .module import Module

if TYPE_CHECKING:
    from .project import Project


@runtime_checkable
class ProjectTransform(Protocol):
    """Named step applied to a project after the structural template merge."""

    @property
    def name(self) -> str:
        """Return the identifier reported in logs and structure listings."""

    def apply(self, project: Project) -> Project:
        """Return the transformed project without mutating ``project``."""


@dataclass(frozen=True, slots=True)
class Template:
    """Partial project merged into a host project by :meth:`Project.parse`."""

    catalog: Catalog = field(default_factory=Catalog)
    modules: tuple[Module, ...] = ()
    build_files: tuple[BuildFile, ...] = ()
    files: tuple[FileEntry, ...] = ()
    transforms: tuple[ProjectTransform, ...] = ()

    def __post_init__(self) -> None:
        for name in ("modules", "build_files", "files", "transforms"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def combine(self, other: Template) -> Template:
        """Fold two templates, keeping transforms in application order.

        Args:
            other: Template applied after this one.

        Returns:
            Template: Template whose modules and build files are merged by name.
        """

        return Template(
            catalog=self.catalog.combine(other.catalog),
            modules=merge_by_key((*self.modules, *other.modules), key=lambda module: module.name, combine=Module.combine),
            build_files=merge_by_key(
                (*self.build_files, *other.build_files),
                key=lambda build_file: build_file.name,
                combine=BuildFile.combine,
            ),
            files=(*self.files, *other.files),
            transforms=(*self.transforms, *other.transforms),
        )

    def __add__(self, other: Template) -> Template:
        return self.combine(other)


EMPTY_TEMPLATE = Template()


def combine_all(templates: Iterable[Template]) -> Template:
    """Return the left fold of ``templates`` starting from :data:`EMPTY_TEMPLATE`."""

    result = EMPTY_TEMPLATE
    for template in templates:
        result = result.combine(template)
    return result


__all__ = ["EMPTY_TEMPLATE", "ProjectTransform", "Template", "combine_all"]
