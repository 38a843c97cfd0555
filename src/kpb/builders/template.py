# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fluent builder producing :class:`~kpb.model.Template` values."""

from __future__ import annotations

from ..model.build_file import BuildFile
from ..model.catalog import combine_catalogs
from ..model.entries import FileEntry
from ..model.merge import merge_by_key
from ..model.module import Module
from ..model.project import Project
from ..model.template import ProjectTransform, Template
from .build_file import BuildFileBuilder
from .module import ModuleBuilder, module_group


class TemplateBuilder:
    """Collect the delta a template contributes to ``project``."""

    def __init__(self, project: Project) -> None:
        self.project = project
        self._files: list[FileEntry] = []
        self._build_files: list[BuildFile | BuildFileBuilder] = []
        self._modules: list[Module | ModuleBuilder] = []
        self._transforms: list[ProjectTransform] = []

    def file(self, path: str, content: str | None = None) -> TemplateBuilder:
        self._files.append(FileEntry(path=path, content=content))
        return self

    def build_file(self, name: str) -> BuildFileBuilder:
        builder = BuildFileBuilder(name)
        self._build_files.append(builder)
        return builder

    def add_build_file(self, build_file: BuildFile) -> TemplateBuilder:
        self._build_files.append(build_file)
        return self

    def module(self, name: str, simple_name: str) -> ModuleBuilder:
        """Return a builder patching module ``name`` under the project group."""

        builder = ModuleBuilder(name, simple_name, module_group(self.project.group, simple_name))
        self._modules.append(builder)
        return builder

    def add_module(self, module: Module) -> TemplateBuilder:
        self._modules.append(module)
        return self

    def transform(self, transform: ProjectTransform) -> TemplateBuilder:
        """Register a step that runs after the structural merge."""

        self._transforms.append(transform)
        return self

    def build(self) -> Template:
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
        return Template(
            catalog=catalog,
            modules=modules,
            build_files=build_files,
            files=tuple(self._files),
            transforms=tuple(self._transforms),
        )


__all__ = ["TemplateBuilder"]
