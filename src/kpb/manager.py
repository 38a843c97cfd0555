# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""High-level facade mutating an in-memory project through the model algebra."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from textwrap import dedent
from typing import Final

from .builders.module import ModuleBuilder, module_group
from .builders.project import validate_group
from .errors import IntegrityViolation
from .filesystem import generate_project
from .model.catalog import Catalog
from .model.entries import FileEntry, Version
from .model.module import Module
from .model.project import Project
from .model.template import Template
from .persistence import api
from .templates import (
    DEFAULT_KOTLIN_VERSION,
    app_template,
    artifacts_workflow_template,
    cli_template,
    compose_template,
    coroutines_template,
    default_template,
    docs_workflow_template,
    dokka_template,
    serialization_template,
    tests_workflow_template,
    unit_test_template,
)

LOGGER = logging.getLogger(__name__)

README_PATH: Final[str] = "README.md"
DEFAULT_README: Final[str] = dedent(
    """\
    # KPB Project

    made using KPB - Kotlin Project Builder
    """,
)

ModuleTemplateFactory = Callable[[Project, Sequence[Module]], Template]


class ProjectManager:
    """Hold the current :class:`Project` and replace it on every operation.

    Each mutating method returns ``self`` so calls can be chained. Errors from
    the model surface unchanged as :class:`~kpb.errors.KpbError` subclasses.
    """

    def __init__(self, project: Project) -> None:
        self.project = project

    @classmethod
    def create(cls, name: str) -> ProjectManager:
        LOGGER.info("Creating new project '%s'", name)
        return cls(Project(name=name))

    @classmethod
    def from_project(cls, project: Project) -> ProjectManager:
        LOGGER.info("Managing existing project '%s'", project.name)
        return cls(project)

    # Project level

    def set_group(self, group: str) -> ProjectManager:
        """Set the project group and re-derive every module group from it.

        Raises:
            IntegrityViolation: If ``group`` is not a valid dotted group.
        """

        validate_group(group)
        LOGGER.info("Setting project group to '%s'", group)
        modules = tuple(module.replace(group=module_group(group, module.simple_name)) for module in self.project.modules)
        self.project = self.project.replace(group=group, modules=modules)
        return self

    def add_readme(self, content: str = DEFAULT_README) -> ProjectManager:
        """Add or replace the root ``README.md``."""

        LOGGER.info("Adding README to project '%s'", self.project.name)
        readme = FileEntry(path=README_PATH, content=content)
        without = self.project.remove(Project(name=self.project.name, files=(readme,)))
        self.project = without.combine(Project(name=self.project.name, files=(readme,)))
        return self

    def apply_version_catalog(self, catalog: Catalog) -> ProjectManager:
        LOGGER.info("Applying version catalog with %d entries", catalog.size)
        self.project = self.project.replace(catalog=self.project.catalog.combine(catalog))
        return self

    def structure(self) -> list[str]:
        return self.project.structure()

    def generate(self, root: Path) -> Path:
        """Render and write the project under ``root/<name>``."""

        return generate_project(self.project, Path(root))

    # Module level

    def add_module(self, name: str, simple_name: str) -> ProjectManager:
        """Add an empty module grouped under the project group.

        Raises:
            IntegrityViolation: If the project has no group, or a module with
                the same name or simple name already exists.
        """

        LOGGER.info("Adding module '%s' (simple: '%s')", name, simple_name)
        if self.project.group is None:
            raise IntegrityViolation("Set the project group before adding modules")
        for module in self.project.modules:
            if module.name == name:
                raise IntegrityViolation(f"Module '{name}' already exists")
            if module.simple_name == simple_name:
                raise IntegrityViolation(f"Module simple name '{simple_name}' already exists")
        module = ModuleBuilder(name, simple_name, module_group(self.project.group, simple_name)).build()
        self.project = self.project.combine(Project(name=self.project.name, modules=(module,)))
        return self

    def remove_module(self, name: str) -> ProjectManager:
        """Remove module ``name``; raises ``ReferenceNotFound`` when unknown."""

        LOGGER.info("Removing module '%s'", name)
        self.project = self.project.remove_module(name)
        return self

    def _patch_module(self, name: str, configure: Callable[[ModuleBuilder], object]) -> ProjectManager:
        module = self.project.module(name)
        builder = ModuleBuilder(module.name, module.simple_name, module.group)
        configure(builder)
        patch = builder.build()
        self.project = self.project.combine(Project(name=self.project.name, catalog=patch.catalog, modules=(patch,)))
        return self

    def add_source_file(self, module: str, path: str, content: str | None) -> ProjectManager:
        """Add a Kotlin source below the module package directory."""

        LOGGER.debug("Adding source file '%s' to module '%s'", path, module)
        self._patch_module(module, lambda builder: builder.source_file(path, content))
        LOGGER.info("Added source file '%s' to module '%s'", path, module)
        return self

    def add_resource_file(self, module: str, path: str, content: str | None) -> ProjectManager:
        LOGGER.debug("Adding resource file '%s' to module '%s'", path, module)
        self._patch_module(module, lambda builder: builder.resource_file(path, content))
        LOGGER.info("Added resource file '%s' to module '%s'", path, module)
        return self

    def add_library(
        self,
        module: str,
        alias: str,
        library_id: str,
        version_name: str,
        version_value: str,
        *,
        is_test: bool = False,
    ) -> ProjectManager:
        """Declare a catalog library on the module build script.

        Args:
            module: Target module name.
            alias: Catalog alias of the library.
            library_id: Maven ``group:artifact`` coordinate.
            version_name: Name of the catalog version entry.
            version_value: Version string.
            is_test: Declare the dependency as ``testImplementation``.

        Returns:
            ProjectManager: This manager.
        """

        version = Version(name=version_name, value=version_value)
        self._patch_module(
            module,
            lambda builder: builder.build_file().library(alias, library_id, version, is_test=is_test),
        )
        LOGGER.info("Added library '%s' to module '%s'", alias, module)
        return self

    def add_plugin(
        self,
        module: str,
        alias: str,
        plugin_id: str,
        version_name: str,
        version_value: str,
        *,
        apply: bool = True,
    ) -> ProjectManager:
        version = Version(name=version_name, value=version_value)
        self._patch_module(module, lambda builder: builder.build_file().plugin(alias, plugin_id, version, apply=apply))
        LOGGER.info("Added plugin '%s' to module '%s'", alias, module)
        return self

    def add_dependency(self, module: str, definition: str) -> ProjectManager:
        self._patch_module(module, lambda builder: builder.build_file().dependency(definition))
        LOGGER.info("Added dependency to module '%s'", module)
        return self

    def add_module_dependency(self, module: str, depends_on: str) -> ProjectManager:
        """Make ``module`` depend on ``depends_on``; both must exist."""

        dependency = self.project.module(depends_on)
        self._patch_module(module, lambda builder: builder.build_file().module(dependency))
        LOGGER.info("Added module dependency '%s' -> '%s'", module, depends_on)
        return self

    # Templates

    def apply_template(self, template: Template) -> ProjectManager:
        """Merge ``template``, run its transforms and record it on the project.

        Earlier templates are already resolved into the project, so only
        ``template`` is parsed. A failing transform leaves the project untouched.
        """

        resolved = self.project.replace(templates=()).with_template(template).parse()
        self.project = resolved.replace(templates=(*self.project.templates, template))
        return self

    def apply_default_template(self, kotlin_version: str = DEFAULT_KOTLIN_VERSION) -> ProjectManager:
        LOGGER.info("Applying default template with Kotlin %s", kotlin_version)
        if not kotlin_version.strip():
            raise IntegrityViolation("Kotlin version cannot be blank")
        return self.apply_template(default_template(self.project, kotlin_version))

    def apply_dokka_template(self) -> ProjectManager:
        LOGGER.info("Applying Dokka template")
        return self.apply_template(dokka_template(self.project))

    def _apply_module_template(self, names: Sequence[str], factory: ModuleTemplateFactory) -> ProjectManager:
        modules = [self.project.module(name) for name in names]
        if not modules:
            return self
        base_groups = {module.base_group for module in modules}
        if len(base_groups) != 1:
            raise IntegrityViolation("Selected modules must share the same base group")
        host = self.project.replace(group=base_groups.pop() or None)
        return self.apply_template(factory(host, modules))

    def apply_app_template(self, modules: Sequence[str]) -> ProjectManager:
        LOGGER.info("Applying app template to modules: %s", ", ".join(modules))
        return self._apply_module_template(modules, app_template)

    def apply_cli_template(self, modules: Sequence[str]) -> ProjectManager:
        LOGGER.info("Applying CLI template to modules: %s", ", ".join(modules))
        return self._apply_module_template(modules, cli_template)

    def apply_coroutines_template(self, modules: Sequence[str]) -> ProjectManager:
        LOGGER.info("Applying coroutines template to modules: %s", ", ".join(modules))
        return self._apply_module_template(modules, coroutines_template)

    def apply_serialization_template(self, modules: Sequence[str]) -> ProjectManager:
        LOGGER.info("Applying serialization template to modules: %s", ", ".join(modules))
        return self._apply_module_template(modules, serialization_template)

    def apply_test_template(self, modules: Sequence[str]) -> ProjectManager:
        LOGGER.info("Applying test template to modules: %s", ", ".join(modules))
        return self._apply_module_template(modules, unit_test_template)

    def apply_compose_template(self, modules: Sequence[str]) -> ProjectManager:
        LOGGER.info("Applying Compose template to modules: %s", ", ".join(modules))
        return self._apply_module_template(modules, compose_template)

    def apply_github_workflows_template(
        self,
        *,
        include_docs: bool = True,
        include_tests: bool = True,
        include_artifacts: bool = True,
    ) -> ProjectManager:
        """Add the selected GitHub Actions workflows under ``.github/workflows``."""

        selected = (
            (include_docs, docs_workflow_template),
            (include_tests, tests_workflow_template),
            (include_artifacts, artifacts_workflow_template),
        )
        for enabled, factory in selected:
            if enabled:
                LOGGER.info("Applying workflow template '%s'", factory.__name__)
                self.apply_template(factory(self.project))
        return self

    # Persistence

    def save(self, path: Path) -> ProjectManager:
        """Save the project as a single JSON file, raising on failure."""

        api.save_inline(self.project, Path(path)).unwrap()
        return self

    def save_folder(self, folder: Path) -> ProjectManager:
        """Save the project as ``project.json`` plus checksummed bodies, raising on failure."""

        api.save_folder(self.project, Path(folder)).unwrap()
        return self

    @classmethod
    def load(cls, path: Path, *, new_name: str | None = None, new_group: str | None = None) -> ProjectManager:
        return cls(api.load_inline(Path(path), new_name=new_name, new_group=new_group).unwrap())

    @classmethod
    def load_folder(cls, folder: Path, *, new_name: str | None = None, new_group: str | None = None) -> ProjectManager:
        return cls(api.load_folder(Path(folder), new_name=new_name, new_group=new_group).unwrap())


__all__ = ["DEFAULT_README", "ProjectManager"]
