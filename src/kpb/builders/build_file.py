# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fluent builder producing :class:`~kpb.model.BuildFile` values."""

from __future__ import annotations

from ..model.build_file import BuildFile
from ..model.catalog import Catalog
from ..model.entries import Library, ModuleRef, OtherPlugin, Plugin, Version
from ..model.merge import distinct
from ..model.module import Module
from ..types import DEFAULT_BUILD_FILE


class BuildFileBuilder:
    """Accumulate build script entries and freeze them with :meth:`build`.

    Catalog entries implied by plugins and libraries are collected alongside;
    a conflicting declaration raises immediately rather than at ``build()``.
    """

    def __init__(self, name: str = DEFAULT_BUILD_FILE) -> None:
        self.name = name
        self._imports: list[str] = []
        self._plugins: list[Plugin] = []
        self._other_plugins: list[OtherPlugin] = []
        self._dependencies: list[str] = []
        self._libraries: list[Library] = []
        self._modules: list[ModuleRef] = []
        self._raw_fragments: list[str] = []
        self._repositories: list[str] = []
        self._versions: list[Version] = []

    def import_(self, path: str) -> BuildFileBuilder:
        """Add an ``import`` line."""

        self._imports.append(path)
        return self

    def plugin(self, name: str, plugin_id: str, version: Version, *, apply: bool = True) -> BuildFileBuilder:
        """Declare a catalog plugin together with its version.

        Args:
            name: Catalog alias of the plugin.
            plugin_id: Gradle plugin id.
            version: Version entry the plugin refers to.
            apply: ``False`` renders the plugin with ``apply false``.

        Returns:
            BuildFileBuilder: This builder.

        Raises:
            IntegrityViolation: If the declaration conflicts with an earlier one.
        """

        self._plugins.append(Plugin(name=name, id=plugin_id, version_ref=version.name, apply=apply))
        self._versions.append(version)
        self._checkpoint()
        return self

    def other_plugin(self, definition: str, *, apply: bool = True) -> BuildFileBuilder:
        """Declare a plugin outside the catalog, e.g. ``kotlin("jvm")``."""

        self._other_plugins.append(OtherPlugin(definition=definition, apply=apply))
        return self

    def library(
        self,
        name: str,
        library_id: str,
        version: Version,
        *,
        write: bool = True,
        is_test: bool = False,
    ) -> BuildFileBuilder:
        """Declare a catalog library together with its version.

        Raises:
            IntegrityViolation: If the declaration conflicts with an earlier one.
        """

        self._libraries.append(
            Library(name=name, id=library_id, version_ref=version.name, write=write, is_test=is_test),
        )
        self._versions.append(version)
        self._checkpoint()
        return self

    def dependency(self, definition: str) -> BuildFileBuilder:
        """Add a raw dependency line such as ``testImplementation(kotlin("test"))``."""

        self._dependencies.append(definition)
        return self

    def module(self, module: Module | ModuleRef) -> BuildFileBuilder:
        """Depend on another module of the same project."""

        ref = module if isinstance(module, ModuleRef) else module.ref
        self._modules.append(ref)
        return self

    def raw(self, fragment: str) -> BuildFileBuilder:
        """Append a verbatim script fragment after the generated blocks."""

        self._raw_fragments.append(fragment)
        return self

    def repository(self, definition: str) -> BuildFileBuilder:
        self._repositories.append(definition)
        return self

    def catalog(self) -> Catalog:
        """Return the catalog implied by the declarations so far."""

        return Catalog(
            libraries=distinct(self._libraries),
            versions=distinct(self._versions),
            plugins=distinct(self._plugins),
        )

    def _checkpoint(self) -> None:
        self.catalog()

    def build(self) -> BuildFile:
        """Freeze the accumulated entries into a :class:`BuildFile`."""

        return BuildFile(
            name=self.name,
            imports=distinct(self._imports),
            plugins=distinct(self._plugins),
            other_plugins=distinct(self._other_plugins),
            dependencies=distinct(self._dependencies),
            libraries=distinct(self._libraries),
            modules=distinct(self._modules),
            raw_fragments=distinct(self._raw_fragments),
            repositories=distinct(self._repositories),
            catalog=self.catalog(),
        )


__all__ = ["BuildFileBuilder"]
