# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Version catalog model backing ``gradle/libs.versions.toml``."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..errors import IntegrityViolation
from ..types import CATALOG_PATH
from .entries import FileEntry, Library, Plugin, Version
from .merge import duplicate_keys, first_wins, remove_by_key

if TYPE_CHECKING:
    from .build_file import BuildFile

LOGGER = logging.getLogger(__name__)


def _library_key(library: Library) -> str:
    return library.name


def _version_key(version: Version) -> str:
    return version.name


def _plugin_key(plugin: Plugin) -> str:
    return plugin.id


@dataclass(frozen=True, slots=True)
class Catalog:
    """Describe the libraries, versions and plugins shared across build files.

    Library aliases, version names and plugin ids are unique within their
    respective lists; construction fails otherwise.
    """

    libraries: tuple[Library, ...] = ()
    versions: tuple[Version, ...] = ()
    plugins: tuple[Plugin, ...] = ()

    def __post_init__(self) -> None:
        """Freeze the entry sequences and verify key uniqueness.

        Raises:
            IntegrityViolation: If any list contains a duplicate key.
        """

        object.__setattr__(self, "libraries", tuple(self.libraries))
        object.__setattr__(self, "versions", tuple(self.versions))
        object.__setattr__(self, "plugins", tuple(self.plugins))
        self.verify_integrity()

    def verify_integrity(self) -> None:
        """Raise :class:`IntegrityViolation` when a key appears twice."""

        checks = (
            ("plugin ids", duplicate_keys(self.plugins, key=_plugin_key)),
            ("library names", duplicate_keys(self.libraries, key=_library_key)),
            ("version names", duplicate_keys(self.versions, key=_version_key)),
        )
        for label, duplicates in checks:
            if duplicates:
                joined = ", ".join(duplicates)
                raise IntegrityViolation(f"Duplicate {label} found in catalog: {joined}")

    def verify_build_file(self, build_file: BuildFile) -> None:
        """Ensure every plugin and library of ``build_file`` is declared here.

        Args:
            build_file: Build file whose references are checked.

        Raises:
            IntegrityViolation: If a plugin is missing by id and version reference
                or a library is missing by alias, coordinate and version reference.
        """

        declared_plugins = {(plugin.id, plugin.version_ref) for plugin in self.plugins}
        for plugin in build_file.plugins:
            if (plugin.id, plugin.version_ref) not in declared_plugins:
                raise IntegrityViolation(
                    f"Plugin '{plugin.id}' in build file '{build_file.name}' is not defined in its catalog",
                )
        declared_libraries = {(library.name, library.id, library.version_ref) for library in self.libraries}
        for library in build_file.libraries:
            if (library.name, library.id, library.version_ref) not in declared_libraries:
                raise IntegrityViolation(
                    f"Library '{library.name}' in build file '{build_file.name}' is not defined in its catalog",
                )

    @property
    def size(self) -> int:
        """Return the total number of entries across all three lists."""

        return len(self.libraries) + len(self.versions) + len(self.plugins)

    def is_empty(self) -> bool:
        """Return ``True`` when the catalog holds no entries."""

        return self.size == 0

    def combine(self, other: Catalog) -> Catalog:
        """Return the union of both catalogs, earlier entries winning per key.

        Args:
            other: Catalog merged after this one.

        Returns:
            Catalog: New catalog holding every key of either operand.
        """

        merged = Catalog(
            libraries=first_wins((*self.libraries, *other.libraries), key=_library_key),
            versions=first_wins((*self.versions, *other.versions), key=_version_key),
            plugins=first_wins((*self.plugins, *other.plugins), key=_plugin_key),
        )
        LOGGER.debug(
            "Merged catalogs into %d libraries, %d versions, %d plugins",
            len(merged.libraries),
            len(merged.versions),
            len(merged.plugins),
        )
        return merged

    def remove(self, other: Catalog) -> Catalog:
        """Return this catalog without the keys declared by ``other``."""

        return Catalog(
            libraries=remove_by_key(self.libraries, {_library_key(lib) for lib in other.libraries}, key=_library_key),
            versions=remove_by_key(self.versions, {_version_key(ver) for ver in other.versions}, key=_version_key),
            plugins=remove_by_key(self.plugins, {_plugin_key(plugin) for plugin in other.plugins}, key=_plugin_key),
        )

    def __add__(self, other: Catalog) -> Catalog:
        return self.combine(other)

    def __sub__(self, other: Catalog) -> Catalog:
        return self.remove(other)

    def render(self) -> FileEntry:
        """Render the catalog as a Gradle ``libs.versions.toml`` file entry."""

        lines = ["[versions]"]
        lines.extend(f'{version.name} = "{version.value}"' for version in self.versions)
        lines.extend(("", "[libraries]"))
        lines.extend(
            f'{library.name} = {{ module = "{library.id}", version.ref = "{library.version_ref}" }}'
            for library in self.libraries
        )
        lines.extend(("", "[plugins]"))
        lines.extend(
            f'{plugin.name} = {{ id = "{plugin.id}", version.ref = "{plugin.version_ref}" }}'
            for plugin in self.plugins
        )
        return FileEntry(path=CATALOG_PATH, content="\n".join(lines) + "\n")


def combine_catalogs(catalogs: Iterable[Catalog], *, base: Catalog | None = None) -> Catalog:
    """Fold ``catalogs`` left to right onto ``base`` (or an empty catalog)."""

    result = base if base is not None else Catalog()
    for catalog in catalogs:
        result = result.combine(catalog)
    return result


__all__ = ["Catalog", "combine_catalogs"]
