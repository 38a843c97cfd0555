# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Gradle build script model and its Kotlin DSL rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import StructuralMismatch
from .catalog import Catalog
from .entries import FileEntry, Library, ModuleRef, OtherPlugin, Plugin
from .merge import distinct, first_wins, merge_by_key

_INDENT = "    "


@dataclass(frozen=True, slots=True)
class BuildFile:
    """Describe one Gradle script such as ``build.gradle.kts``.

    Every plugin and library listed on the build file must be declared by its
    own :attr:`catalog`; construction fails otherwise.
    """

    name: str
    imports: tuple[str, ...] = ()
    plugins: tuple[Plugin, ...] = ()
    other_plugins: tuple[OtherPlugin, ...] = ()
    dependencies: tuple[str, ...] = ()
    libraries: tuple[Library, ...] = ()
    modules: tuple[ModuleRef, ...] = ()
    raw_fragments: tuple[str, ...] = ()
    repositories: tuple[str, ...] = ()
    catalog: Catalog = field(default_factory=Catalog)

    def __post_init__(self) -> None:
        """Freeze sequence fields and verify references against the catalog.

        Raises:
            IntegrityViolation: If a plugin or library is absent from the catalog.
        """

        for name in (
            "imports",
            "plugins",
            "other_plugins",
            "dependencies",
            "libraries",
            "modules",
            "raw_fragments",
            "repositories",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        self.catalog.verify_build_file(self)

    def combine(self, other: BuildFile) -> BuildFile:
        """Merge two descriptions of the same build script.

        Args:
            other: Build file merged after this one.

        Returns:
            BuildFile: Merged build file; earlier entries win per key.

        Raises:
            StructuralMismatch: If the build files have different names.
        """

        if self.name != other.name:
            raise StructuralMismatch(
                f"Cannot combine build files with different names: '{self.name}' and '{other.name}'",
            )
        return BuildFile(
            name=self.name,
            imports=distinct((*self.imports, *other.imports)),
            plugins=first_wins((*self.plugins, *other.plugins), key=lambda plugin: plugin.id),
            other_plugins=distinct((*self.other_plugins, *other.other_plugins)),
            dependencies=distinct((*self.dependencies, *other.dependencies)),
            libraries=first_wins((*self.libraries, *other.libraries), key=lambda library: library.name),
            modules=merge_by_key(
                (*self.modules, *other.modules),
                key=lambda ref: ref.name,
                combine=ModuleRef.combine,
            ),
            raw_fragments=distinct((*self.raw_fragments, *other.raw_fragments)),
            repositories=distinct((*self.repositories, *other.repositories)),
            catalog=self.catalog.combine(other.catalog),
        )

    def __add__(self, other: BuildFile) -> BuildFile:
        return self.combine(other)

    def without_module(self, name: str) -> BuildFile:
        """Return a copy that no longer depends on module ``name``."""

        return BuildFile(
            name=self.name,
            imports=self.imports,
            plugins=self.plugins,
            other_plugins=self.other_plugins,
            dependencies=self.dependencies,
            libraries=self.libraries,
            modules=tuple(ref for ref in self.modules if ref.name != name),
            raw_fragments=self.raw_fragments,
            repositories=self.repositories,
            catalog=self.catalog,
        )

    def render(self, *, prefix: str = "") -> FileEntry:
        """Render the build script as Gradle Kotlin DSL.

        Args:
            prefix: Directory prefix prepended to the entry path.

        Returns:
            FileEntry: Rendered script located at ``prefix + name``.
        """

        lines: list[str] = [f"import {item}" for item in self.imports]
        lines.append("")
        if self.plugins or self.other_plugins:
            lines.append("plugins {")
            for other in self.other_plugins:
                lines.append(f"{_INDENT}{other.definition}{_apply_suffix(other.apply)}")
            for plugin in self.plugins:
                lines.append(f"{_INDENT}alias(libs.plugins.{plugin.accessor}){_apply_suffix(plugin.apply)}")
            lines.extend(("}", ""))
        if self.repositories:
            lines.append("repositories {")
            lines.extend(f"{_INDENT}{repository}" for repository in self.repositories)
            lines.extend(("}", ""))
        if self.dependencies or self.libraries or self.modules:
            lines.append("dependencies {")
            lines.extend(f'{_INDENT}implementation(project(":{ref.name}"))' for ref in self.modules)
            for library in self.libraries:
                if not library.write:
                    continue
                configuration = "testImplementation" if library.is_test else "implementation"
                lines.append(f"{_INDENT}{configuration}(libs.{library.accessor})")
            lines.extend(f"{_INDENT}{dependency}" for dependency in self.dependencies)
            lines.extend(("}", ""))
        for fragment in self.raw_fragments:
            lines.extend((fragment, ""))
        content = "\n".join(lines).strip()
        return FileEntry(path=f"{prefix}{self.name}", content=content + "\n" if content else "")


def _apply_suffix(apply: bool) -> str:
    return "" if apply else " apply false"


__all__ = ["BuildFile"]
