# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Leaf value types referenced by catalogs, build files and modules."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import StructuralMismatch


@dataclass(frozen=True, slots=True)
class Version:
    """Named version declared in the ``[versions]`` table of a catalog."""

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class Library:
    """Library alias mapping to Maven coordinates and a version reference.

    ``write`` controls whether build files emit the dependency line; ``is_test``
    selects ``testImplementation`` over ``implementation``.
    """

    name: str
    id: str
    version_ref: str
    write: bool = True
    is_test: bool = False

    @property
    def accessor(self) -> str:
        """Return the ``libs.*`` accessor used inside Gradle build scripts."""

        return self.name.replace("-", ".")


@dataclass(frozen=True, slots=True)
class Plugin:
    """Plugin alias mapping to a plugin id and a version reference."""

    name: str
    id: str
    version_ref: str
    apply: bool = True

    @property
    def accessor(self) -> str:
        """Return the ``libs.plugins.*`` accessor used inside Gradle build scripts."""

        return self.name.replace("-", ".")


@dataclass(frozen=True, slots=True)
class OtherPlugin:
    """Plugin declared verbatim, outside of the version catalog."""

    definition: str
    apply: bool = True


@dataclass(frozen=True, slots=True)
class FileEntry:
    """File body owned by a project or module; ``content`` may be absent."""

    path: str
    content: str | None = None


@dataclass(frozen=True, slots=True)
class ModuleRef:
    """Reference from a build file to another module of the same project."""

    name: str
    simple_name: str

    def combine(self, other: ModuleRef) -> ModuleRef:
        """Merge two references to the same module.

        Raises:
            StructuralMismatch: If the references name different modules.
        """

        if self != other:
            raise StructuralMismatch(
                f"Cannot combine module references '{self.name}' ({self.simple_name}) "
                f"and '{other.name}' ({other.simple_name})",
            )
        return self


__all__ = [
    "FileEntry",
    "Library",
    "ModuleRef",
    "OtherPlugin",
    "Plugin",
    "Version",
]
