# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Pydantic models describing the persisted ``project.json`` document."""

from __future__ import annotations

import json
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..errors import PersistenceIntegrity
from ..types import JSONValue


class _Document(BaseModel):
    """Base model: camelCase keys on the wire, unknown keys ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class VersionDocument(_Document):
    name: str
    value: str


class LibraryDocument(_Document):
    name: str
    id: str
    version_ref: str
    write: bool = True
    is_test: bool = False


class PluginDocument(_Document):
    name: str
    id: str
    version_ref: str
    apply: bool = True


class OtherPluginDocument(_Document):
    definition: str
    apply: bool = True


class CatalogDocument(_Document):
    """Serialized version catalog."""

    libraries: list[LibraryDocument] = Field(default_factory=list)
    versions: list[VersionDocument] = Field(default_factory=list)
    plugins: list[PluginDocument] = Field(default_factory=list)


class FileRefDocument(_Document):
    """File entry whose body is either inline or stored under ``files/<ref>``."""

    path: str
    ref: str | None = None
    checksum: str | None = None
    content: str | None = None


class BuildFileDocument(_Document):
    """Serialized build script metadata plus its rendered body."""

    name: str
    imports: list[str] = Field(default_factory=list)
    plugins: list[PluginDocument] = Field(default_factory=list)
    other_plugins: list[OtherPluginDocument] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    libraries: list[LibraryDocument] = Field(default_factory=list)
    module_names: list[str] = Field(default_factory=list)
    raw_fragments: list[str] = Field(default_factory=list)
    repositories: list[str] = Field(default_factory=list)
    version_catalog: CatalogDocument = Field(default_factory=CatalogDocument)
    ref: str | None = None
    checksum: str | None = None
    content: str | None = None


class ModuleDocument(_Document):
    name: str
    simple_name: str
    group: str
    files: list[FileRefDocument] = Field(default_factory=list)
    build_files: list[BuildFileDocument] = Field(default_factory=list)
    version_catalog: CatalogDocument = Field(default_factory=CatalogDocument)


class ProjectDocument(_Document):
    """Root of the persisted project document."""

    name: str
    group: str | None = None
    version_catalog: CatalogDocument = Field(default_factory=CatalogDocument)
    modules: list[ModuleDocument] = Field(default_factory=list)
    build_files: list[BuildFileDocument] = Field(default_factory=list)
    file_entries: list[FileRefDocument] = Field(default_factory=list)


def dump_document(document: ProjectDocument) -> str:
    """Return the pretty printed JSON text of ``document``."""

    payload = document.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def parse_document(payload: Mapping[str, JSONValue] | str, *, context: str) -> ProjectDocument:
    """Validate ``payload`` into a :class:`ProjectDocument`.

    Args:
        payload: Decoded JSON mapping or raw JSON text.
        context: Human-readable origin used in error messages.

    Returns:
        ProjectDocument: Validated document.

    Raises:
        PersistenceIntegrity: If the text is not JSON or does not match the schema.
    """

    try:
        if isinstance(payload, str):
            return ProjectDocument.model_validate_json(payload)
        return ProjectDocument.model_validate(payload)
    except ValidationError as exc:
        raise PersistenceIntegrity(f"{context}: invalid project document ({exc.error_count()} errors)") from exc


__all__ = [
    "BuildFileDocument",
    "CatalogDocument",
    "FileRefDocument",
    "LibraryDocument",
    "ModuleDocument",
    "OtherPluginDocument",
    "PluginDocument",
    "ProjectDocument",
    "VersionDocument",
    "dump_document",
    "parse_document",
]
