# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Translate between :class:`~kpb.model.Project` values and persisted documents."""

from __future__ import annotations

import logging

from ..builders.project import validate_group
from ..errors import ReferenceNotFound
from ..model.build_file import BuildFile
from ..model.catalog import Catalog, combine_catalogs
from ..model.entries import FileEntry, Library, ModuleRef, OtherPlugin, Plugin, Version
from ..model.module import Module
from ..model.project import Project
from .content_store import RefReader, RefWriter
from .documents import (
    BuildFileDocument,
    CatalogDocument,
    FileRefDocument,
    LibraryDocument,
    ModuleDocument,
    OtherPluginDocument,
    PluginDocument,
    ProjectDocument,
    VersionDocument,
)

LOGGER = logging.getLogger(__name__)


def _library_document(library: Library) -> LibraryDocument:
    return LibraryDocument(
        name=library.name,
        id=library.id,
        version_ref=library.version_ref,
        write=library.write,
        is_test=library.is_test,
    )


def _plugin_document(plugin: Plugin) -> PluginDocument:
    return PluginDocument(name=plugin.name, id=plugin.id, version_ref=plugin.version_ref, apply=plugin.apply)


def catalog_document(catalog: Catalog) -> CatalogDocument:
    """Return the document form of ``catalog``."""

    return CatalogDocument(
        libraries=[_library_document(library) for library in catalog.libraries],
        versions=[VersionDocument(name=version.name, value=version.value) for version in catalog.versions],
        plugins=[_plugin_document(plugin) for plugin in catalog.plugins],
    )


class _BodySink:
    """Place bodies inline or hand them to a :class:`RefWriter`."""

    def __init__(self, writer: RefWriter | None) -> None:
        self.writer = writer

    def file(self, entry: FileEntry) -> FileRefDocument:
        if self.writer is None:
            return FileRefDocument(path=entry.path, content=entry.content)
        ref, checksum = self.writer.write(entry.content)
        return FileRefDocument(path=entry.path, ref=ref, checksum=checksum)

    def build_file(self, build_file: BuildFile) -> BuildFileDocument:
        body = build_file.render().content
        document = BuildFileDocument(
            name=build_file.name,
            imports=list(build_file.imports),
            plugins=[_plugin_document(plugin) for plugin in build_file.plugins],
            other_plugins=[
                OtherPluginDocument(definition=other.definition, apply=other.apply)
                for other in build_file.other_plugins
            ],
            dependencies=list(build_file.dependencies),
            libraries=[_library_document(library) for library in build_file.libraries],
            module_names=[ref.name for ref in build_file.modules],
            raw_fragments=list(build_file.raw_fragments),
            repositories=list(build_file.repositories),
            version_catalog=catalog_document(build_file.catalog),
        )
        if self.writer is None:
            document.content = body
        else:
            document.ref, document.checksum = self.writer.write(body)
        return document


def encode_project(project: Project, *, writer: RefWriter | None = None) -> ProjectDocument:
    """Return the persisted document describing ``project``.

    Bodies are visited module by module (files, then build files), followed by
    root build files and root files. With a ``writer`` every body is stored as
    a ref; otherwise bodies are embedded inline.

    Args:
        project: Project to encode.
        writer: Optional ref writer for the folder form.

    Returns:
        ProjectDocument: Document ready to be dumped as JSON.
    """

    sink = _BodySink(writer)
    modules = [
        ModuleDocument(
            name=module.name,
            simple_name=module.simple_name,
            group=module.group,
            files=[sink.file(entry) for entry in module.files],
            build_files=[sink.build_file(build_file) for build_file in module.build_files],
            version_catalog=catalog_document(module.catalog),
        )
        for module in project.modules
    ]
    build_files = [sink.build_file(build_file) for build_file in project.build_files]
    files = [sink.file(entry) for entry in project.files]
    return ProjectDocument(
        name=project.name,
        group=project.group,
        version_catalog=catalog_document(project.catalog),
        modules=modules,
        build_files=build_files,
        file_entries=files,
    )


def _library(document: LibraryDocument) -> Library:
    return Library(
        name=document.name,
        id=document.id,
        version_ref=document.version_ref,
        write=document.write,
        is_test=document.is_test,
    )


def _plugin(document: PluginDocument) -> Plugin:
    return Plugin(name=document.name, id=document.id, version_ref=document.version_ref, apply=document.apply)


def catalog_from_document(document: CatalogDocument) -> Catalog:
    """Return the catalog described by ``document``.

    Raises:
        IntegrityViolation: If the document lists a key twice.
    """

    return Catalog(
        libraries=tuple(_library(item) for item in document.libraries),
        versions=tuple(Version(name=item.name, value=item.value) for item in document.versions),
        plugins=tuple(_plugin(item) for item in document.plugins),
    )


class _ProjectDecoder:
    """Rebuild a project from its document in two passes over the modules."""

    def __init__(self, document: ProjectDocument, reader: RefReader) -> None:
        self.document = document
        self.reader = reader
        self.shells: dict[str, ModuleRef] = {}

    def register_shells(self) -> None:
        for module in self.document.modules:
            self.shells[module.name] = ModuleRef(name=module.name, simple_name=module.simple_name)

    def resolve_module(self, name: str, *, owner: str) -> ModuleRef:
        shell = self.shells.get(name)
        if shell is None:
            raise ReferenceNotFound(f"Module '{name}' referenced by '{owner}' not found")
        return shell

    def file(self, document: FileRefDocument, *, owner: str) -> FileEntry:
        content = self.reader.resolve(
            ref=document.ref,
            checksum=document.checksum,
            inline=document.content,
            context=f"{owner}{document.path}",
        )
        return FileEntry(path=document.path, content=content)

    def build_file(self, document: BuildFileDocument, *, owner: str) -> BuildFile:
        context = f"{owner}{document.name}"
        # Verifies the stored body; the structure below is authoritative.
        self.reader.resolve(ref=document.ref, checksum=document.checksum, inline=document.content, context=context)
        return BuildFile(
            name=document.name,
            imports=tuple(document.imports),
            plugins=tuple(_plugin(item) for item in document.plugins),
            other_plugins=tuple(
                OtherPlugin(definition=item.definition, apply=item.apply) for item in document.other_plugins
            ),
            dependencies=tuple(document.dependencies),
            libraries=tuple(_library(item) for item in document.libraries),
            modules=tuple(self.resolve_module(name, owner=context) for name in document.module_names),
            raw_fragments=tuple(document.raw_fragments),
            repositories=tuple(document.repositories),
            catalog=catalog_from_document(document.version_catalog),
        )

    def module(self, document: ModuleDocument, *, group: str) -> Module:
        owner = f"{document.name}/"
        return Module(
            name=document.name,
            simple_name=document.simple_name,
            group=group,
            files=tuple(self.file(item, owner=owner) for item in document.files),
            build_files=tuple(self.build_file(item, owner=owner) for item in document.build_files),
            catalog=catalog_from_document(document.version_catalog),
        )


def decode_project(
    document: ProjectDocument,
    *,
    reader: RefReader | None = None,
    new_name: str | None = None,
    new_group: str | None = None,
) -> Project:
    """Rebuild the project described by ``document``.

    Args:
        document: Validated project document.
        reader: Ref reader for the folder form; inline-only when omitted.
        new_name: Optional replacement project name.
        new_group: Optional replacement group; module groups are re-derived as
            ``<new_group>.<simple_name>`` while file paths are kept verbatim.

    Returns:
        Project: Reconstructed project.

    Raises:
        ReferenceNotFound: If a build file depends on an unknown module.
        PersistenceIntegrity: If a ref is unsafe or a checksum does not match.
        IntegrityViolation: If a catalog or build file breaks its invariants.
    """

    if new_group is not None:
        validate_group(new_group)
    decoder = _ProjectDecoder(document, reader or RefReader(None))
    decoder.register_shells()
    build_files = tuple(decoder.build_file(item, owner="") for item in document.build_files)
    files = tuple(decoder.file(item, owner="") for item in document.file_entries)
    modules = tuple(
        decoder.module(
            item,
            group=item.group if new_group is None else f"{new_group}.{item.simple_name}",
        )
        for item in document.modules
    )
    nested: list[Catalog] = [build_file.catalog for build_file in build_files]
    for module in modules:
        nested.extend(build_file.catalog for build_file in module.build_files)
        nested.append(module.catalog)
    catalog = combine_catalogs(nested, base=catalog_from_document(document.version_catalog))
    LOGGER.debug("Decoded project '%s' with %d modules", document.name, len(modules))
    return Project(
        name=new_name or document.name,
        group=new_group if new_group is not None else document.group,
        catalog=catalog,
        modules=modules,
        build_files=build_files,
        files=files,
    )


__all__ = [
    "catalog_document",
    "catalog_from_document",
    "decode_project",
    "encode_project",
]
