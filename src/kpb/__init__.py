# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Compose, persist and generate multi-module Kotlin/Gradle project descriptions."""

from __future__ import annotations

from typing import Final

from .builders import BuildFileBuilder, ModuleBuilder, ProjectBuilder, TemplateBuilder
from .errors import (
    ErrorKind,
    IntegrityViolation,
    KpbError,
    Outcome,
    PersistenceIntegrity,
    ReferenceNotFound,
    StructuralMismatch,
)
from .manager import ProjectManager
from .model import (
    BuildFile,
    Catalog,
    FileEntry,
    Library,
    Module,
    ModuleRef,
    OtherPlugin,
    Plugin,
    Project,
    Template,
    Version,
)

__all__: Final[tuple[str, ...]] = (
    "BuildFile",
    "BuildFileBuilder",
    "Catalog",
    "ErrorKind",
    "FileEntry",
    "IntegrityViolation",
    "KpbError",
    "Library",
    "Module",
    "ModuleBuilder",
    "ModuleRef",
    "OtherPlugin",
    "Outcome",
    "PersistenceIntegrity",
    "Plugin",
    "Project",
    "ProjectBuilder",
    "ProjectManager",
    "ReferenceNotFound",
    "StructuralMismatch",
    "Template",
    "TemplateBuilder",
    "Version",
)
