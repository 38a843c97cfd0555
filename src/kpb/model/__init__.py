# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Immutable project model and its composition algebra."""

from __future__ import annotations

from typing import Final

from .build_file import BuildFile
from .catalog import Catalog, combine_catalogs
from .entries import FileEntry, Library, ModuleRef, OtherPlugin, Plugin, Version
from .module import Module
from .project import Project
from .template import EMPTY_TEMPLATE, ProjectTransform, Template, combine_all
from .transforms import AppendBuildFile, AppendRootFiles

__all__: Final[tuple[str, ...]] = (
    "EMPTY_TEMPLATE",
    "AppendBuildFile",
    "AppendRootFiles",
    "BuildFile",
    "Catalog",
    "FileEntry",
    "Library",
    "Module",
    "ModuleRef",
    "OtherPlugin",
    "Plugin",
    "Project",
    "ProjectTransform",
    "Template",
    "Version",
    "combine_all",
    "combine_catalogs",
)
