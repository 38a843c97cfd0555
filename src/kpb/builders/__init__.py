# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Mutable builders that freeze into immutable model values."""

from __future__ import annotations

from typing import Final

from .build_file import BuildFileBuilder
from .module import ModuleBuilder, is_verbatim_path, module_group
from .project import ProjectBuilder, TemplateFactory, validate_group
from .template import TemplateBuilder

__all__: Final[tuple[str, ...]] = (
    "BuildFileBuilder",
    "ModuleBuilder",
    "ProjectBuilder",
    "TemplateBuilder",
    "TemplateFactory",
    "is_verbatim_path",
    "module_group",
    "validate_group",
)
