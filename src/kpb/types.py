# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases and constants for project documents."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]

DEFAULT_BUILD_FILE: Final[str] = "build.gradle.kts"
SETTINGS_BUILD_FILE: Final[str] = "settings.gradle.kts"
CATALOG_PATH: Final[str] = "gradle/libs.versions.toml"
DOCUMENT_NAME: Final[str] = "project.json"
FILES_DIRECTORY: Final[str] = "files"
REF_PREFIX: Final[str] = "f_"

__all__ = [
    "CATALOG_PATH",
    "DEFAULT_BUILD_FILE",
    "DOCUMENT_NAME",
    "FILES_DIRECTORY",
    "JSONPrimitive",
    "JSONValue",
    "REF_PREFIX",
    "SETTINGS_BUILD_FILE",
]
