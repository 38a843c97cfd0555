# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for module identity, merging and rendering."""

from __future__ import annotations

import pytest

from kpb.builders import ModuleBuilder
from kpb.errors import StructuralMismatch
from kpb.model import Catalog, FileEntry, Module, Version


def test_modules_with_different_groups_do_not_combine() -> None:
    left = Module(name="lib", simple_name="lib", group="pt.x.lib")
    right = Module(name="lib", simple_name="lib", group="pt.y.lib")

    with pytest.raises(StructuralMismatch, match="different identities"):
        left + right


def test_combine_keeps_first_file_per_path_and_merges_build_files() -> None:
    left = ModuleBuilder("lib", "lib", "pt.x.lib").file("notes.txt", "first").build()
    right = (
        ModuleBuilder("lib", "lib", "pt.x.lib")
        .file("notes.txt", "second")
        .file("extra.txt", None)
        .build()
    )

    merged = left.combine(right)

    assert merged.files == (FileEntry("notes.txt", "first"), FileEntry("extra.txt"))
    assert [build_file.name for build_file in merged.build_files] == ["build.gradle.kts"]


def test_group_helpers() -> None:
    module = Module(name="feature-login", simple_name="login", group="pt.x.login")

    assert module.group_path == "pt/x/login"
    assert module.base_group == "pt.x"
    assert Module(name="solo", simple_name="solo", group="solo").base_group == ""


def test_remove_catalog_keys() -> None:
    builder = ModuleBuilder("lib", "lib", "pt.x.lib")
    builder.build_file().library("okio", "com.squareup.okio:okio", Version("okio", "3.9.0"))
    module = builder.build()

    stripped = module - Catalog(versions=(Version("okio", "any"),))

    assert stripped.catalog.versions == ()
    assert stripped.catalog.libraries == module.catalog.libraries


def test_render_places_entries_under_module_directory() -> None:
    module = ModuleBuilder("lib", "lib", "pt.x.lib").source_file("Foo.kt", "class Foo").build()

    paths = [entry.path for entry in module.render()]

    assert paths == ["lib/src/main/kotlin/pt/x/lib/Foo.kt", "lib/build.gradle.kts"]
