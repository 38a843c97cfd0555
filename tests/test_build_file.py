# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for build script validation, merging and Kotlin DSL rendering."""

from __future__ import annotations

from textwrap import dedent

import pytest

from kpb.builders import BuildFileBuilder
from kpb.errors import IntegrityViolation, StructuralMismatch
from kpb.model import BuildFile, Catalog, Library, ModuleRef, Plugin, Version


def test_plugin_missing_from_catalog_is_rejected() -> None:
    with pytest.raises(IntegrityViolation, match="Plugin 'org.jetbrains.dokka'"):
        BuildFile(name="build.gradle.kts", plugins=(Plugin("dokka", "org.jetbrains.dokka", "dokka"),))


def test_library_must_match_alias_coordinate_and_version_ref() -> None:
    catalog = Catalog(
        libraries=(Library("okio", "com.squareup.okio:okio", "okio"),),
        versions=(Version("okio", "3.9.0"),),
    )
    BuildFile(name="build.gradle.kts", libraries=catalog.libraries, catalog=catalog)

    with pytest.raises(IntegrityViolation, match="Library 'okio'"):
        BuildFile(
            name="build.gradle.kts",
            libraries=(Library("okio", "com.squareup.okio:okio", "okio-next"),),
            catalog=catalog,
        )


def test_builder_fails_fast_on_conflicting_version() -> None:
    builder = BuildFileBuilder().library("a", "g:a", Version("shared", "1.0"))

    with pytest.raises(IntegrityViolation, match="version names"):
        builder.library("b", "g:b", Version("shared", "2.0"))


def test_combine_requires_same_name() -> None:
    with pytest.raises(StructuralMismatch):
        BuildFile(name="build.gradle.kts").combine(BuildFile(name="settings.gradle.kts"))


def test_combine_merges_entries_and_catalogs() -> None:
    left = BuildFileBuilder().import_("java.io.File").dependency("implementation(kotlin(\"reflect\"))").build()
    right = (
        BuildFileBuilder()
        .import_("java.io.File")
        .plugin("kotlin", "org.jetbrains.kotlin.jvm", Version("kotlin", "2.2.20"))
        .repository("mavenCentral()")
        .build()
    )

    merged = left + right

    assert merged.imports == ("java.io.File",)
    assert merged.dependencies == ('implementation(kotlin("reflect"))',)
    assert merged.plugins == right.plugins
    assert merged.repositories == ("mavenCentral()",)
    assert merged.catalog.versions == (Version("kotlin", "2.2.20"),)


def test_conflicting_module_refs_do_not_combine() -> None:
    left = BuildFile(name="build.gradle.kts", modules=(ModuleRef("core", "core"),))
    right = BuildFile(name="build.gradle.kts", modules=(ModuleRef("core", "kernel"),))

    with pytest.raises(StructuralMismatch, match="module references"):
        left.combine(right)


def test_without_module_drops_only_that_reference() -> None:
    build_file = BuildFile(name="build.gradle.kts", modules=(ModuleRef("a", "a"), ModuleRef("b", "b")))

    assert build_file.without_module("a").modules == (ModuleRef("b", "b"),)


def test_render_kotlin_dsl() -> None:
    build_file = (
        BuildFileBuilder()
        .import_("java.io.File")
        .other_plugin('kotlin("jvm")', apply=False)
        .plugin("kotlin", "org.jetbrains.kotlin.jvm", Version("kotlin", "2.2.20"))
        .repository("mavenCentral()")
        .module(ModuleRef("core", "core"))
        .library("kotlinx-coroutines", "org.jetbrains.kotlinx:kotlinx-coroutines-core", Version("coroutines", "1.10.2"))
        .library("mockk", "io.mockk:mockk", Version("mockk", "1.13.9"), is_test=True)
        .library("bom", "g:bom", Version("bom", "1"), write=False)
        .dependency('testImplementation(kotlin("test"))')
        .raw("tasks.test { useJUnitPlatform() }")
        .build()
    )

    entry = build_file.render(prefix="core/")

    assert entry.path == "core/build.gradle.kts"
    assert entry.content == dedent(
        """\
        import java.io.File

        plugins {
            kotlin("jvm") apply false
            alias(libs.plugins.kotlin)
        }

        repositories {
            mavenCentral()
        }

        dependencies {
            implementation(project(":core"))
            implementation(libs.kotlinx.coroutines)
            testImplementation(libs.mockk)
            testImplementation(kotlin("test"))
        }

        tasks.test { useJUnitPlatform() }
        """,
    )


def test_empty_build_file_renders_empty_body() -> None:
    assert BuildFile(name="build.gradle.kts").render().content == ""
