# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for project merging, the template pipeline and module removal."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from kpb.builders import BuildFileBuilder, ProjectBuilder
from kpb.errors import IntegrityViolation, ReferenceNotFound
from kpb.model import (
    AppendBuildFile,
    AppendRootFiles,
    BuildFile,
    Catalog,
    FileEntry,
    Library,
    Module,
    ModuleRef,
    Project,
    ProjectTransform,
    Template,
    Version,
)


@dataclass(frozen=True, slots=True)
class _Stamp:
    label: str

    @property
    def name(self) -> str:
        return f"stamp:{self.label}"

    def apply(self, project: Project) -> Project:
        stamped = FileEntry(f"{self.label}.txt", f"seen {len(project.files)} files")
        return project.replace(files=(*project.files, stamped))


@dataclass(frozen=True, slots=True)
class _Explode:
    @property
    def name(self) -> str:
        return "explode"

    def apply(self, project: Project) -> Project:
        raise IntegrityViolation(f"refusing to touch '{project.name}'")


def _two_module_project() -> Project:
    builder = ProjectBuilder("demo").group("pt.x")
    lib = builder.module("lib", "lib").build_file()
    lib.library("okio", "com.squareup.okio:okio", Version("okio", "3.9.0"))
    lib.library("kotlin-stdlib", "org.jetbrains.kotlin:kotlin-stdlib", Version("kotlin", "2.2.20"))
    app = builder.module("app", "app").build_file()
    app.library("kotlin-stdlib", "org.jetbrains.kotlin:kotlin-stdlib", Version("kotlin", "2.2.20"))
    app.module(ModuleRef("lib", "lib"))
    return builder.build()


def test_combine_keeps_left_name_and_group() -> None:
    assert Project("a").combine(Project("b", group="pt.y")).group == "pt.y"
    merged = Project("a", group="pt.x") + Project("b", group="pt.y")
    assert (merged.name, merged.group) == ("a", "pt.x")


def test_root_files_deduplicate_as_whole_values() -> None:
    left = Project("p", files=(FileEntry("README.md", "a"),))
    right = Project("p", files=(FileEntry("README.md", "a"), FileEntry("README.md", "b")))

    assert (left + right).files == (FileEntry("README.md", "a"), FileEntry("README.md", "b"))


def test_remove_is_set_difference_by_key() -> None:
    project = Project("p", files=(FileEntry("a.txt", "1"), FileEntry("b.txt", "2")))

    remaining = project - Project("p", files=(FileEntry("a.txt", "something else"),))

    assert remaining.files == (FileEntry("b.txt", "2"),)


def test_transforms_run_in_application_order_after_merge() -> None:
    first = Template(files=(FileEntry("template.txt", "t"),), transforms=(_Stamp("a"),))
    second = Template(transforms=(_Stamp("b"),))

    parsed = Project("p").with_template(first).with_template(second).parse()

    assert parsed.files == (
        FileEntry("template.txt", "t"),
        FileEntry("a.txt", "seen 1 files"),
        FileEntry("b.txt", "seen 2 files"),
    )
    assert isinstance(_Stamp("a"), ProjectTransform)


def test_builtin_transforms_extend_root_and_aggregate_catalog() -> None:
    shadow = BuildFileBuilder().plugin(
        "shadow",
        "com.github.johnrengelman.shadow",
        Version("shadow", "8.1.1"),
        apply=False,
    )
    template = Template(
        transforms=(AppendBuildFile(shadow.build()), AppendRootFiles((FileEntry(".gitignore", "build/\n"),))),
    )

    parsed = Project("p").with_template(template).parse()

    assert [build_file.name for build_file in parsed.build_files] == ["build.gradle.kts"]
    assert parsed.files == (FileEntry(".gitignore", "build/\n"),)
    assert parsed.catalog.versions == (Version("shadow", "8.1.1"),)


def test_failing_transform_aborts_parse() -> None:
    project = Project("p").with_template(Template(transforms=(_Explode(),)))

    with pytest.raises(IntegrityViolation, match="refusing"):
        project.parse()
    assert project.files == ()


def test_parse_aggregates_nested_catalogs() -> None:
    project = _two_module_project()

    assert {library.name for library in project.catalog.libraries} == {"okio", "kotlin-stdlib"}
    assert {version.name for version in project.catalog.versions} == {"okio", "kotlin"}


def test_remove_module_drops_refs_and_exclusive_catalog_entries() -> None:
    project = _two_module_project().remove_module("lib")

    assert [module.name for module in project.modules] == ["app"]
    assert project.module("app").build_files[0].modules == ()
    assert [library.name for library in project.catalog.libraries] == ["kotlin-stdlib"]
    assert [version.name for version in project.catalog.versions] == ["kotlin"]


def test_unknown_module_lookup_raises() -> None:
    with pytest.raises(ReferenceNotFound, match="ghost"):
        _two_module_project().remove_module("ghost")


def test_render_lists_root_then_modules_then_catalog() -> None:
    paths = [entry.path for entry in _two_module_project().render()]

    assert paths == ["lib/build.gradle.kts", "app/build.gradle.kts", "gradle/libs.versions.toml"]


def test_structure_lists_modules_and_files() -> None:
    lines = _two_module_project().structure()

    assert lines[0] == "- Project: demo (pt.x)"
    assert "  - Module: lib [pt.x.lib]" in lines
    assert "    - Build File: build.gradle.kts" in lines


def _build_file(kotlin: str, dependency: str, fragment: str) -> BuildFile:
    return (
        BuildFileBuilder()
        .plugin("kotlin", "org.jetbrains.kotlin.jvm", Version("kotlin", kotlin))
        .library("stdlib", "org.jetbrains.kotlin:kotlin-stdlib", Version("kotlin", kotlin))
        .dependency(dependency)
        .raw(fragment)
        .build()
    )


def _module(source: str, extra: str, build_file: BuildFile) -> Module:
    files = (FileEntry("src/Main.kt", source), FileEntry(extra, extra))
    return Module("lib", "lib", "pt.x.lib", files=files, build_files=(build_file,))


_CATALOGS = (
    Catalog(versions=(Version("kotlin", "1.0"), Version("a", "1"))),
    Catalog(
        versions=(Version("b", "1"), Version("kotlin", "2.0")),
        libraries=(Library("stdlib", "org.jetbrains.kotlin:kotlin-stdlib", "kotlin"),),
    ),
    Catalog(
        versions=(Version("kotlin", "3.0"), Version("b", "2"), Version("c", "1")),
        libraries=(Library("stdlib", "org.example:other", "b"),),
    ),
)
_BUILD_FILES = (
    _build_file("1.0", "implementation(a)", "a {}"),
    _build_file("2.0", "implementation(b)", "a {}"),
    _build_file("3.0", "implementation(a)", "c {}"),
)
_MODULES = (
    _module("one", "a.txt", _BUILD_FILES[0]),
    _module("two", "b.txt", _BUILD_FILES[1]),
    _module("three", "a.txt", _BUILD_FILES[2]),
)
_PROJECTS = (
    Project("p", catalog=_CATALOGS[0], modules=(_MODULES[0],), files=(FileEntry("README.md", "one"),)),
    Project("q", group="pt.x", catalog=_CATALOGS[1], modules=(_MODULES[1],), build_files=(_BUILD_FILES[1],)),
    Project(
        "r",
        group="pt.y",
        catalog=_CATALOGS[2],
        modules=(_MODULES[2],),
        build_files=(_BUILD_FILES[2],),
        files=(FileEntry("README.md", "one"), FileEntry("README.md", "two")),
    ),
)


@pytest.mark.parametrize(
    "values",
    [_CATALOGS, _BUILD_FILES, _MODULES, _PROJECTS],
    ids=["catalog", "build-file", "module", "project"],
)
def test_combine_is_associative_with_overlapping_keys(values: tuple) -> None:
    first, second, third = values

    assert (first + second) + third == first + (second + third)
