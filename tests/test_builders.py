# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the fluent project, module and template builders."""

from __future__ import annotations

import pytest

from kpb.builders import ModuleBuilder, ProjectBuilder, TemplateBuilder
from kpb.builders.module import is_verbatim_path, module_group
from kpb.builders.project import validate_group
from kpb.errors import IntegrityViolation, ReferenceNotFound
from kpb.model import Project, Template


@pytest.mark.parametrize("group", ["pt", "pt.x", "com.example.app_1"])
def test_valid_groups_are_accepted(group: str) -> None:
    assert validate_group(group) == group


@pytest.mark.parametrize("group", ["", "   ", "pt..x", ".pt", "pt.x.", "pt x", "pt/x", "pt\\x"])
def test_invalid_groups_are_rejected(group: str) -> None:
    with pytest.raises(IntegrityViolation):
        ProjectBuilder("demo").group(group)


def test_module_group_joins_base_and_simple_name() -> None:
    assert module_group("pt.x", "lib") == "pt.x.lib"
    assert module_group(None, "lib") == "lib"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("Foo.kt", "src/main/kotlin/pt/x/lib/Foo.kt"),
        ("util/Strings.kt", "src/main/kotlin/pt/x/lib/util/Strings.kt"),
        ("src/main/java/Legacy.java", "src/main/java/Legacy.java"),
        ("/abs/Foo.kt", "/abs/Foo.kt"),
        ("win\\Foo.kt", "win\\Foo.kt"),
    ],
)
def test_source_paths_expand_under_package_directory(path: str, expected: str) -> None:
    module = ModuleBuilder("lib", "lib", "pt.x.lib").source_file(path, "").build()

    assert module.files[0].path == expected
    assert is_verbatim_path(path) is (path == expected)


def test_test_and_resource_files_use_their_source_sets() -> None:
    module = (
        ModuleBuilder("lib", "lib", "pt.x.lib")
        .test_file("FooTest.kt", "class FooTest")
        .resource_file("logback.xml", "<configuration/>")
        .build()
    )

    assert [entry.path for entry in module.files] == [
        "src/test/kotlin/pt/x/lib/FooTest.kt",
        "src/main/resources/logback.xml",
    ]


def test_module_builder_always_provides_default_build_file() -> None:
    module = ModuleBuilder("lib", "lib", "lib").build()

    assert [build_file.name for build_file in module.build_files] == ["build.gradle.kts"]


def test_project_builder_derives_module_groups() -> None:
    builder = ProjectBuilder("demo").group("pt.x")
    builder.module("feature-login", "login")

    project = builder.build()

    assert project.module("feature-login").group == "pt.x.login"


def test_remove_unknown_module_from_builder() -> None:
    with pytest.raises(ReferenceNotFound):
        ProjectBuilder("demo").remove_module("ghost")


def test_template_factories_see_pre_merge_snapshot() -> None:
    seen: list[int] = []

    def add_readme(project: Project) -> Template:
        seen.append(len(project.files))
        return TemplateBuilder(project).file("README.md", "# demo\n").build()

    builder = ProjectBuilder("demo").group("pt.x").file("LICENSE", "MIT")
    builder.template(add_readme).template(add_readme)

    project = builder.build()

    assert seen == [1, 1]
    assert [entry.path for entry in project.files] == ["LICENSE", "README.md"]
    assert len(project.templates) == 2


def test_template_builder_groups_modules_under_project_group() -> None:
    builder = TemplateBuilder(Project("demo", group="pt.x"))
    builder.module("lib", "lib").source_file("A.kt", "")

    (module,) = builder.build().modules
    assert module.group == "pt.x.lib"
    assert module.files[0].path == "src/main/kotlin/pt/x/lib/A.kt"
