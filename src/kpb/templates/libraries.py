# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Presets adding common libraries to selected modules."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from ..builders.template import TemplateBuilder
from ..model.entries import Version
from ..model.module import Module
from ..model.project import Project
from ..model.template import Template
from .default import DEFAULT_KOTLIN_VERSION

COROUTINES_VERSION: Final[str] = "1.10.2"
SERIALIZATION_VERSION: Final[str] = "1.8.0"
MOCKK_VERSION: Final[str] = "1.13.9"

_JUNIT_PLATFORM: Final[str] = "tasks.withType<Test> {\n    useJUnitPlatform()\n}"


def coroutines_template(project: Project, modules: Sequence[Module]) -> Template:
    builder = TemplateBuilder(project)
    for module in modules:
        builder.module(module.name, module.simple_name).build_file().library(
            "coroutines",
            "org.jetbrains.kotlinx:kotlinx-coroutines-core",
            Version("coroutines", COROUTINES_VERSION),
        )
    return builder.build()


def serialization_template(
    project: Project,
    modules: Sequence[Module],
    kotlin_version: str = DEFAULT_KOTLIN_VERSION,
) -> Template:
    """Return a template applying the serialization plugin and JSON runtime."""

    builder = TemplateBuilder(project)
    for module in modules:
        build_file = builder.module(module.name, module.simple_name).build_file()
        build_file.plugin(
            "serialization",
            "org.jetbrains.kotlin.plugin.serialization",
            Version("kotlin", kotlin_version),
        )
        build_file.library(
            "serializationJson",
            "org.jetbrains.kotlinx:kotlinx-serialization-json",
            Version("serialization", SERIALIZATION_VERSION),
        )
    return builder.build()


def unit_test_template(project: Project, modules: Sequence[Module]) -> Template:
    """Return a template enabling JUnit Platform tests with MockK."""

    builder = TemplateBuilder(project)
    for module in modules:
        build_file = builder.module(module.name, module.simple_name).build_file()
        build_file.dependency('testImplementation(kotlin("test"))')
        build_file.library("mockk", "io.mockk:mockk", Version("mockk", MOCKK_VERSION), is_test=True)
        build_file.raw(_JUNIT_PLATFORM)
    return builder.build()


__all__ = [
    "COROUTINES_VERSION",
    "MOCKK_VERSION",
    "SERIALIZATION_VERSION",
    "coroutines_template",
    "serialization_template",
    "unit_test_template",
]
