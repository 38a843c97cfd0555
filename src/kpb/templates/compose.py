# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Compose Multiplatform desktop preset."""

from __future__ import annotations

from collections.abc import Sequence
from textwrap import dedent
from typing import Final

from ..builders.build_file import BuildFileBuilder
from ..builders.template import TemplateBuilder
from ..model.entries import Version
from ..model.module import Module
from ..model.project import Project
from ..model.template import Template
from ..model.transforms import AppendBuildFile
from ..types import DEFAULT_BUILD_FILE
from .app import JITPACK_REPOSITORY, app_template
from .default import DEFAULT_KOTLIN_VERSION

COMPOSE_VERSION: Final[str] = "1.9.1"
COMPOSE_HOT_RELOAD_VERSION: Final[str] = "1.0.0-rc02"
LIFECYCLE_VERSION: Final[str] = "2.9.5"
TARGET_FORMAT_IMPORT: Final[str] = "org.jetbrains.compose.desktop.application.dsl.TargetFormat"

_COMPOSE_DEPENDENCIES: Final[tuple[str, ...]] = (
    "implementation(compose.desktop.currentOs)",
    "implementation(compose.runtime)",
    "implementation(compose.foundation)",
    "implementation(compose.material3)",
    "implementation(compose.ui)",
    "implementation(compose.components.resources)",
    "implementation(compose.components.uiToolingPreview)",
    "implementation(compose.materialIconsExtended)",
    "implementation(libs.androidx.lifecycle.viewmodelCompose)",
    "implementation(libs.androidx.lifecycle.runtimeCompose)",
)

_LIFECYCLE_LIBRARIES: Final[tuple[tuple[str, str], ...]] = (
    ("androidx-lifecycle-viewmodelCompose", "org.jetbrains.androidx.lifecycle:lifecycle-viewmodel-compose"),
    ("androidx-lifecycle-runtimeCompose", "org.jetbrains.androidx.lifecycle:lifecycle-runtime-compose"),
)

_DESKTOP_BLOCK: Final[str] = dedent(
    """\
    compose.desktop {{
        application {{
            mainClass = "{group}.MainKt"

            nativeDistributions {{
                targetFormats(TargetFormat.Dmg, TargetFormat.Msi, TargetFormat.Deb)
                packageName = rootProject.name
                packageVersion = rootProject.version.toString()
            }}
        }}
    }}""",
)

_ROOT_REPOSITORIES: Final[str] = dedent(
    f"""\
    allprojects {{
        repositories {{
            gradlePluginPortal()
            mavenCentral()
            google()
            {JITPACK_REPOSITORY}
        }}
    }}""",
)


def _compose_plugins(builder: BuildFileBuilder, kotlin_version: str, *, apply: bool) -> BuildFileBuilder:
    builder.plugin(
        "composeMultiplatform",
        "org.jetbrains.compose",
        Version("composeMultiplatform", COMPOSE_VERSION),
        apply=apply,
    )
    builder.plugin(
        "composeCompiler",
        "org.jetbrains.kotlin.plugin.compose",
        Version("kotlin", kotlin_version),
        apply=apply,
    )
    builder.plugin(
        "composeHotReload",
        "org.jetbrains.compose.hot-reload",
        Version("composeHotReload", COMPOSE_HOT_RELOAD_VERSION),
        apply=apply,
    )
    return builder


def compose_template(
    project: Project,
    modules: Sequence[Module],
    kotlin_version: str = DEFAULT_KOTLIN_VERSION,
) -> Template:
    """Return a template turning ``modules`` into Compose desktop applications.

    Each module applies the Compose plugins, depends on the desktop runtime and
    lifecycle libraries and gets a ``compose.desktop`` block. A transform then
    declares the plugins at the root with ``apply false`` plus the google and
    jitpack repositories. The result is combined with :func:`app_template`.

    Args:
        project: Pre-merge project carrying the shared base group.
        modules: Modules to configure.
        kotlin_version: Version backing the Compose compiler plugin.

    Returns:
        Template: Compose desktop template.
    """

    builder = TemplateBuilder(project)
    for module in modules:
        patch = builder.module(module.name, module.simple_name)
        build_file = _compose_plugins(patch.build_file(), kotlin_version, apply=True)
        build_file.import_(TARGET_FORMAT_IMPORT)
        for alias, coordinates in _LIFECYCLE_LIBRARIES:
            build_file.library(alias, coordinates, Version("androidx-lifecycle", LIFECYCLE_VERSION), write=False)
        for definition in _COMPOSE_DEPENDENCIES:
            build_file.dependency(definition)
        build_file.raw(_DESKTOP_BLOCK.format(group=patch.group))
    root = _compose_plugins(BuildFileBuilder(DEFAULT_BUILD_FILE), kotlin_version, apply=False)
    root.raw(_ROOT_REPOSITORIES)
    builder.transform(AppendBuildFile(root.build()))
    return builder.build().combine(app_template(project, modules))


__all__ = [
    "COMPOSE_HOT_RELOAD_VERSION",
    "COMPOSE_VERSION",
    "LIFECYCLE_VERSION",
    "TARGET_FORMAT_IMPORT",
    "compose_template",
]
