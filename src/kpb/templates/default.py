# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Root-level presets: Gradle settings, root build script and Dokka."""

from __future__ import annotations

from textwrap import dedent
from typing import Final

from ..builders.template import TemplateBuilder
from ..model.entries import Version
from ..model.project import Project
from ..model.template import Template
from ..types import DEFAULT_BUILD_FILE, SETTINGS_BUILD_FILE

DEFAULT_KOTLIN_VERSION: Final[str] = "2.2.20"
DOKKA_VERSION: Final[str] = "2.1.0"

_SETTINGS_HEADER: Final[str] = dedent(
    """\
    rootProject.name = "{name}"

    enableFeaturePreview("TYPESAFE_PROJECT_ACCESSORS")

    plugins {{ id("org.gradle.toolchains.foojay-resolver-convention") version "1.0.0" }}""",
)

_ALLPROJECTS: Final[str] = dedent(
    """\
    allprojects {
        repositories {
            gradlePluginPortal()
            mavenCentral()
        }

        apply(plugin = "org.jetbrains.kotlin.jvm")
    }""",
)

_DOKKA_BLOCK: Final[str] = dedent(
    """\
    subprojects {
        apply(plugin = "org.jetbrains.dokka")
    }

    dependencies {
        for (project in subprojects) {
            dokka(project)
        }
    }

    tasks.named("build") {
        dependsOn(tasks.dokkaGenerate)
    }""",
)


def default_template(project: Project, version: str = DEFAULT_KOTLIN_VERSION) -> Template:
    """Return the settings script and root build script for ``project``.

    Args:
        project: Pre-merge project the template is derived from.
        version: Kotlin version declared in the catalog.

    Returns:
        Template: Template contributing ``settings.gradle.kts`` and the root
        ``build.gradle.kts`` with the Kotlin JVM plugin applied lazily.
    """

    builder = TemplateBuilder(project)
    settings = builder.build_file(SETTINGS_BUILD_FILE).raw(_SETTINGS_HEADER.format(name=project.name))
    if project.modules:
        settings.raw("\n".join(f'include(":{module.name}")' for module in project.modules))
    root = builder.build_file(DEFAULT_BUILD_FILE)
    root.plugin("kotlin", "org.jetbrains.kotlin.jvm", Version("kotlin", version), apply=False)
    if project.group is not None:
        root.raw(f'group = "{project.group}"')
    root.raw(_ALLPROJECTS)
    return builder.build()


def dokka_template(project: Project) -> Template:
    """Return a template wiring Dokka documentation into the root build."""

    builder = TemplateBuilder(project)
    builder.build_file(DEFAULT_BUILD_FILE).plugin(
        "dokka",
        "org.jetbrains.dokka",
        Version("dokka", DOKKA_VERSION),
    ).raw(_DOKKA_BLOCK)
    return builder.build()


__all__ = ["DEFAULT_KOTLIN_VERSION", "DOKKA_VERSION", "default_template", "dokka_template"]
