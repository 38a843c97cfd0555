# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Application presets turning modules into runnable JVM programs."""

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

SHADOW_VERSION: Final[str] = "8.1.1"
KTFLAG_VERSION: Final[str] = "1.5.4"
JITPACK_REPOSITORY: Final[str] = 'maven { url = uri("https://jitpack.io") }'

_APPLICATION_BLOCK: Final[str] = dedent(
    """\
    application {{
        mainClass.set("{group}.MainKt")
    }}

    kotlin {{
        jvmToolchain(21)
    }}""",
)

_COPY_JAR_TASK: Final[str] = dedent(
    """\
    val {name}Jar =
        tasks.register<Copy>("copy{name}Jar") {{
            dependsOn(":{name}:build")
            from(project(":{name}").layout.buildDirectory.dir("libs"))
            into(layout.buildDirectory.dir("libs"))
        }}

    tasks.named("build") {{
        dependsOn({name}Jar)
    }}""",
)


def app_template(project: Project, modules: Sequence[Module]) -> Template:
    """Return a template configuring ``modules`` as applications.

    Each module receives an ``application`` block. A transform then adds the
    shadow plugin and one copy-jar task per module to the root build script.

    Args:
        project: Pre-merge project carrying the shared base group.
        modules: Modules to configure.

    Returns:
        Template: Application template.
    """

    builder = TemplateBuilder(project)
    for module in modules:
        patch = builder.module(module.name, module.simple_name)
        patch.build_file().raw(_APPLICATION_BLOCK.format(group=patch.group))
    root = BuildFileBuilder(DEFAULT_BUILD_FILE).plugin(
        "shadow",
        "com.github.johnrengelman.shadow",
        Version("shadow", SHADOW_VERSION),
        apply=False,
    )
    for module in modules:
        root.raw(_COPY_JAR_TASK.format(name=module.simple_name))
    builder.transform(AppendBuildFile(root.build()))
    return builder.build()


def cli_template(project: Project, modules: Sequence[Module]) -> Template:
    """Return the application template plus the KtFlag argument parser."""

    builder = TemplateBuilder(project)
    for module in modules:
        builder.module(module.name, module.simple_name).build_file().repository(JITPACK_REPOSITORY).library(
            "ktflag",
            "com.github.RafaPear:KtFlag",
            Version("ktflag", KTFLAG_VERSION),
        )
    return builder.build().combine(app_template(project, modules))


__all__ = ["JITPACK_REPOSITORY", "KTFLAG_VERSION", "SHADOW_VERSION", "app_template", "cli_template"]
