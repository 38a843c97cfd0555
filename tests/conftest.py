# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from kpb.manager import ProjectManager
from kpb.model import Project

FOO_SOURCE = "package pt.x.lib\n\nclass Foo\n"


@pytest.fixture
def manager() -> ProjectManager:
    """Return a manager holding project ``demo`` grouped under ``pt.x`` with a ``lib`` module."""
    return ProjectManager.create("demo").set_group("pt.x").add_module("lib", "lib")


@pytest.fixture
def sample_project(manager: ProjectManager) -> Project:
    """Return a project exercising files, libraries, module links and templates."""
    manager.add_module("app", "app")
    manager.add_source_file("lib", "Foo.kt", FOO_SOURCE)
    manager.add_source_file("app", "Main.kt", 'fun main() = println("hi")\n')
    manager.add_resource_file("app", "config.properties", None)
    manager.add_library("lib", "kotlin-stdlib", "org.jetbrains.kotlin:kotlin-stdlib", "kotlin", "2.2.20")
    manager.add_module_dependency("app", "lib")
    manager.add_readme()
    manager.apply_default_template()
    manager.apply_test_template(["lib"])
    manager.apply_app_template(["app"])
    return manager.project
