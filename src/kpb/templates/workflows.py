# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""GitHub Actions workflow presets contributing files under ``.github/workflows``."""

from __future__ import annotations

from typing import Final

from ..builders.template import TemplateBuilder
from ..model.project import Project
from ..model.template import Template

WORKFLOWS_DIRECTORY: Final[str] = ".github/workflows"
DOCS_WORKFLOW: Final[str] = f"{WORKFLOWS_DIRECTORY}/docs.yml"
TESTS_WORKFLOW: Final[str] = f"{WORKFLOWS_DIRECTORY}/release-tests.yml"
ARTIFACTS_WORKFLOW: Final[str] = f"{WORKFLOWS_DIRECTORY}/build-artifacts.yml"

_SETUP_STEPS: Final[str] = """\
      - name: Checkout
        uses: actions/checkout@v4

      - name: Set up JDK 21
        uses: actions/setup-java@v4
        with:
          distribution: temurin
          java-version: 21

      - name: Setup Gradle
        uses: gradle/actions/setup-gradle@v4

      - name: Grant execute permission for gradlew
        run: chmod +x ./gradlew
"""

_ON_PUSH_OR_RELEASE: Final[str] = """\
on:
  push:
    branches: [ main, master ]
  release:
    types: [ created ]
"""

_DOCS_BODY: Final[str] = """\
      - name: Build project
        run: ./gradlew build --no-daemon -x test

      - name: Deploy to GitHub Pages
        uses: peaceiris/actions-gh-pages@v4
        with:
          github_token: ${{ secrets.GITHUB_TOKEN }}
          publish_dir: build/dokka/html
          commit_message: "Deploy Dokka docs"
"""

_TESTS_BODY: Final[str] = """\
      - name: Run tests
        run: ./gradlew test --no-daemon

      - name: Upload test reports
        if: always()
        uses: actions/upload-artifact@v4
        with:
          name: test-reports
          path: |
            build/reports/tests/test
            build/test-results/test
"""

_ARTIFACTS_BODY: Final[str] = """\
      - name: Build project jar
        run: ./gradlew clean build -x test --no-daemon

      - name: Upload jar to GitHub release
        uses: softprops/action-gh-release@v2
        with:
          files: 'build/libs/*.jar'
        env:
          GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}
"""


def _workflow(name: str, trigger: str, permissions: str, job: str, steps: str) -> str:
    header = f"name: {name}\n\n{trigger}\npermissions:\n  contents: {permissions}\n\n"
    return f"{header}jobs:\n  {job}:\n    runs-on: ubuntu-latest\n\n    steps:\n{_SETUP_STEPS}\n{steps}"


def docs_workflow_template(project: Project) -> Template:
    """Return a template adding a workflow that publishes Dokka HTML to GitHub Pages."""

    body = _workflow("Deploy Dokka Docs", _ON_PUSH_OR_RELEASE, "write", "build", _DOCS_BODY)
    return TemplateBuilder(project).file(DOCS_WORKFLOW, body).build()


def tests_workflow_template(project: Project) -> Template:
    """Return a template adding a workflow that runs the Gradle tests and uploads reports."""

    body = _workflow("Release Tests", _ON_PUSH_OR_RELEASE, "read", "test", _TESTS_BODY)
    return TemplateBuilder(project).file(TESTS_WORKFLOW, body).build()


def artifacts_workflow_template(project: Project) -> Template:
    """Return a template adding a workflow that attaches built jars to a GitHub release."""

    trigger = "on:\n  release:\n    types: [ created ]\n"
    body = _workflow("Release Workflow", trigger, "write", "release", _ARTIFACTS_BODY)
    return TemplateBuilder(project).file(ARTIFACTS_WORKFLOW, body).build()


__all__ = [
    "ARTIFACTS_WORKFLOW",
    "DOCS_WORKFLOW",
    "TESTS_WORKFLOW",
    "artifacts_workflow_template",
    "docs_workflow_template",
    "tests_workflow_template",
]
