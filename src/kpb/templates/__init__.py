# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Template presets applied through :meth:`kpb.model.Project.with_template`."""

from __future__ import annotations

from typing import Final

from .app import app_template, cli_template
from .compose import compose_template
from .default import DEFAULT_KOTLIN_VERSION, default_template, dokka_template
from .libraries import coroutines_template, serialization_template, unit_test_template
from .workflows import artifacts_workflow_template, docs_workflow_template, tests_workflow_template

__all__: Final[tuple[str, ...]] = (
    "DEFAULT_KOTLIN_VERSION",
    "app_template",
    "artifacts_workflow_template",
    "cli_template",
    "compose_template",
    "coroutines_template",
    "default_template",
    "docs_workflow_template",
    "dokka_template",
    "serialization_template",
    "tests_workflow_template",
    "unit_test_template",
)
