# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for writing rendered entries to disk."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from kpb.builders import ProjectBuilder
from kpb.errors import PersistenceIntegrity
from kpb.filesystem import generate_project, materialize, normalize_entry_path
from kpb.model import FileEntry


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("lib/build.gradle.kts", "lib/build.gradle.kts"),
        ("/abs/Foo.kt", "abs/Foo.kt"),
        ("win\\src\\Foo.kt", "win/src/Foo.kt"),
    ],
)
def test_entry_paths_are_normalized(raw: str, expected: str) -> None:
    assert normalize_entry_path(raw) == PurePosixPath(expected)


@pytest.mark.parametrize("raw", ["", "/", "../outside.txt", "lib/../../outside.txt"])
def test_escaping_paths_are_refused(raw: str) -> None:
    with pytest.raises(PersistenceIntegrity, match="outside the project root"):
        normalize_entry_path(raw)


def test_materialize_creates_parents_and_empty_files(tmp_path: Path) -> None:
    written = materialize(
        [FileEntry("a/b/c.txt", "hello"), FileEntry("empty.txt")],
        tmp_path,
    )

    assert written == [tmp_path / "a" / "b" / "c.txt", tmp_path / "empty.txt"]
    assert (tmp_path / "a/b/c.txt").read_text(encoding="utf-8") == "hello"
    assert (tmp_path / "empty.txt").read_text(encoding="utf-8") == ""


def test_generate_project_writes_under_project_name(tmp_path: Path) -> None:
    builder = ProjectBuilder("demo").group("pt.x").file("README.md", "# demo\n")
    builder.module("lib", "lib").source_file("Foo.kt", "class Foo\n")

    destination = generate_project(builder.build(), tmp_path)

    assert destination == tmp_path / "demo"
    assert (destination / "README.md").read_text(encoding="utf-8") == "# demo\n"
    assert (destination / "lib/src/main/kotlin/pt/x/lib/Foo.kt").is_file()
    assert (destination / "lib/build.gradle.kts").read_text(encoding="utf-8") == ""
    assert (destination / "gradle/libs.versions.toml").is_file()
