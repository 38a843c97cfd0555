# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for version catalog merging, validation and rendering."""

from __future__ import annotations

from textwrap import dedent

import pytest

from kpb.errors import IntegrityViolation
from kpb.model import Catalog, Library, Plugin, Version, combine_catalogs


def _stdlib_catalog(version: str = "2.2.20") -> Catalog:
    return Catalog(
        libraries=(Library("kotlin-stdlib", "org.jetbrains.kotlin:kotlin-stdlib", "kotlin"),),
        versions=(Version("kotlin", version),),
        plugins=(Plugin("kotlin", "org.jetbrains.kotlin.jvm", "kotlin"),),
    )


def test_disjoint_catalogs_sum_sizes() -> None:
    left = _stdlib_catalog()
    right = Catalog(
        libraries=(Library("mockk", "io.mockk:mockk", "mockk", is_test=True),),
        versions=(Version("mockk", "1.13.9"),),
    )

    combined = left + right

    assert combined.size == left.size + right.size == 5
    assert [library.name for library in combined.libraries] == ["kotlin-stdlib", "mockk"]


def test_earlier_entry_wins_on_overlap() -> None:
    combined = _stdlib_catalog("1.9.0").combine(_stdlib_catalog("2.2.20"))

    assert combined.versions == (Version("kotlin", "1.9.0"),)
    assert combined.size == 3


@pytest.mark.parametrize(
    ("catalog_kwargs", "label"),
    [
        ({"versions": (Version("a", "1"), Version("a", "2"))}, "version names"),
        ({"libraries": (Library("x", "g:x", "v"), Library("x", "g:y", "v"))}, "library names"),
        ({"plugins": (Plugin("one", "same.id", "v"), Plugin("two", "same.id", "v"))}, "plugin ids"),
    ],
)
def test_duplicate_keys_fail_construction(catalog_kwargs: dict[str, tuple[object, ...]], label: str) -> None:
    with pytest.raises(IntegrityViolation, match=label):
        Catalog(**catalog_kwargs)


def test_remove_filters_by_key_not_value() -> None:
    catalog = _stdlib_catalog()

    remaining = catalog - Catalog(versions=(Version("kotlin", "0.0.1"),))

    assert remaining.versions == ()
    assert remaining.libraries == catalog.libraries


def test_combine_catalogs_folds_onto_base() -> None:
    assert combine_catalogs([]).is_empty()
    folded = combine_catalogs([_stdlib_catalog("2.0.0")], base=_stdlib_catalog("1.0.0"))
    assert folded.versions == (Version("kotlin", "1.0.0"),)


def test_render_produces_version_catalog_toml() -> None:
    entry = _stdlib_catalog().render()

    assert entry.path == "gradle/libs.versions.toml"
    assert entry.content == dedent(
        """\
        [versions]
        kotlin = "2.2.20"

        [libraries]
        kotlin-stdlib = { module = "org.jetbrains.kotlin:kotlin-stdlib", version.ref = "kotlin" }

        [plugins]
        kotlin = { id = "org.jetbrains.kotlin.jvm", version.ref = "kotlin" }
        """,
    )
