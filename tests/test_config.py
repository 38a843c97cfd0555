# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests covering configuration loading and precedence."""

from __future__ import annotations

from pathlib import Path

import pytest

from kpb.config import ConfigError, KpbConfig, load_config
from kpb.templates import DEFAULT_KOTLIN_VERSION


def test_defaults_without_files(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.kotlin_version == DEFAULT_KOTLIN_VERSION
    assert config.folder_format is True
    assert config.emoji is True
    assert config.log_level == "INFO"
    assert config.output_root == tmp_path


def test_pyproject_then_kpb_toml_then_overrides(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
[project]
name = "unrelated"

[tool.kpb]
folder-format = false
kotlin-version = "2.0.0"
log_level = "debug"
""".strip(),
        encoding="utf-8",
    )
    (tmp_path / "kpb.toml").write_text('kotlin_version = "2.1.0"\noutput_root = "build/out"\n', encoding="utf-8")

    config = load_config(tmp_path, overrides={"emoji": False, "log_level": None})

    assert config.folder_format is False
    assert config.kotlin_version == "2.1.0"
    assert config.log_level == "DEBUG"
    assert config.emoji is False
    assert config.output_root == tmp_path / "build" / "out"


def test_invalid_toml_is_reported(tmp_path: Path) -> None:
    (tmp_path / "kpb.toml").write_text("emoji = [", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid TOML"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "body",
    ['log_level = "LOUD"', 'kotlin_version = "  "', "unknown_key = 1"],
)
def test_invalid_values_are_rejected(tmp_path: Path, body: str) -> None:
    (tmp_path / "kpb.toml").write_text(body, encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid kpb configuration"):
        load_config(tmp_path)


def test_tool_section_must_be_a_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool]\nkpb = "yes"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match=r"\[tool.kpb\]"):
        load_config(tmp_path)


def test_assignment_is_validated() -> None:
    config = KpbConfig()

    with pytest.raises(ValueError):
        config.log_level = "NOISY"  # type: ignore[assignment]
