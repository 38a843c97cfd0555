# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""User configuration loaded from ``pyproject.toml`` and ``kpb.toml``."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .templates.default import DEFAULT_KOTLIN_VERSION

PYPROJECT_FILE: Final[str] = "pyproject.toml"
CONFIG_FILE: Final[str] = "kpb.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "kpb"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class KpbConfig(BaseModel):
    """Settings shared by the command line and the project manager."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    output_root: Path = Field(default_factory=Path)
    kotlin_version: str = DEFAULT_KOTLIN_VERSION
    folder_format: bool = True
    emoji: bool = True
    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("kotlin_version")
    @classmethod
    def _non_blank_version(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("kotlin_version cannot be blank")
        return value


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML ({exc})") from exc
    if not isinstance(data, MutableMapping):
        raise ConfigError(f"Configuration at {path} must be a table")
    return dict(data)


def _pyproject_section(path: Path) -> dict[str, Any]:
    tool_section = _read_toml(path).get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"{path}: [tool.kpb] must be a table")
    return dict(section)


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {key.replace("-", "_"): value for key, value in data.items()}


def load_config(root: Path | None = None, *, overrides: Mapping[str, Any] | None = None) -> KpbConfig:
    """Load configuration for the project rooted at ``root``.

    Defaults are overlaid with ``[tool.kpb]`` from ``pyproject.toml``, then
    ``kpb.toml``, then ``overrides``; later sources win.

    Args:
        root: Directory searched for configuration files; defaults to the cwd.
        overrides: Explicit values, typically from command-line options.

    Returns:
        KpbConfig: Validated configuration.

    Raises:
        ConfigError: If a file is not valid TOML or a value fails validation.
    """

    base = Path.cwd() if root is None else Path(root)
    merged: dict[str, Any] = KpbConfig().model_dump()
    merged = _deep_merge(merged, _normalise_keys(_pyproject_section(base / PYPROJECT_FILE)))
    merged = _deep_merge(merged, _normalise_keys(_read_toml(base / CONFIG_FILE)))
    if overrides:
        merged = _deep_merge(merged, {key: value for key, value in overrides.items() if value is not None})
    try:
        config = KpbConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid kpb configuration: {exc}") from exc
    if not config.output_root.is_absolute():
        config.output_root = base / config.output_root
    return config


__all__ = ["CONFIG_FILE", "ConfigError", "KpbConfig", "LogLevel", "load_config"]
