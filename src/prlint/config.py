# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and layered loading for prlint."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "prlint"
PROJECT_CONFIG_NAME: Final[str] = ".prlint.toml"

DEFAULT_TOOLS: Final[tuple[str, ...]] = ("flake8", "format", "mypy", "pytest", "pyupgrade", "tox")
DEFAULT_CATEGORIES: Final[tuple[str, ...]] = ("behavioral", "creational", "structural", "fundamental", "other")


class PRLintConfig(BaseModel):
    """Settings shared by the change detector, matrix runner and tox generator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    suffix: str = ".py"
    special_files: tuple[str, ...] = ("setup.py",)
    tools: tuple[str, ...] = DEFAULT_TOOLS
    package_dir: str = "patterns"
    tests_dir: str = "tests"
    categories: tuple[str, ...] = DEFAULT_CATEGORIES
    requirements: str = "requirements-dev.txt"
    python_target: str = "py312"
    tox_env: str = "py312"
    tox_config: str = "tox_pr.ini"
    jobs: int = Field(default=6, ge=1)
    timeout: float | None = Field(default=None, gt=0)

    @field_validator("suffix")
    @classmethod
    def _require_dot(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError("suffix must start with '.'")
        return value

    @field_validator("package_dir", "tests_dir")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        stripped = value.strip().strip("/")
        if not stripped:
            raise ValueError("directory names must not be empty")
        return stripped


class ConfigLoader:
    """Merge built-in defaults, ``pyproject.toml`` and ``.prlint.toml``.

    Later sources win: defaults < ``[tool.prlint]`` in ``pyproject.toml`` <
    ``.prlint.toml`` in the project root.
    """

    def __init__(self, project_root: Path, *, project_config: Path | None = None) -> None:
        self._root = project_root.resolve()
        self._project_config = project_config if project_config is not None else self._root / PROJECT_CONFIG_NAME

    @property
    def sources(self) -> tuple[Path, ...]:
        """Return candidate configuration files in precedence order."""
        return (self._root / "pyproject.toml", self._project_config)

    def load(self, overrides: Mapping[str, Any] | None = None) -> PRLintConfig:
        """Return the merged configuration.

        Args:
            overrides: Values applied on top of every file source, typically CLI flags.

        Returns:
            PRLintConfig: Validated configuration model.

        Raises:
            ConfigError: If a source is unreadable or contains invalid values.
        """

        merged: dict[str, Any] = {}
        pyproject, project_file = self.sources
        merged.update(_pyproject_section(_read_toml(pyproject)))
        merged.update(_read_toml(project_file))
        if overrides:
            merged.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return PRLintConfig.model_validate(_normalise(merged))
        except ValidationError as exc:
            raise ConfigError(f"Invalid prlint configuration: {exc}") from exc


def load_config(root: Path, overrides: Mapping[str, Any] | None = None) -> PRLintConfig:
    """Convenience wrapper returning the configuration for ``root``."""

    return ConfigLoader(root).load(overrides)


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration from {path}: {exc}") from exc


def _pyproject_section(data: Mapping[str, Any]) -> dict[str, Any]:
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError("[tool.prlint] must be a table")
    return dict(section)


def _normalise(data: Mapping[str, Any]) -> dict[str, Any]:
    """Accept dashed TOML keys and list values for tuple fields."""
    normalised: dict[str, Any] = {}
    for key, value in data.items():
        name = str(key).replace("-", "_")
        if isinstance(value, Sequence) and not isinstance(value, str):
            value = tuple(value)
        normalised[name] = value
    return normalised


__all__ = [
    "ConfigLoader",
    "DEFAULT_CATEGORIES",
    "DEFAULT_TOOLS",
    "PRLintConfig",
    "load_config",
]
