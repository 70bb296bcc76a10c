# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from prlint.config import DEFAULT_TOOLS, ConfigLoader, PRLintConfig, load_config
from prlint.errors import ConfigError


def test_defaults_match_the_workflow() -> None:
    config = PRLintConfig()

    assert config.tools == DEFAULT_TOOLS == ("flake8", "format", "mypy", "pytest", "pyupgrade", "tox")
    assert config.suffix == ".py"
    assert config.special_files == ("setup.py",)
    assert config.requirements == "requirements-dev.txt"
    assert config.python_target == "py312"
    assert config.tox_config == "tox_pr.ini"


def test_project_file_overrides_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.prlint]\npackage-dir = "src"\ntox-env = "py311"\n',
        encoding="utf-8",
    )
    (tmp_path / ".prlint.toml").write_text('tox_env = "py313"\ncategories = ["core"]\n', encoding="utf-8")

    config = load_config(tmp_path)

    assert config.package_dir == "src"
    assert config.tox_env == "py313"
    assert config.categories == ("core",)


def test_cli_overrides_apply_last_and_ignore_none(tmp_path: Path) -> None:
    (tmp_path / ".prlint.toml").write_text("jobs = 2\n", encoding="utf-8")

    assert ConfigLoader(tmp_path).load({"jobs": 4}).jobs == 4
    assert ConfigLoader(tmp_path).load({"jobs": None}).jobs == 2


@pytest.mark.parametrize(
    "content",
    [
        "unknown_key = 1\n",
        'suffix = "py"\n',
        "jobs = 0\n",
        "this is not toml",
    ],
)
def test_invalid_configuration_raises(tmp_path: Path, content: str) -> None:
    (tmp_path / ".prlint.toml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_pyproject_without_section_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")

    assert load_config(tmp_path) == PRLintConfig()
