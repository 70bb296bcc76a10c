# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for dependency installation helpers."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from prlint import deps
from prlint.errors import ConfigError
from prlint.process import CommandOptions


def test_cache_key_hashes_manifest(tmp_path: Path) -> None:
    manifest = tmp_path / "requirements-dev.txt"
    manifest.write_text("pytest\n", encoding="utf-8")
    digest = hashlib.sha256(b"pytest\n").hexdigest()

    assert deps.dependency_cache_key(tmp_path, "requirements-dev.txt", system="Linux") == f"Linux-pip-{digest}"


def test_cache_key_without_manifest_is_restore_prefix(tmp_path: Path) -> None:
    assert deps.dependency_cache_key(tmp_path, "requirements-dev.txt", system="macOS") == "macOS-pip-"


def test_install_upgrades_pip_then_installs_manifest(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "requirements-dev.txt").write_text("pytest\n", encoding="utf-8")
    calls: list[tuple[list[str], CommandOptions]] = []
    monkeypatch.setattr(deps, "run_command", lambda args, options: calls.append((list(args), options)))

    deps.install_dependencies(tmp_path, "requirements-dev.txt", python="py", use_emoji=False)

    assert [args for args, _ in calls] == [
        ["py", "-m", "pip", "install", "--upgrade", "pip"],
        ["py", "-m", "pip", "install", "-r", "requirements-dev.txt"],
    ]
    assert all(options.check and options.cwd == tmp_path for _, options in calls)


def test_install_requires_manifest(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        deps.install_dependencies(tmp_path, "requirements-dev.txt", use_emoji=False)


REPO_ROOT = Path(__file__).resolve().parents[1]


def _manifest_packages(path: Path) -> set[str]:
    names: set[str] = set()
    for line in path.read_text(encoding="utf-8").splitlines():
        entry = line.split("#", 1)[0].strip()
        if entry:
            names.add(entry.split(">", 1)[0].split("=", 1)[0].split("<", 1)[0].strip().lower())
    return names


def test_project_manifest_installs_every_matrix_tool() -> None:
    manifest = REPO_ROOT / "requirements-dev.txt"

    packages = _manifest_packages(manifest)

    assert {"flake8", "isort", "black", "mypy", "pyupgrade", "tox", "coverage", "pytest", "pytest-cov"} <= packages
    assert deps.dependency_cache_key(REPO_ROOT, "requirements-dev.txt", system="Linux") != "Linux-pip-"
