# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from prlint.changes import ChangeSet
from prlint.config import PRLintConfig
from prlint.tools import ToolContext

GitHelper = Callable[..., str]


def _git(repo: Path, *args: str) -> str:
    completed = subprocess.run(
        ["git", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout.strip()


@pytest.fixture(autouse=True)
def _isolate_ci_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the runner's own CI variables out of every test."""
    for var in (
        "GITHUB_OUTPUT",
        "GITHUB_STEP_SUMMARY",
        "GITHUB_EVENT_NAME",
        "GITHUB_BASE_REF",
        "GITHUB_EVENT_PATH",
        "PRLINT_FILES",
        "PRLINT_HAS_PYTHON_CHANGES",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def git_repo(tmp_path: Path) -> tuple[Path, GitHelper]:
    """Return an initialised repository and a helper running git inside it."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.name", "PRLintTest")
    _git(repo, "config", "user.email", "prlint@example.com")
    _git(repo, "config", "commit.gpgsign", "false")

    def helper(*args: str) -> str:
        return _git(repo, *args)

    return repo, helper


@pytest.fixture
def config() -> PRLintConfig:
    return PRLintConfig()


@pytest.fixture
def make_context(tmp_path: Path, config: PRLintConfig) -> Callable[..., ToolContext]:
    """Build a :class:`ToolContext` rooted at ``tmp_path`` for the given files."""

    def factory(*files: str, **overrides: object) -> ToolContext:
        payload: dict[str, object] = {
            "root": tmp_path,
            "config": config,
            "changes": ChangeSet(files=files),
            "python": "python",
            "use_emoji": False,
        }
        payload.update(overrides)
        return ToolContext(**payload)

    return factory
