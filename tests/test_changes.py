# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for change detection between two revisions."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from prlint.changes import (
    ChangeDetector,
    ChangeSet,
    detect_changes,
    filter_changed_paths,
    pull_request_notice,
)
from prlint.config import PRLintConfig
from prlint.events import RevisionRange


def test_filter_keeps_python_files_and_moves_root_setup_py_last() -> None:
    paths = ["README.md", "setup.py", "a.py", "pkg/b.py", "pkg/setup.py", "notes.pyc", ""]

    result = filter_changed_paths(paths, PRLintConfig())

    assert result == ("a.py", "pkg/b.py", "pkg/setup.py", "setup.py")


def test_filter_returns_empty_tuple_without_python_files() -> None:
    assert filter_changed_paths(["docs/index.md", "Makefile"], PRLintConfig()) == ()


def test_flag_is_true_only_for_non_empty_sets() -> None:
    assert ChangeSet().as_outputs() == {"has_python_changes": "false", "files": ""}
    assert ChangeSet(files=("a.py", "b.py")).as_outputs() == {"has_python_changes": "true", "files": "a.py b.py"}


def test_parse_splits_on_whitespace_and_drops_duplicates() -> None:
    changes = ChangeSet.parse("  a.py  pkg/b.py\ta.py ")

    assert changes.files == ("a.py", "pkg/b.py")
    assert not ChangeSet.parse("").has_python_changes
    assert not ChangeSet.parse(None).has_python_changes


def test_under_selects_files_in_directory() -> None:
    changes = ChangeSet(files=("patterns/behavioral/observer.py", "tests/test_x.py", "patternsx.py"))

    assert changes.under("patterns") == ("patterns/behavioral/observer.py",)


def test_pull_request_diff_compares_remote_base_with_head(tmp_path: Path) -> None:
    calls: list[list[str]] = []

    def runner(cmd: Sequence[str], root: Path) -> list[str]:
        calls.append(list(cmd))
        return ["app.py", "setup.py", "docs/readme.rst"]

    revisions = RevisionRange.for_pull_request("main")
    changes = ChangeDetector(PRLintConfig(), runner=runner).detect(revisions, tmp_path)

    assert calls == [["git", "diff", "--name-only", "--diff-filter=ACMRT", "origin/main", "HEAD"]]
    assert changes.files == ("app.py", "setup.py")


def test_detect_changes_against_real_repository(git_repo) -> None:
    repo, git = git_repo
    (repo / "a.py").write_text("x = 1\n", encoding="utf-8")
    (repo / "gone.py").write_text("y = 1\n", encoding="utf-8")
    git("add", ".")
    git("commit", "-q", "-m", "initial")
    before = git("rev-parse", "HEAD")

    (repo / "a.py").write_text("x = 2\n", encoding="utf-8")
    (repo / "gone.py").unlink()
    (repo / "setup.py").write_text("from setuptools import setup\n", encoding="utf-8")
    (repo / "pkg").mkdir()
    (repo / "pkg" / "b.py").write_text("z = 3\n", encoding="utf-8")
    (repo / "README.md").write_text("# readme\n", encoding="utf-8")
    git("add", "-A")
    git("commit", "-q", "-m", "change")
    after = git("rev-parse", "HEAD")

    changes = detect_changes(RevisionRange.for_push(before, after), repo, PRLintConfig())

    assert changes.files == ("a.py", "pkg/b.py", "setup.py")
    assert changes.has_python_changes


def test_new_branch_push_diffs_against_empty_tree(git_repo) -> None:
    repo, git = git_repo
    (repo / "first.py").write_text("print('hi')\n", encoding="utf-8")
    git("add", ".")
    git("commit", "-q", "-m", "initial")
    head = git("rev-parse", "HEAD")

    changes = detect_changes(RevisionRange.for_push("0" * 40, head), repo, PRLintConfig())

    assert changes.files == ("first.py",)


def test_git_failure_yields_empty_change_set(git_repo) -> None:
    repo, _git = git_repo

    changes = detect_changes(RevisionRange.for_push("deadbeef", "cafebabe"), repo, PRLintConfig())

    assert changes == ChangeSet()
    assert not changes.has_python_changes


def test_pull_request_notice_wording() -> None:
    assert pull_request_notice(ChangeSet(files=("a.py",))) == "This PR contains Python changes that will be linted."
    assert pull_request_notice(ChangeSet()) == (
        "This PR contains no Python changes, but still requires manual approval."
    )
