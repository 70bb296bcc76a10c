# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Change detection: which Python files differ between two revisions."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from .config import PRLintConfig
from .events import EventKind, RevisionRange
from .logging import info, warn
from .process import CommandOptions, run_command

GitRunner = Callable[[Sequence[str], Path], list[str]]

DIFF_FILTER: Final[str] = "ACMRT"
HAS_CHANGES_KEY: Final[str] = "has_python_changes"
FILES_KEY: Final[str] = "files"


class ChangeSet(BaseModel):
    """Ordered collection of changed paths relative to the repository root."""

    model_config = ConfigDict(frozen=True)

    files: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def has_python_changes(self) -> bool:
        """Return ``True`` iff at least one file changed."""
        return bool(self.files)

    def joined(self) -> str:
        """Return the space separated path list used by downstream stages."""
        return " ".join(self.files)

    def as_outputs(self) -> dict[str, str]:
        """Return the job outputs consumed by the matrix and summary stages."""
        return {
            HAS_CHANGES_KEY: "true" if self.has_python_changes else "false",
            FILES_KEY: self.joined(),
        }

    def under(self, directory: str) -> tuple[str, ...]:
        """Return the changed files located below ``directory``."""
        prefix = directory.rstrip("/") + "/"
        return tuple(path for path in self.files if path.startswith(prefix))

    @classmethod
    def parse(cls, text: str | None) -> ChangeSet:
        """Rebuild a change set from a space separated path list."""
        if not text:
            return cls()
        return cls(files=tuple(_dedupe(text.split())))


def filter_changed_paths(paths: Iterable[str], config: PRLintConfig) -> tuple[str, ...]:
    """Apply the suffix filter, holding special root files back until the end.

    Paths ending in ``config.suffix`` are kept in diff order except for the
    repository-root special files (``setup.py`` by default), which are checked
    separately and appended last.

    Args:
        paths: Raw paths reported by ``git diff --name-only``.
        config: Active configuration supplying the suffix and special files.

    Returns:
        tuple[str, ...]: Filtered, de-duplicated paths.
    """

    cleaned = [path.strip() for path in paths if path.strip()]
    special = set(config.special_files)
    regular = [path for path in cleaned if path.endswith(config.suffix) and path not in special]
    specials = [path for path in cleaned if path in special]
    return tuple(_dedupe([*regular, *specials]))


class ChangeDetector:
    """Compute the :class:`ChangeSet` for a :class:`RevisionRange`."""

    def __init__(self, config: PRLintConfig, *, runner: GitRunner | None = None) -> None:
        self._config = config
        self._runner = runner or _default_runner

    def diff_names(self, revisions: RevisionRange, root: Path) -> list[str]:
        """Return the raw path list reported by ``git diff`` for ``revisions``."""
        cmd = ["git", "diff", "--name-only", f"--diff-filter={DIFF_FILTER}", *revisions.diff_args()]
        return self._runner(cmd, root)

    def detect(self, revisions: RevisionRange, root: Path) -> ChangeSet:
        """Return the changed Python files between the two revisions."""
        return ChangeSet(files=filter_changed_paths(self.diff_names(revisions, root), self._config))


def detect_changes(
    revisions: RevisionRange,
    root: Path,
    config: PRLintConfig,
    *,
    runner: GitRunner | None = None,
) -> ChangeSet:
    """Shortcut for ``ChangeDetector(config, runner=runner).detect(...)``."""

    return ChangeDetector(config, runner=runner).detect(revisions, root)


def report_changes(changes: ChangeSet, *, use_emoji: bool) -> None:
    """Log the change set the way the detection stage announces it."""

    if changes.has_python_changes:
        info(f"Changed Python files: {changes.joined()}", use_emoji=use_emoji)
    else:
        info("No Python files changed", use_emoji=use_emoji)


def pull_request_notice(changes: ChangeSet) -> str:
    """Return the pull-request information line for ``changes``."""

    if changes.has_python_changes:
        return "This PR contains Python changes that will be linted."
    return "This PR contains no Python changes, but still requires manual approval."


def report_pull_request(changes: ChangeSet, event: EventKind, *, use_emoji: bool) -> None:
    """Print the pull-request information line; pushes stay silent."""

    if event is EventKind.PULL_REQUEST:
        info(pull_request_notice(changes), use_emoji=use_emoji)


def _dedupe(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        ordered.append(item)
    return ordered


def _default_runner(cmd: Sequence[str], root: Path) -> list[str]:
    """Execute ``cmd`` returning stdout lines; git failures yield no lines.

    Args:
        cmd: Git command to execute.
        root: Repository root directory.

    Returns:
        list[str]: Raw stdout lines, or an empty list when git fails.
    """

    cp = run_command(cmd, CommandOptions(cwd=root, capture_output=True, check=False, discard_stdin=True))
    if cp.returncode != 0:
        detail = (cp.stderr or "").strip().splitlines()
        warn(f"git diff failed ({cp.returncode}): {detail[-1] if detail else 'no output'}", use_emoji=False)
        return []
    return (cp.stdout or "").splitlines()


__all__ = [
    "ChangeDetector",
    "ChangeSet",
    "FILES_KEY",
    "GitRunner",
    "HAS_CHANGES_KEY",
    "detect_changes",
    "filter_changed_paths",
    "pull_request_notice",
    "report_changes",
    "report_pull_request",
]
