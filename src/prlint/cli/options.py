# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared option helpers for prlint CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Final

import typer

from ..changes import ChangeSet
from ..config import PRLintConfig, load_config
from ..errors import PRLintError
from ..logging import fail

TRUTHY_LITERALS: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
FALSY_LITERALS: Final[frozenset[str]] = frozenset({"0", "false", "no", "off", ""})

FILES_ENVVAR: Final[str] = "PRLINT_FILES"
HAS_CHANGES_ENVVAR: Final[str] = "PRLINT_HAS_PYTHON_CHANGES"


def coerce_flag(value: str) -> bool:
    """Return the boolean spelled by a CI output value such as ``"true"``.

    Raises:
        typer.BadParameter: If ``value`` is not a recognised literal.
    """

    normalized = value.strip().lower()
    if normalized in TRUTHY_LITERALS:
        return True
    if normalized in FALSY_LITERALS:
        return False
    raise typer.BadParameter(f"Unsupported boolean literal: {value!r}")


def resolve_changes(files: str | None, has_python_changes: str | None) -> ChangeSet:
    """Combine the detection stage's two outputs into a :class:`ChangeSet`.

    An explicit ``false`` flag wins over a non-empty file list so that the
    flag alone can switch the matrix off.
    """

    changes = ChangeSet.parse(files)
    if has_python_changes is not None and not coerce_flag(has_python_changes):
        return ChangeSet()
    return changes


def load_cli_config(root: Path, *, use_emoji: bool, **overrides: Any) -> PRLintConfig:
    """Load configuration for ``root`` translating errors into ``typer.Exit``."""

    try:
        return load_config(root, overrides)
    except PRLintError as exc:
        fail(str(exc), use_emoji=use_emoji)
        raise typer.Exit(code=exc.exit_code) from exc


def root_option() -> Any:
    return typer.Option(Path("."), "--root", "-r", help="Repository root.", file_okay=False, resolve_path=True)


def emoji_option() -> Any:
    return typer.Option(True, "--emoji/--no-emoji", help="Toggle emoji in CLI output.")


def files_option() -> Any:
    return typer.Option(
        None,
        "--files",
        envvar=FILES_ENVVAR,
        help="Space separated changed files produced by 'prlint detect'.",
    )


def has_changes_option() -> Any:
    return typer.Option(
        None,
        "--has-python-changes",
        envvar=HAS_CHANGES_ENVVAR,
        help="Detection flag ('true' or 'false'); derived from --files when omitted.",
    )


__all__ = [
    "FILES_ENVVAR",
    "HAS_CHANGES_ENVVAR",
    "coerce_flag",
    "emoji_option",
    "files_option",
    "has_changes_option",
    "load_cli_config",
    "resolve_changes",
    "root_option",
]
