# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``prlint summary`` and ``prlint tox-config`` commands."""

from __future__ import annotations

from pathlib import Path

import typer

from ..logging import echo, ok, warn
from ..outputs import append_step_summary
from ..summary import render_summary
from ..toxgen import build_tox_config
from .options import (
    coerce_flag,
    emoji_option,
    files_option,
    has_changes_option,
    load_cli_config,
    resolve_changes,
    root_option,
)


def summary_command(
    has_python_changes: str | None = has_changes_option(),
    emoji: bool = emoji_option(),
) -> None:
    """Write the lint summary to the step summary (or stdout)."""
    has_changes = False
    if has_python_changes is not None:
        try:
            has_changes = coerce_flag(has_python_changes)
        except typer.BadParameter:
            warn(
                f"Unrecognised has_python_changes value {has_python_changes!r}; reporting linting as skipped",
                use_emoji=emoji,
            )
    markdown = render_summary(has_changes)
    if append_step_summary(markdown):
        ok("Step summary written.", use_emoji=emoji)
    else:
        for line in markdown.splitlines():
            echo(line)
    raise typer.Exit(code=0)


def tox_config_command(
    root: Path = root_option(),
    files: str | None = files_option(),
    has_python_changes: str | None = has_changes_option(),
    write: bool = typer.Option(
        False,
        "--write/--print",
        help="Write the configuration to the configured file instead of printing it.",
    ),
    emoji: bool = emoji_option(),
) -> None:
    """Show the tox configuration generated for the changed files."""
    config = load_cli_config(root, use_emoji=emoji)
    changes = resolve_changes(files, has_python_changes)
    text = build_tox_config(changes, config, root).render()
    if write:
        target = root / config.tox_config
        target.write_text(text, encoding="utf-8")
        ok(f"Wrote {target}", use_emoji=emoji)
    else:
        for line in text.splitlines():
            echo(line)
    raise typer.Exit(code=0)


__all__ = ["summary_command", "tox_config_command"]
