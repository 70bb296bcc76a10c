# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``prlint run``, ``prlint matrix`` and ``prlint tools`` commands."""

from __future__ import annotations

from pathlib import Path

import typer

from ..changes import detect_changes, report_changes, report_pull_request
from ..errors import PRLintError
from ..events import EventKind, RevisionRange
from ..logging import echo, fail, ok, section
from ..matrix import run_matrix, run_tool
from ..outputs import append_step_summary
from ..summary import render_summary
from ..tools import ToolContext, default_registry
from .options import (
    emoji_option,
    files_option,
    has_changes_option,
    load_cli_config,
    resolve_changes,
    root_option,
)


def run_tool_command(
    tool: str = typer.Argument(..., help="Matrix entry to run (see 'prlint tools')."),
    root: Path = root_option(),
    files: str | None = files_option(),
    has_python_changes: str | None = has_changes_option(),
    keep_generated: bool = typer.Option(
        False,
        "--keep-generated/--no-keep-generated",
        help="Keep generated scratch files such as the tox configuration.",
    ),
    emoji: bool = emoji_option(),
) -> None:
    """Run one matrix entry against the changed files."""
    config = load_cli_config(root, use_emoji=emoji)
    try:
        selected = default_registry().resolve(tool)
    except PRLintError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=exc.exit_code) from exc

    changes = resolve_changes(files, has_python_changes)
    ctx = ToolContext(root=root, config=config, changes=changes, use_emoji=emoji, keep_generated=keep_generated)
    outcome = run_tool(selected, ctx)
    if not outcome.ok:
        fail(f"{selected.name} failed", use_emoji=emoji)
        raise typer.Exit(code=1)
    ok(f"{selected.name} passed", use_emoji=emoji)
    raise typer.Exit(code=0)


def matrix_command(
    root: Path = root_option(),
    tools: list[str] | None = typer.Option(
        None,
        "--tool",
        "-t",
        help="Restrict the matrix to these tools (repeatable).",
    ),
    event: str | None = typer.Option(None, "--event", help="Event name (pull_request or push)."),
    base_ref: str | None = typer.Option(None, "--base-ref", help="Pull-request base branch."),
    before: str | None = typer.Option(None, "--before", help="Push 'before' SHA."),
    after: str | None = typer.Option(None, "--after", help="Push 'after' SHA."),
    files: str | None = typer.Option(
        None,
        "--files",
        help="Skip detection and lint these space separated files.",
    ),
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help="Concurrent matrix entries."),
    emoji: bool = emoji_option(),
) -> None:
    """Detect changes, run every matrix entry and print the summary."""
    config = load_cli_config(root, use_emoji=emoji, jobs=jobs)
    registry = default_registry()
    try:
        selected = registry.select(tools or config.tools)
        if files is not None:
            changes = resolve_changes(files, None)
            event_kind: EventKind | None = None
        else:
            revisions = RevisionRange.from_environment(event=event, base_ref=base_ref, before=before, after=after)
            changes = detect_changes(revisions, root, config)
            event_kind = revisions.event
    except PRLintError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=exc.exit_code) from exc

    report_changes(changes, use_emoji=emoji)
    if event_kind is not None:
        report_pull_request(changes, event_kind, use_emoji=emoji)

    ctx = ToolContext(root=root, config=config, changes=changes, use_emoji=emoji)
    result = run_matrix(selected, ctx)

    summary = render_summary(changes.has_python_changes, result)
    section("Summary")
    if not append_step_summary(summary):
        for line in summary.splitlines():
            echo(line)
    if result.failed:
        fail(f"Failed matrix entries: {', '.join(result.failed_tools())}", use_emoji=emoji)
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


def tools_command() -> None:
    """List the available matrix entries."""
    for name, tool in default_registry().items():
        echo(f"{name:<10} {tool.description}")


__all__ = ["matrix_command", "run_tool_command", "tools_command"]
