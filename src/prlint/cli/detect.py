# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``prlint detect`` command."""

from __future__ import annotations

from pathlib import Path

import typer

from ..changes import detect_changes, report_changes, report_pull_request
from ..errors import EventError
from ..events import RevisionRange
from ..logging import echo, fail
from ..outputs import write_outputs
from .options import emoji_option, load_cli_config, root_option


def detect_command(
    root: Path = root_option(),
    event: str | None = typer.Option(
        None,
        "--event",
        help="Event name (pull_request or push); defaults to $GITHUB_EVENT_NAME.",
    ),
    base_ref: str | None = typer.Option(None, "--base-ref", help="Pull-request base branch."),
    before: str | None = typer.Option(None, "--before", help="Push 'before' SHA."),
    after: str | None = typer.Option(None, "--after", help="Push 'after' SHA."),
    emoji: bool = emoji_option(),
) -> None:
    """Detect changed Python files and publish them as job outputs."""
    config = load_cli_config(root, use_emoji=emoji)
    try:
        revisions = RevisionRange.from_environment(event=event, base_ref=base_ref, before=before, after=after)
    except EventError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=exc.exit_code) from exc

    changes = detect_changes(revisions, root, config)
    report_changes(changes, use_emoji=emoji)

    outputs = changes.as_outputs()
    if not write_outputs(outputs):
        for key, value in outputs.items():
            echo(f"{key}={value}")
    report_pull_request(changes, revisions.event, use_emoji=emoji)
    raise typer.Exit(code=0)


__all__ = ["detect_command"]
