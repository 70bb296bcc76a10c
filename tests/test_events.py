# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for revision range resolution from CI events."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from prlint.errors import EventError
from prlint.events import EMPTY_TREE_SHA, EventKind, RevisionRange


def test_pull_request_uses_remote_base_branch() -> None:
    revisions = RevisionRange.from_environment({"GITHUB_EVENT_NAME": "pull_request", "GITHUB_BASE_REF": "develop"})

    assert revisions.event is EventKind.PULL_REQUEST
    assert revisions.diff_args() == ["origin/develop", "HEAD"]


def test_push_reads_before_and_after_from_event_payload(tmp_path: Path) -> None:
    payload = tmp_path / "event.json"
    payload.write_text(json.dumps({"before": "abc123", "after": "def456"}), encoding="utf-8")

    revisions = RevisionRange.from_environment({"GITHUB_EVENT_NAME": "push", "GITHUB_EVENT_PATH": str(payload)})

    assert revisions.event is EventKind.PUSH
    assert (revisions.base, revisions.head) == ("abc123", "def456")


def test_explicit_overrides_win_over_environment() -> None:
    revisions = RevisionRange.from_environment(
        {"GITHUB_EVENT_NAME": "pull_request", "GITHUB_BASE_REF": "main"},
        event="push",
        before="111",
        after="222",
    )

    assert revisions.diff_args() == ["111", "222"]


def test_branch_creation_push_starts_from_empty_tree() -> None:
    revisions = RevisionRange.for_push("0" * 40, "abc")

    assert revisions.base == EMPTY_TREE_SHA


@pytest.mark.parametrize(
    "env",
    [
        {},
        {"GITHUB_EVENT_NAME": "workflow_dispatch"},
        {"GITHUB_EVENT_NAME": "pull_request"},
        {"GITHUB_EVENT_NAME": "push"},
    ],
)
def test_unresolvable_events_raise(env: dict[str, str]) -> None:
    with pytest.raises(EventError):
        RevisionRange.from_environment(env)


def test_unreadable_payload_raises(tmp_path: Path) -> None:
    payload = tmp_path / "event.json"
    payload.write_text("not json", encoding="utf-8")

    with pytest.raises(EventError, match="Unable to read event payload"):
        RevisionRange.from_environment({"GITHUB_EVENT_NAME": "push", "GITHUB_EVENT_PATH": str(payload)})
