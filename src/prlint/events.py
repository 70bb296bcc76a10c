# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the revision pair that a pull request or push should be diffed over."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict

from .errors import EventError

EVENT_NAME_VAR: Final[str] = "GITHUB_EVENT_NAME"
BASE_REF_VAR: Final[str] = "GITHUB_BASE_REF"
EVENT_PATH_VAR: Final[str] = "GITHUB_EVENT_PATH"

ZERO_SHA: Final[str] = "0" * 40
# ``git hash-object -t tree /dev/null``
EMPTY_TREE_SHA: Final[str] = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


class EventKind(str, Enum):
    """Trigger events that open the gate."""

    PULL_REQUEST = "pull_request"
    PUSH = "push"


class RevisionRange(BaseModel):
    """Pair of git revisions bounding the change set."""

    model_config = ConfigDict(frozen=True)

    event: EventKind
    base: str
    head: str

    @classmethod
    def for_pull_request(cls, base_ref: str, *, remote: str = "origin", head: str = "HEAD") -> RevisionRange:
        """Compare the remote tracking copy of ``base_ref`` against ``head``."""

        if not base_ref:
            raise EventError("pull_request events require a base ref")
        return cls(event=EventKind.PULL_REQUEST, base=f"{remote}/{base_ref}", head=head)

    @classmethod
    def for_push(cls, before: str, after: str) -> RevisionRange:
        """Compare the ``before`` and ``after`` SHAs of a push.

        A branch creation reports an all-zero ``before`` SHA; the diff then
        starts from the empty tree so every file on the branch counts.
        """

        if not before or not after:
            raise EventError("push events require both 'before' and 'after' revisions")
        base = EMPTY_TREE_SHA if before == ZERO_SHA else before
        return cls(event=EventKind.PUSH, base=base, head=after)

    @classmethod
    def from_environment(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        event: str | None = None,
        base_ref: str | None = None,
        before: str | None = None,
        after: str | None = None,
    ) -> RevisionRange:
        """Build a range from the CI environment, preferring explicit overrides.

        Args:
            env: Environment mapping; defaults to :data:`os.environ`.
            event: Event name override.
            base_ref: Pull-request base branch override.
            before: Push ``before`` SHA override.
            after: Push ``after`` SHA override.

        Returns:
            RevisionRange: Range for the detected event.

        Raises:
            EventError: If the event is unsupported or required data is missing.
        """

        source = os.environ if env is None else env
        event_name = event or source.get(EVENT_NAME_VAR, "")
        try:
            kind = EventKind(event_name)
        except ValueError as exc:
            raise EventError(f"Unsupported event '{event_name or '<unset>'}'; expected pull_request or push") from exc

        if kind is EventKind.PULL_REQUEST:
            return cls.for_pull_request(base_ref or source.get(BASE_REF_VAR, ""))

        if before is None or after is None:
            payload = _load_event_payload(source.get(EVENT_PATH_VAR))
            before = before or str(payload.get("before") or "")
            after = after or str(payload.get("after") or "")
        return cls.for_push(before, after)

    def diff_args(self) -> list[str]:
        """Return the revision arguments passed to ``git diff``."""
        return [self.base, self.head]


def _load_event_payload(path: str | None) -> Mapping[str, object]:
    if not path:
        return {}
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise EventError(f"Unable to read event payload at {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise EventError(f"Event payload at {path} must be a JSON object")
    return payload


__all__ = ["EMPTY_TREE_SHA", "EventKind", "RevisionRange", "ZERO_SHA"]
