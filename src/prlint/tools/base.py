# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Definitions for matrix tools and the command steps they run."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..changes import ChangeSet
from ..config import PRLintConfig


class ToolContext(BaseModel):
    """Everything a tool needs to build its commands for one matrix entry."""

    model_config = ConfigDict(frozen=True)

    root: Path
    config: PRLintConfig
    changes: ChangeSet
    python: str = Field(default_factory=lambda: sys.executable or "python")
    use_emoji: bool = True
    keep_generated: bool = False

    @property
    def files(self) -> tuple[str, ...]:
        """Return the changed files the tool should inspect."""
        return self.changes.files


class ToolStep(BaseModel):
    """A single command executed by a matrix entry."""

    model_config = ConfigDict(frozen=True)

    description: str
    args: tuple[str, ...]
    allow_failure: bool = False

    @field_validator("args")
    @classmethod
    def _require_command(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("a tool step requires at least one argument")
        return value


StepBuilder = Callable[[ToolContext], Sequence[ToolStep]]
Preparer = Callable[[ToolContext], AbstractContextManager[object]]


def _no_preparation(_ctx: ToolContext) -> AbstractContextManager[object]:
    return nullcontext()


@dataclass(frozen=True, slots=True)
class Tool:
    """Named matrix entry.

    ``build`` returns the ordered steps; ``prepare`` wraps their execution,
    which lets a tool create (and remove) scratch files such as a generated
    tox configuration. Tools that write into the working tree set
    ``mutates_worktree`` so the local matrix never runs them alongside others.
    """

    name: str
    description: str
    build: StepBuilder
    prepare: Preparer = _no_preparation
    mutates_worktree: bool = False

    def steps(self, ctx: ToolContext) -> list[ToolStep]:
        """Return the steps for ``ctx`` as a list."""
        return list(self.build(ctx))


__all__ = ["Preparer", "StepBuilder", "Tool", "ToolContext", "ToolStep"]
