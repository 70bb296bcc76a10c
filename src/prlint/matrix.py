# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run matrix entries: one independent execution per named tool."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from functools import partial
from subprocess import CompletedProcess
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .logging import echo_lines, fail, info, ok, section, warn
from .process import CommandOptions, CommandRunner, run_command
from .tools.base import Tool, ToolContext, ToolStep

MISSING_EXECUTABLE_RETURNCODE: Final[int] = 127
SKIP_MESSAGE: Final[str] = "No Python files were changed. Skipping linting."


def _coerce_lines(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.splitlines()
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


class StepOutcome(BaseModel):
    """Result of one executed :class:`ToolStep`."""

    model_config = ConfigDict(validate_assignment=True)

    description: str
    args: tuple[str, ...]
    returncode: int
    allow_failure: bool = False
    stdout: list[str] = Field(default_factory=list)
    stderr: list[str] = Field(default_factory=list)

    @field_validator("stdout", "stderr", mode="before")
    @classmethod
    def _coerce_output(cls, value: object) -> list[str]:
        return _coerce_lines(value)

    @property
    def ok(self) -> bool:
        """Return ``True`` when the step exited successfully."""
        return self.returncode == 0

    @property
    def blocking(self) -> bool:
        """Return ``True`` when the step failed and failures are not tolerated."""
        return not self.ok and not self.allow_failure


class ToolOutcome(BaseModel):
    """Result bundle produced by one matrix entry."""

    model_config = ConfigDict(validate_assignment=True)

    tool: str
    steps: list[StepOutcome] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when no blocking step failed."""
        return self.error is None and not any(step.blocking for step in self.steps)

    @property
    def returncode(self) -> int:
        """Return the exit status of the first blocking step, or ``0``."""
        for step in self.steps:
            if step.blocking:
                return step.returncode
        return 1 if self.error is not None else 0


class MatrixResult(BaseModel):
    """Aggregate result for all matrix entries."""

    model_config = ConfigDict(validate_assignment=True)

    outcomes: list[ToolOutcome] = Field(default_factory=list)
    skipped: bool = False

    @property
    def failed(self) -> bool:
        """Return ``True`` when any entry failed."""
        return any(not outcome.ok for outcome in self.outcomes)

    def failed_tools(self) -> list[str]:
        """Return names of failed entries in matrix order."""
        return [outcome.tool for outcome in self.outcomes if not outcome.ok]


def _default_step_runner(args: Sequence[str], options: CommandOptions) -> CompletedProcess[str]:
    return run_command(args, options)


class ToolRunner:
    """Execute the steps of a single :class:`Tool`.

    Steps run in order. A failing step stops the entry unless the step
    tolerates failure, in which case it is reported as a warning and the
    next step runs.
    """

    def __init__(self, *, runner: CommandRunner | None = None, capture: bool = False) -> None:
        self._runner = runner or _default_step_runner
        self._capture = capture

    def run(self, tool: Tool, ctx: ToolContext) -> ToolOutcome:
        """Run ``tool`` for ``ctx`` and return its outcome."""
        outcome = ToolOutcome(tool=tool.name)
        try:
            with tool.prepare(ctx):
                for step in tool.steps(ctx):
                    result = self._run_step(step, ctx)
                    outcome.steps.append(result)
                    if result.blocking:
                        break
        except OSError as exc:
            outcome.error = f"{tool.name} could not be prepared: {exc}"
            if not self._capture:
                fail(outcome.error, use_emoji=ctx.use_emoji)
        return outcome

    def _run_step(self, step: ToolStep, ctx: ToolContext) -> StepOutcome:
        # Captured runs stay silent; run_matrix replays their messages in order.
        announce = not self._capture
        if announce:
            info(step.description, use_emoji=ctx.use_emoji)
        options = CommandOptions(
            cwd=ctx.root,
            check=False,
            capture_output=self._capture,
            timeout=ctx.config.timeout,
            discard_stdin=True,
        )
        try:
            completed = self._runner(step.args, options)
        except FileNotFoundError as exc:
            if announce:
                fail(str(exc), use_emoji=ctx.use_emoji)
            return StepOutcome(
                description=step.description,
                args=step.args,
                returncode=MISSING_EXECUTABLE_RETURNCODE,
                allow_failure=step.allow_failure,
                stderr=str(exc),
            )
        result = StepOutcome(
            description=step.description,
            args=step.args,
            returncode=completed.returncode,
            allow_failure=step.allow_failure,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
        if announce and not result.ok and step.allow_failure:
            warn(_tolerated_message(result), use_emoji=ctx.use_emoji)
        return result


def run_tool(tool: Tool, ctx: ToolContext, *, runner: CommandRunner | None = None) -> ToolOutcome:
    """Run a single matrix entry with output streamed to the console."""

    if not ctx.changes.has_python_changes:
        info(SKIP_MESSAGE, use_emoji=ctx.use_emoji)
        return ToolOutcome(tool=tool.name)
    return ToolRunner(runner=runner).run(tool, ctx)


def run_matrix(
    tools: Sequence[Tool],
    ctx: ToolContext,
    *,
    jobs: int | None = None,
    runner: CommandRunner | None = None,
) -> MatrixResult:
    """Run every tool in ``tools`` as an independent matrix entry.

    Read-only entries run concurrently; entries that write into the working
    tree (``Tool.mutates_worktree``) then run one at a time, in matrix order,
    so no entry observes another's edits half-applied. Output is captured and
    replayed per tool in matrix order once all entries have finished. One
    entry failing never cancels its siblings.

    Args:
        tools: Matrix entries to execute.
        ctx: Shared execution context.
        jobs: Maximum concurrent entries; defaults to ``ctx.config.jobs``.
        runner: Optional command runner used in place of :func:`run_command`.

    Returns:
        MatrixResult: Outcomes ordered like ``tools``.
    """

    if not ctx.changes.has_python_changes:
        info(SKIP_MESSAGE, use_emoji=ctx.use_emoji)
        return MatrixResult(skipped=True)

    tool_runner = ToolRunner(runner=runner, capture=True)
    concurrent = [(index, tool) for index, tool in enumerate(tools) if not tool.mutates_worktree]
    serial = [(index, tool) for index, tool in enumerate(tools) if tool.mutates_worktree]
    ordered: dict[int, ToolOutcome] = {}
    if concurrent:
        workers = max(1, min(jobs or ctx.config.jobs, len(concurrent)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_map = {executor.submit(partial(tool_runner.run, tool, ctx)): index for index, tool in concurrent}
            for future in as_completed(future_map):
                ordered[future_map[future]] = future.result()
    for index, tool in serial:
        ordered[index] = tool_runner.run(tool, ctx)

    result = MatrixResult(outcomes=[ordered[index] for index in range(len(tools))])
    for outcome in result.outcomes:
        _replay(outcome, use_emoji=ctx.use_emoji)
    return result


def _tolerated_message(step: StepOutcome) -> str:
    return f"'{step.args[0]}' exited with {step.returncode}; continuing"


def _replay(outcome: ToolOutcome, *, use_emoji: bool) -> None:
    section(outcome.tool)
    for step in outcome.steps:
        info(step.description, use_emoji=use_emoji)
        echo_lines(step.stdout)
        echo_lines(step.stderr)
        if not step.ok and step.allow_failure:
            warn(_tolerated_message(step), use_emoji=use_emoji)
    if outcome.error:
        fail(outcome.error, use_emoji=use_emoji)
    if outcome.ok:
        ok(f"{outcome.tool} passed", use_emoji=use_emoji)
    else:
        fail(f"{outcome.tool} failed", use_emoji=use_emoji)


__all__ = [
    "MISSING_EXECUTABLE_RETURNCODE",
    "MatrixResult",
    "SKIP_MESSAGE",
    "StepOutcome",
    "ToolOutcome",
    "ToolRunner",
    "run_matrix",
    "run_tool",
]
