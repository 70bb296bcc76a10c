# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in matrix tools: flake8, format, mypy, pytest, pyupgrade and tox."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import PurePosixPath
from typing import Final

from ..logging import echo, echo_lines, info
from ..toxgen import temporary_tox_config
from .base import Tool, ToolContext, ToolStep

TOX_BANNER: Final[str] = "======================== TOX CONFIG ========================"
TOX_FOOTER: Final[str] = "==========================================================="


def _flake8_steps(ctx: ToolContext) -> list[ToolStep]:
    return [
        ToolStep(
            description=f"Linting files: {ctx.changes.joined()}",
            args=("flake8", *ctx.files, "--count", "--show-source", "--statistics"),
        )
    ]


def _format_steps(ctx: ToolContext) -> list[ToolStep]:
    return [
        ToolStep(
            description=f"Checking format with isort for: {ctx.changes.joined()}",
            args=("isort", "--profile", "black", "--check", *ctx.files),
        ),
        ToolStep(
            description=f"Checking format with black for: {ctx.changes.joined()}",
            args=("black", "--check", *ctx.files),
        ),
    ]


def _mypy_steps(ctx: ToolContext) -> list[ToolStep]:
    return [
        ToolStep(
            description=f"Type checking: {ctx.changes.joined()}",
            args=("mypy", "--ignore-missing-imports", *ctx.files),
        )
    ]


def module_path_for(file: str) -> str:
    """Convert ``pkg/sub/mod.py`` into ``pkg.sub.mod``."""

    path = PurePosixPath(file)
    return ".".join(path.with_suffix("").parts)


def _pytest_steps(ctx: ToolContext) -> list[ToolStep]:
    python = ctx.python
    steps = [
        ToolStep(
            description="Running pytest discovery...",
            args=(python, "-m", "pytest", "--collect-only", "-v"),
        )
    ]
    for file in ctx.changes.under(ctx.config.package_dir):
        module = module_path_for(file)
        steps.append(
            ToolStep(
                description=f"Testing module: {module}",
                args=(python, "-m", "pytest", "-xvs", f"{ctx.config.tests_dir}/", "-k", module),
                allow_failure=True,
            )
        )
    for file in ctx.files:
        if not file.endswith(".py"):
            continue
        steps.append(
            ToolStep(
                description=f"Running doctest for {file}",
                args=(python, "-m", "pytest", "--doctest-modules", "-v", file),
                allow_failure=True,
            )
        )
    return steps


def _pyupgrade_steps(ctx: ToolContext) -> list[ToolStep]:
    return [
        ToolStep(
            description=f"Checking Python version compatibility ({ctx.config.python_target}+)",
            args=("pyupgrade", f"--{ctx.config.python_target}-plus", *ctx.files),
        )
    ]


def _tox_steps(ctx: ToolContext) -> list[ToolStep]:
    return [
        ToolStep(
            description="Running tox with custom PR configuration...",
            args=("tox", "-c", ctx.config.tox_config),
        )
    ]


@contextmanager
def _tox_prepare(ctx: ToolContext) -> Iterator[object]:
    info("Running tox integration for changed files...", use_emoji=ctx.use_emoji)
    with temporary_tox_config(ctx.changes, ctx.config, ctx.root, keep=ctx.keep_generated) as (path, tox):
        echo(TOX_BANNER)
        echo_lines(tox.render().splitlines())
        echo(TOX_FOOTER)
        yield path


BUILTIN_TOOLS: Final[tuple[Tool, ...]] = (
    Tool(name="flake8", description="Lint with flake8.", build=_flake8_steps),
    Tool(name="format", description="Check formatting with isort and black.", build=_format_steps),
    Tool(name="mypy", description="Type check with mypy.", build=_mypy_steps),
    Tool(name="pytest", description="Run targeted tests and doctests with pytest.", build=_pytest_steps),
    Tool(
        name="pyupgrade",
        description="Check Python version compatibility.",
        build=_pyupgrade_steps,
        mutates_worktree=True,
    ),
    Tool(
        name="tox",
        description="Run tox with a configuration generated for the changed files.",
        build=_tox_steps,
        prepare=_tox_prepare,
        mutates_worktree=True,
    ),
)


__all__ = ["BUILTIN_TOOLS", "module_path_for"]
