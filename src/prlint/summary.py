# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render the pull-request lint summary."""

from __future__ import annotations

from typing import Final

from .matrix import MatrixResult

TITLE: Final[str] = "## Pull Request Lint Results"
LINTED_LINES: Final[tuple[str, ...]] = (
    "Linting has completed for all Python files changed in this PR.",
    "See individual job logs for detailed results.",
)
SKIPPED_LINE: Final[str] = "No Python files were changed in this PR. Linting was skipped."
APPROVAL_NOTE: Final[str] = "⚠️ **Note:** This PR still requires manual approval regardless of linting results."


def _results_table(result: MatrixResult) -> list[str]:
    rows = ["| Tool | Result |", "| --- | --- |"]
    for outcome in result.outcomes:
        status = "passed" if outcome.ok else f"failed (exit {outcome.returncode})"
        rows.append(f"| `{outcome.tool}` | {status} |")
    return rows


def render_summary(has_python_changes: bool, result: MatrixResult | None = None) -> str:
    """Return the markdown summary.

    Args:
        has_python_changes: Whether the detection stage found Python changes.
        result: Matrix outcomes when they are known to the caller, which adds
            a per-tool table.

    Returns:
        str: Markdown text ending with a newline.
    """

    lines = [TITLE]
    if has_python_changes:
        lines.extend(LINTED_LINES)
        if result is not None and result.outcomes:
            lines.append("")
            lines.extend(_results_table(result))
    else:
        lines.append(SKIPPED_LINE)
    lines.append("")
    lines.append(APPROVAL_NOTE)
    return "\n".join(lines) + "\n"


__all__ = ["APPROVAL_NOTE", "SKIPPED_LINE", "TITLE", "render_summary"]
