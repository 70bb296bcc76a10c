# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Publish job outputs and step summaries to the CI runner."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

OUTPUT_VAR: Final[str] = "GITHUB_OUTPUT"
STEP_SUMMARY_VAR: Final[str] = "GITHUB_STEP_SUMMARY"


def _target(var: str, env: Mapping[str, str] | None) -> Path | None:
    source = os.environ if env is None else env
    value = (source.get(var) or "").strip()
    return Path(value) if value else None


def write_outputs(values: Mapping[str, str], *, env: Mapping[str, str] | None = None) -> bool:
    """Append ``key=value`` lines to the file named by ``$GITHUB_OUTPUT``.

    Args:
        values: Output names mapped to single-line values.
        env: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        bool: ``True`` when the outputs were written, ``False`` when the
        variable is unset.

    Raises:
        ValueError: If a value spans multiple lines.
    """

    path = _target(OUTPUT_VAR, env)
    if path is None:
        return False
    lines = []
    for key, value in values.items():
        if "\n" in value:
            raise ValueError(f"Output '{key}' must be a single line")
        lines.append(f"{key}={value}\n")
    with path.open("a", encoding="utf-8") as handle:
        handle.writelines(lines)
    return True


def append_step_summary(markdown: str, *, env: Mapping[str, str] | None = None) -> bool:
    """Append ``markdown`` to the file named by ``$GITHUB_STEP_SUMMARY``."""

    path = _target(STEP_SUMMARY_VAR, env)
    if path is None:
        return False
    text = markdown if markdown.endswith("\n") else f"{markdown}\n"
    with path.open("a", encoding="utf-8") as handle:
        handle.write(text)
    return True


__all__ = ["OUTPUT_VAR", "STEP_SUMMARY_VAR", "append_step_summary", "write_outputs"]
