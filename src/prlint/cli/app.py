# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .detect import detect_command
from .install import cache_key_command, install_command
from .run import matrix_command, run_tool_command, tools_command
from .summary import summary_command, tox_config_command

app = typer.Typer(
    name="prlint",
    help="Lint only the Python files a pull request or push changed.",
    no_args_is_help=True,
    add_completion=False,
)

app.command("detect")(detect_command)
app.command("run")(run_tool_command)
app.command("matrix")(matrix_command)
app.command("summary")(summary_command)
app.command("tox-config")(tox_config_command)
app.command("install")(install_command)
app.command("cache-key")(cache_key_command)
app.command("tools")(tools_command)

__all__ = ["app"]
