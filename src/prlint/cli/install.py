# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``prlint install`` and ``prlint cache-key`` commands."""

from __future__ import annotations

from pathlib import Path

import typer

from ..deps import dependency_cache_key, install_dependencies
from ..errors import PRLintError
from ..logging import echo, fail, info, ok
from ..process import SubprocessExecutionError
from .options import emoji_option, load_cli_config, root_option


def install_command(
    root: Path = root_option(),
    emoji: bool = emoji_option(),
) -> None:
    """Upgrade pip and install the development dependency manifest."""
    config = load_cli_config(root, use_emoji=emoji)
    info(f"Installing dependencies from {config.requirements}", use_emoji=emoji)
    try:
        install_dependencies(root, config.requirements, use_emoji=emoji)
    except PRLintError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=exc.exit_code) from exc
    except FileNotFoundError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=1) from exc
    except SubprocessExecutionError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=exc.returncode or 1) from exc
    ok("Dependency installation complete.", use_emoji=emoji)
    raise typer.Exit(code=0)


def cache_key_command(
    root: Path = root_option(),
    system: str | None = typer.Option(None, "--os", help="Runner OS label (defaults to the host OS)."),
) -> None:
    """Print the pip cache key derived from the dependency manifest."""
    config = load_cli_config(root, use_emoji=False)
    echo(dependency_cache_key(root, config.requirements, system=system))


__all__ = ["cache_key_command", "install_command"]
