# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dependency installation for matrix entries and the matching pip cache key."""

from __future__ import annotations

import hashlib
import platform
import sys
from pathlib import Path

from .errors import ConfigError
from .logging import info
from .process import CommandOptions, run_command


def manifest_checksum(manifest: Path) -> str:
    """Return the SHA-256 digest of ``manifest``."""

    hasher = hashlib.sha256()
    hasher.update(manifest.read_bytes())
    return hasher.hexdigest()


def dependency_cache_key(root: Path, manifest: str, *, system: str | None = None) -> str:
    """Return the pip cache key ``<os>-pip-<digest>`` for ``manifest``.

    Args:
        root: Repository root holding the manifest.
        manifest: Manifest path relative to ``root``.
        system: Operating system label; defaults to :func:`platform.system`.

    Returns:
        str: Cache key. A missing manifest hashes as empty, yielding the
        bare ``<os>-pip-`` restore prefix.
    """

    os_name = system or platform.system()
    path = root / manifest
    digest = manifest_checksum(path) if path.is_file() else ""
    return f"{os_name}-pip-{digest}"


def install_commands(manifest: str, *, python: str | None = None) -> list[list[str]]:
    """Return the pip commands that install the development dependencies."""

    interpreter = python or sys.executable
    return [
        [interpreter, "-m", "pip", "install", "--upgrade", "pip"],
        [interpreter, "-m", "pip", "install", "-r", manifest],
    ]


def install_dependencies(
    root: Path,
    manifest: str,
    *,
    python: str | None = None,
    use_emoji: bool = True,
) -> None:
    """Upgrade pip and install ``manifest`` into the active interpreter.

    Raises:
        ConfigError: If the manifest does not exist.
        SubprocessExecutionError: If pip exits with a non-zero status.
    """

    if not (root / manifest).is_file():
        raise ConfigError(f"Dependency manifest {manifest} not found in {root}")
    for command in install_commands(manifest, python=python):
        info(" ".join(command), use_emoji=use_emoji)
        run_command(command, CommandOptions(cwd=root, check=True))


__all__ = [
    "dependency_cache_key",
    "install_commands",
    "install_dependencies",
    "manifest_checksum",
]
