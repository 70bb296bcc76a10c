# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Generate a throwaway tox configuration targeting the changed files.

The generated file mirrors the project's regular tox environment but its
``commands`` only exercise tests related to the changed modules:

* implementation files under the package directory run their dedicated test
  module (when one exists), a keyword-selected sweep of their category's test
  directory, and their doctests;
* changed test modules run directly;
* when nothing targeted was found a broad ``-k "not integration"`` run keeps
  coverage data flowing.

Commands prefixed with ``-`` are tolerated by tox when they fail; only the
exploratory keyword sweep uses it.
"""

from __future__ import annotations

import json
import shlex
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Final

from .changes import ChangeSet
from .config import PRLintConfig

INDENT: Final[str] = "    "
TOLERANT_PREFIX: Final[str] = "- "
NO_TESTS_HINT: Final[str] = "No specific tests found for changed files. Consider adding tests."


@dataclass(slots=True)
class ToxConfig:
    """Rendered tox configuration plus bookkeeping used by callers and tests."""

    header: list[str]
    commands: list[str] = field(default_factory=list)
    has_targeted_tests: bool = False

    def render(self) -> str:
        """Return the INI document text."""
        lines = [*self.header, *(f"{INDENT}{command}" for command in self.commands)]
        return "\n".join(lines) + "\n"


def _print_command(message: str) -> str:
    return "python -c " + shlex.quote(f"print({json.dumps(message)})")


def _category_for(file: str, config: PRLintConfig) -> str | None:
    relative = PurePosixPath(file).relative_to(config.package_dir).parts
    if len(relative) > 1 and relative[0] in config.categories:
        return relative[0]
    return None


def _header(config: PRLintConfig) -> list[str]:
    return [
        "[tox]",
        f"envlist = {config.tox_env}",
        "skip_missing_interpreters = true",
        "[testenv]",
        "setenv =",
        f"{INDENT}COVERAGE_FILE = .coverage.{{envname}}",
        "deps =",
        f"{INDENT}-r {config.requirements}",
        "allowlist_externals =",
        f"{INDENT}pytest",
        f"{INDENT}coverage",
        f"{INDENT}python",
        "commands =",
    ]


def build_tox_config(changes: ChangeSet, config: PRLintConfig, root: Path) -> ToxConfig:
    """Build the tox configuration for ``changes``.

    Args:
        changes: Changed files reported by the detection stage.
        config: Active configuration naming the package and tests directories.
        root: Repository root used to check whether dedicated tests exist.

    Returns:
        ToxConfig: Configuration ready to be rendered and written.
    """

    cov = f"--cov={shlex.quote(config.package_dir)} --cov-append"
    tox = ToxConfig(header=_header(config))
    tox.commands.append("# Run specific tests for changed files")

    sources = set(changes.under(config.package_dir))
    tests = set(changes.under(config.tests_dir))
    for file in changes.files:
        if not file.endswith(".py"):
            continue
        quoted = shlex.quote(file)

        if file in sources:
            module_name = PurePosixPath(file).stem
            category = _category_for(file, config)
            tox.commands.append(f"# Testing {file}")
            if category is not None:
                category_dir = f"{config.tests_dir}/{category}/"
                test_path = f"{category_dir}test_{module_name}.py"
                if (root / test_path).is_file():
                    tox.commands.append(_print_command(f"Test file {test_path} exists: true"))
                    tox.commands.append(f"coverage run -m pytest -xvs {cov} {shlex.quote(test_path)}")
                else:
                    tox.commands.append(_print_command(f"Test file {test_path} exists: false"))
                tox.commands.append(
                    f"{TOLERANT_PREFIX}coverage run -m pytest -xvs {cov} "
                    f"{shlex.quote(category_dir)} -k {shlex.quote(module_name)} --no-header"
                )
            tox.commands.append(f"coverage run -m pytest --doctest-modules -v {cov} {quoted}")
            tox.has_targeted_tests = True

        if file in tests:
            tox.commands.append(f"coverage run -m pytest -xvs {cov} {quoted}")
            tox.has_targeted_tests = True

    if not tox.has_targeted_tests:
        tox.commands.append(_print_command(NO_TESTS_HINT))
        tox.commands.append(f"coverage run -m pytest -xvs {cov} -k {shlex.quote('not integration')} --no-header")

    tox.commands.append("coverage combine")
    tox.commands.append("coverage report -m")
    return tox


@contextmanager
def temporary_tox_config(
    changes: ChangeSet,
    config: PRLintConfig,
    root: Path,
    *,
    keep: bool = False,
) -> Iterator[tuple[Path, ToxConfig]]:
    """Write the generated configuration for the duration of the ``with`` block.

    Args:
        changes: Changed files reported by the detection stage.
        config: Active configuration.
        root: Repository root; the file is written here.
        keep: Leave the file in place after the block exits.

    Yields:
        tuple[Path, ToxConfig]: Written path and the configuration object.
    """

    tox = build_tox_config(changes, config, root)
    path = root / config.tox_config
    path.write_text(tox.render(), encoding="utf-8")
    try:
        yield path, tox
    finally:
        if not keep:
            path.unlink(missing_ok=True)


__all__ = ["NO_TESTS_HINT", "ToxConfig", "build_tox_config", "temporary_tox_config"]
