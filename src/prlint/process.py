# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import os
import shutil

# Bandit: subprocess usage is intentional; arguments are passed as lists and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124

CommandRunner = Callable[[Sequence[str], "CommandOptions"], CompletedProcess[str]]


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    capture_output: bool = False
    timeout: float | None = None
    discard_stdin: bool = False

    def with_overrides(self, **overrides: object) -> CommandOptions:
        """Return a copy of the options with ``overrides`` applied.

        Args:
            **overrides: Field names mapped to replacement values.

        Returns:
            CommandOptions: Updated options instance.

        Raises:
            TypeError: If an override names an unknown option.
            ValueError: When a timeout override is negative.
        """

        unknown = sorted(set(overrides) - set(self.__dataclass_fields__))
        if unknown:
            raise TypeError(f"Unknown command option(s): {', '.join(unknown)}")
        timeout = overrides.get("timeout", self.timeout)
        if isinstance(timeout, (int, float)) and timeout < 0:
            raise ValueError("timeout override must be non-negative")
        return replace(self, **overrides)  # type: ignore[arg-type]


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose executable is an absolute path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def find_executable(cmd: str) -> str | None:
    """Return the fully-qualified path to ``cmd`` if it exists on ``PATH``."""

    return shutil.which(cmd)


def run_command(args: Sequence[str], options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    resolved = options or CommandOptions()
    normalized = _normalize_args(args)
    env: dict[str, str] | None = None
    if resolved.env is not None:
        env = dict(os.environ)
        env.update({str(key): str(value) for key, value in resolved.env.items()})

    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - argument list, no shell
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            env=env,
            check=False,
            capture_output=resolved.capture_output,
            text=True,
            timeout=resolved.timeout,
            stdin=subprocess.DEVNULL if resolved.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {resolved.timeout:.1f}s"
        completed = subprocess.CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout) or "",
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )

    if resolved.check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


__all__ = [
    "CommandOptions",
    "CommandRunner",
    "SubprocessExecutionError",
    "TIMEOUT_RETURNCODE",
    "find_executable",
    "run_command",
]
