# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the subprocess wrapper."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from prlint.process import TIMEOUT_RETURNCODE, CommandOptions, SubprocessExecutionError, run_command


def test_missing_executable_raises_file_not_found() -> None:
    with pytest.raises(FileNotFoundError, match="was not found on PATH"):
        run_command(["definitely-not-a-real-prlint-binary"])


def test_empty_command_is_rejected() -> None:
    with pytest.raises(ValueError):
        run_command([])


def test_nonzero_exit_raises_when_checked() -> None:
    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command([sys.executable, "-c", "import sys; sys.exit(3)"], CommandOptions(capture_output=True))

    assert excinfo.value.returncode == 3


def test_unchecked_run_captures_output(tmp_path: Path) -> None:
    completed = run_command(
        [sys.executable, "-c", "import os; print(os.getcwd()); print(os.environ['PRLINT_X'])"],
        CommandOptions(cwd=tmp_path, env={"PRLINT_X": "yes"}, check=False, capture_output=True),
    )

    assert completed.returncode == 0
    assert completed.stdout.splitlines() == [str(tmp_path.resolve()), "yes"]


def test_timeout_maps_to_conventional_exit_code() -> None:
    completed = run_command(
        [sys.executable, "-c", "import time; time.sleep(10)"],
        CommandOptions(check=False, capture_output=True, timeout=0.5),
    )

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert "timed out" in completed.stderr


def test_with_overrides_validates_names_and_timeout() -> None:
    options = CommandOptions()

    assert options.with_overrides(check=False).check is False
    with pytest.raises(TypeError, match="Unknown command option"):
        options.with_overrides(shell=True)
    with pytest.raises(ValueError):
        options.with_overrides(timeout=-1)
