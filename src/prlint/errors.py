# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the prlint stages."""

from __future__ import annotations


class PRLintError(Exception):
    """Base class for errors raised by prlint."""

    exit_code: int = 1


class ConfigError(PRLintError):
    """Raised when configuration input is invalid."""

    exit_code = 2


class EventError(PRLintError):
    """Raised when the revision pair for an event cannot be resolved."""

    exit_code = 2


class UnknownToolError(PRLintError):
    """Raised when a matrix entry names a tool that is not registered."""

    exit_code = 2

    def __init__(self, name: str, known: tuple[str, ...]) -> None:
        """Record the unknown tool name alongside the registered names.

        Args:
            name: Tool name requested by the caller.
            known: Tool names available in the registry.
        """

        super().__init__(f"Unknown tool '{name}'. Available tools: {', '.join(known)}")
        self.name = name
        self.known = known


__all__ = ["ConfigError", "EventError", "PRLintError", "UnknownToolError"]
