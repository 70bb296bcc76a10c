# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool registry providing lookup by name in matrix order."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from ..errors import UnknownToolError
from .base import Tool
from .builtins import BUILTIN_TOOLS


class ToolRegistry(Mapping[str, Tool]):
    """Read-only mapping of tool names to :class:`Tool` definitions.

    Iteration follows registration order, which is also the matrix order.
    """

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        """Register ``tool`` enforcing uniqueness by name.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """

        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' already registered")
        self._tools[tool.name] = tool

    def resolve(self, name: str) -> Tool:
        """Return the tool called ``name``.

        Raises:
            UnknownToolError: If ``name`` is not registered.
        """

        try:
            return self._tools[name]
        except KeyError as exc:
            raise UnknownToolError(name, tuple(self._tools)) from exc

    def select(self, names: Iterable[str]) -> list[Tool]:
        """Return tools for ``names`` in the order given."""
        return [self.resolve(name) for name in names]

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tools)

    def __getitem__(self, name: str) -> Tool:
        return self._tools[name]


def default_registry() -> ToolRegistry:
    """Return a registry holding the built-in tools."""

    return ToolRegistry(BUILTIN_TOOLS)


__all__ = ["ToolRegistry", "default_registry"]
