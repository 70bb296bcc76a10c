# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Matrix tool definitions and registry."""

from __future__ import annotations

from .base import Tool, ToolContext, ToolStep
from .builtins import BUILTIN_TOOLS, module_path_for
from .registry import ToolRegistry, default_registry

__all__ = [
    "BUILTIN_TOOLS",
    "Tool",
    "ToolContext",
    "ToolRegistry",
    "ToolStep",
    "default_registry",
    "module_path_for",
]
