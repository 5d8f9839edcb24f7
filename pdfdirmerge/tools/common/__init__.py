"""Shared tool interfaces and the tool registry."""

from __future__ import annotations

from .interfaces import BaseTool, ToolContext
from .pipeline import ToolRegistry, register_tool, registry

__all__ = ["BaseTool", "ToolContext", "ToolRegistry", "register_tool", "registry"]
