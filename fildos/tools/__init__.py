"""Tool surface: argument schemas, implementations and the dispatcher."""

from .base import Tool, ToolArgs, ToolDefinition, ToolResult, tool
from .dispatcher import ToolDispatcher
from .handlers import DEFAULT_TOOLS

__all__ = [
    "DEFAULT_TOOLS",
    "Tool",
    "ToolArgs",
    "ToolDefinition",
    "ToolDispatcher",
    "ToolResult",
    "tool",
]
