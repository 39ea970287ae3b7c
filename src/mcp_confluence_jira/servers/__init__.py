"""Tool catalog and dispatch for the MCP server."""

from .dispatcher import Dispatcher, ToolCall, ToolResult
from .registry import ToolParameter, ToolSpec, get_tool_spec, list_tools

__all__ = [
    "Dispatcher",
    "ToolCall",
    "ToolParameter",
    "ToolResult",
    "ToolSpec",
    "get_tool_spec",
    "list_tools",
]
