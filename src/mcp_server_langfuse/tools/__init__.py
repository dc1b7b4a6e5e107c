"""
Tool definitions for the Langfuse MCP server.

The executor lives in .executor and is imported from there; it depends on the
client, which in turn depends on the argument records defined here.
"""

from .catalog import TOOL_NAMES, get_tool, get_tools
from .models import Tool, ToolParameter, ToolResult
