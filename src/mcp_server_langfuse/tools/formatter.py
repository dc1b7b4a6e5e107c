"""
Tool response formatter for MCP protocol.

This module renders tool results as the envelope returned to the host.
"""

import json
from typing import Any

from mcp import types

from .models import ToolResult


def to_json_text(value: Any) -> str:
    """Serialize a value as compact JSON."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class ToolResponseFormatter:
    """Formatter for MCP tool responses."""

    def format_result(self, result: ToolResult) -> types.CallToolResult:
        """
        Format a tool result as a call-tool envelope.

        The envelope always holds a single text block. Failures are reported as
        {"error": message} inside it and are never flagged as protocol errors.

        Args:
            result: The tool result to format

        Returns:
            The envelope to send back to the host
        """
        if result.success:
            text = to_json_text(result.result)
        else:
            text = to_json_text({"error": result.error})

        return types.CallToolResult(content=[types.TextContent(type="text", text=text)])
