"""
Tool models for the MCP protocol.

This module provides the data models used to describe tools and tool results.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from mcp import types

from ..errors import ErrorKind


@dataclass(frozen=True)
class ToolParameter:
    """Parameter definition for a tool."""

    name: str
    description: str
    type: str
    required: bool = False
    default: Optional[Any] = None
    items: Optional[Dict[str, Any]] = None

    def to_schema(self) -> Dict[str, Any]:
        """Convert parameter to JSON Schema."""
        schema: Dict[str, Any] = {"type": self.type}

        if self.items is not None and self.type == "array":
            schema["items"] = dict(self.items)

        schema["description"] = self.description

        if self.default is not None:
            schema["default"] = self.default

        return schema


@dataclass(frozen=True)
class Tool:
    """Tool definition for MCP protocol."""

    name: str
    description: str
    parameters: Tuple[ToolParameter, ...] = ()

    @property
    def required_parameters(self) -> List[str]:
        """Names of the parameters a caller must supply."""
        return [param.name for param in self.parameters if param.required]

    @property
    def input_schema(self) -> Dict[str, Any]:
        """
        Generate the JSON Schema for the tool parameters.

        Properties keep their declaration order. The "required" key is left out
        when the tool has no mandatory parameters.
        """
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {param.name: param.to_schema() for param in self.parameters},
        }

        required = self.required_parameters
        if required:
            schema["required"] = required

        return schema

    def get_parameter(self, name: str) -> Optional[ToolParameter]:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def to_mcp(self) -> types.Tool:
        """Convert the tool to the descriptor sent in a list-tools response."""
        return types.Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


@dataclass
class ToolResult:
    """Result of a tool execution."""

    tool_name: str
    parameters: Optional[Dict[str, Any]] = None
    result: Any = None
    success: bool = True
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation."""
        result_dict = {
            "name": self.tool_name,
            "parameters": self.parameters,
            "result": self.result,
            "success": self.success,
        }

        if not self.success and self.error:
            result_dict["error"] = self.error
            if self.error_kind is not None:
                result_dict["error_kind"] = self.error_kind.value

        return result_dict
