"""
Tool executor for MCP protocol.

This module routes a tool call to the matching LangfuseClient method. Every
failure is captured in the returned ToolResult; nothing is raised to the
protocol layer.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ..client import JSONValue, LangfuseClient
from ..errors import DispatchError, ErrorKind, LangfuseMCPError
from . import catalog
from .arguments import decode_arguments
from .models import ToolResult

logger = logging.getLogger(__name__)


class ToolExecutor:
    """Executor for the Langfuse tools."""

    def __init__(self, client: LangfuseClient):
        """
        Initialize the tool executor.

        Args:
            client: The Langfuse client the tools call into
        """
        self.client = client

    async def _dispatch(self, tool_name: str, arguments: Mapping[str, Any]) -> JSONValue:
        tool = catalog.get_tool(tool_name)
        if tool is None:
            raise DispatchError(f"Unknown tool: {tool_name}")

        args = decode_arguments(tool, arguments)

        if tool_name == catalog.QUERY_LLM_METRICS:
            return await self.client.get_llm_metrics_by_time_range(args)
        if tool_name == catalog.GET_TRACE_BY_ID:
            return await self.client.get_trace_by_id(args)
        if tool_name == catalog.LIST_TRACES:
            return await self.client.list_traces(args)
        if tool_name == catalog.LIST_ANNOTATION_QUEUES:
            return await self.client.list_annotation_queues(args)
        if tool_name == catalog.LIST_SCORES:
            return await self.client.list_scores(args)
        if tool_name == catalog.GET_SESSION:
            return await self.client.get_session(args)
        if tool_name == catalog.GET_PROJECTS:
            return await self.client.get_projects()

        # A catalog entry without a branch above
        raise DispatchError(f"Unknown tool: {tool_name}")

    async def execute(self, tool_name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        """
        Execute a tool with the given arguments.

        Args:
            tool_name: The name of the tool to execute
            arguments: The argument bag sent by the host, or None if it sent none

        Returns:
            The result of the tool execution, successful or not
        """
        logger.info(f"Executing tool: {tool_name}")
        parameters: Optional[Dict[str, Any]] = dict(arguments) if isinstance(arguments, Mapping) else None

        try:
            if arguments is None:
                raise DispatchError("No arguments provided")

            result = await self._dispatch(tool_name, arguments)
            logger.info(f"Tool execution completed: {tool_name}")
            return ToolResult(tool_name=tool_name, parameters=parameters, result=result, success=True)

        except LangfuseMCPError as e:
            logger.warning(f"Tool {tool_name} failed ({e.kind.value}): {e.message}")
            return ToolResult(
                tool_name=tool_name,
                parameters=parameters,
                success=False,
                error=e.message,
                error_kind=e.kind,
            )
        except Exception as e:
            logger.exception(f"Unexpected error executing tool {tool_name}")
            return ToolResult(
                tool_name=tool_name,
                parameters=parameters,
                success=False,
                error=str(e),
                error_kind=ErrorKind.REMOTE,
            )
