"""
MCP server wiring for the Langfuse tools.

This module binds the tool catalog and executor to the MCP protocol: a
list-tools handler that reports the catalog and a call-tool handler that runs
one tool per request.
"""

import logging
from typing import Any, List, Mapping, Optional

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import SERVER_NAME, __version__
from .client import LangfuseClient
from .config import LangfuseConfig
from .tools.catalog import get_tools
from .tools.executor import ToolExecutor
from .tools.formatter import ToolResponseFormatter

logger = logging.getLogger(__name__)


class LangfuseMCPServer:
    """Serves the Langfuse tools over the MCP protocol."""

    def __init__(self, config: LangfuseConfig, client: Optional[LangfuseClient] = None):
        """
        Initialize the server.

        Args:
            config: Loaded configuration holding the Langfuse credentials
            client: Client to use, or None to create one from the configuration
        """
        self.config = config
        self.client = client if client is not None else LangfuseClient(config.domain, config.public_key, config.private_key)
        self.executor = ToolExecutor(self.client)
        self.formatter = ToolResponseFormatter()

        self.server = Server(SERVER_NAME, version=__version__)
        self._setup_request_handlers()

    def _setup_request_handlers(self) -> None:
        self.server.list_tools()(self.list_tools)
        # Registered directly so the raw argument bag, including a missing
        # one, reaches the executor unchanged.
        self.server.request_handlers[types.CallToolRequest] = self._handle_call_tool

    async def list_tools(self) -> List[types.Tool]:
        logger.info("Received list-tools request")
        return [tool.to_mcp() for tool in get_tools()]

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]]) -> types.CallToolResult:
        """
        Run a tool and wrap the outcome in a call-tool envelope.

        Args:
            name: The tool name from the request
            arguments: The argument bag from the request, or None

        Returns:
            The envelope, which carries an error message rather than raising
        """
        logger.info(f"Received call-tool request: {name}")
        result = await self.executor.execute(name, arguments)
        return self.formatter.format_result(result)

    async def _handle_call_tool(self, request: types.CallToolRequest) -> types.ServerResult:
        envelope = await self.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(envelope)

    async def run_stdio(self) -> None:
        """Serve requests on stdin/stdout until the input stream closes."""
        logger.info(f"Connecting {SERVER_NAME} to stdio transport (domain: {self.config.domain})")
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Langfuse MCP Server running on stdio")
            await self.server.run(read_stream, write_stream, self.server.create_initialization_options())
