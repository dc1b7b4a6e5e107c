"""
MCP server exposing read-only Langfuse analytics queries as tools.
"""

__version__ = "1.0.0"

SERVER_NAME = "mcp-server-langfuse"
