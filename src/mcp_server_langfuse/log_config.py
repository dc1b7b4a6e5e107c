"""
Logging configuration.

stdout carries the MCP message stream, so all log output goes to stderr.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

stderr_console = Console(stderr=True)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Route all logging through a rich handler on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=stderr_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    return logging.getLogger("mcp_server_langfuse")
