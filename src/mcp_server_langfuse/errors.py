"""
Error types for the Langfuse MCP server.

Every failure that can happen while serving a tool call belongs to one of the
kinds in ErrorKind. The executor turns these into error envelopes; only
ConfigurationError is allowed to stop the process.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of tool-call failure kinds."""

    VALIDATION = "validation"
    REMOTE = "remote"
    PARSE = "parse"
    DISPATCH = "dispatch"


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing."""


class LangfuseMCPError(Exception):
    """Base class for errors raised while handling a tool call."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ArgumentValidationError(LangfuseMCPError):
    """Tool arguments were rejected before any request was made."""

    kind = ErrorKind.VALIDATION


class RemoteAPIError(LangfuseMCPError):
    """The Langfuse API answered with a non-success status or could not be reached."""

    kind = ErrorKind.REMOTE

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body

    @classmethod
    def from_response(cls, status: int, body: str) -> "RemoteAPIError":
        return cls(f"Langfuse API error ({status}): {body}", status=status, body=body)


class ResponseParseError(LangfuseMCPError):
    """The Langfuse API returned a body that is not valid JSON."""

    kind = ErrorKind.PARSE


class DispatchError(LangfuseMCPError):
    """The tool call could not be routed to an operation."""

    kind = ErrorKind.DISPATCH
