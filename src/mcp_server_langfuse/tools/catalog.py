"""
Catalog of the Langfuse tools.

The catalog is built once at import time and shared by every request. Its
order is the order tools are reported to the host.
"""

from typing import Dict, Optional, Tuple

from .models import Tool, ToolParameter

QUERY_LLM_METRICS = "query_llm_metrics"
GET_TRACE_BY_ID = "get_trace_by_id"
LIST_TRACES = "list_traces"
LIST_ANNOTATION_QUEUES = "list_annotation_queues"
LIST_SCORES = "list_scores"
GET_SESSION = "get_session"
GET_PROJECTS = "get_projects"

_STRING_ITEMS = {"type": "string"}


def _page(description: str = "Page number (default 1)", default: Optional[int] = None) -> ToolParameter:
    return ToolParameter(name="page", description=description, type="number", default=default)


def _limit(description: str = "Results per page limit", default: Optional[int] = None) -> ToolParameter:
    return ToolParameter(name="limit", description=description, type="number", default=default)


def _string_list(name: str, description: str) -> ToolParameter:
    return ToolParameter(name=name, description=description, type="array", items=_STRING_ITEMS)


query_llm_metrics_tool = Tool(
    name=QUERY_LLM_METRICS,
    description="Query LLM metrics from Langfuse",
    parameters=(
        ToolParameter(
            name="fromTimestamp",
            description="Start timestamp in ISO 8601 format",
            type="string",
            required=True,
        ),
        ToolParameter(
            name="toTimestamp",
            description="End timestamp in ISO 8601 format",
            type="string",
            required=True,
        ),
        _page(default=1),
        _limit(description="Results per page limit (default 100)", default=100),
        ToolParameter(name="traceName", description="Filter by trace name", type="string"),
        ToolParameter(name="userId", description="Filter by user ID", type="string"),
        _string_list("tags", "Filter by tags"),
        _string_list("environment", "Filter by environment"),
    ),
)

get_trace_by_id_tool = Tool(
    name=GET_TRACE_BY_ID,
    description="Get trace details by ID from Langfuse",
    parameters=(
        ToolParameter(name="traceId", description="Langfuse trace identifier", type="string", required=True),
    ),
)

list_traces_tool = Tool(
    name=LIST_TRACES,
    description="List traces from Langfuse with filtering options",
    parameters=(
        _page(),
        _limit(),
        ToolParameter(name="userId", description="Filter by user ID", type="string"),
        ToolParameter(name="name", description="Filter by trace name", type="string"),
        ToolParameter(name="sessionId", description="Filter by session ID", type="string"),
        ToolParameter(
            name="fromTimestamp",
            description="Filter traces on or after this timestamp (ISO 8601)",
            type="string",
        ),
        ToolParameter(
            name="toTimestamp",
            description="Filter traces before this timestamp (ISO 8601)",
            type="string",
        ),
        _string_list("tags", "Filter by tags (all tags must be present)"),
        _string_list("environment", "Filter by environment"),
    ),
)

list_annotation_queues_tool = Tool(
    name=LIST_ANNOTATION_QUEUES,
    description="List annotation queues from Langfuse",
    parameters=(_page(), _limit()),
)

list_scores_tool = Tool(
    name=LIST_SCORES,
    description="List scores from Langfuse with filtering options",
    parameters=(
        _page(),
        _limit(),
        ToolParameter(name="name", description="Filter by score name", type="string"),
        ToolParameter(name="userId", description="Filter by user ID", type="string"),
        _string_list("environment", "Filter by environment"),
    ),
)

get_session_tool = Tool(
    name=GET_SESSION,
    description="Get session details by ID from Langfuse",
    parameters=(
        ToolParameter(name="sessionId", description="Langfuse session identifier", type="string", required=True),
    ),
)

get_projects_tool = Tool(
    name=GET_PROJECTS,
    description="Get information about projects associated with the API key",
)

TOOLS: Tuple[Tool, ...] = (
    query_llm_metrics_tool,
    get_trace_by_id_tool,
    list_traces_tool,
    list_annotation_queues_tool,
    list_scores_tool,
    get_session_tool,
    get_projects_tool,
)

TOOL_NAMES: Tuple[str, ...] = tuple(tool.name for tool in TOOLS)

_TOOLS_BY_NAME: Dict[str, Tool] = {tool.name: tool for tool in TOOLS}


def get_tools() -> Tuple[Tool, ...]:
    """Return every tool in catalog order."""
    return TOOLS


def get_tool(name: str) -> Optional[Tool]:
    """Return the tool with the given name, or None if there is none."""
    return _TOOLS_BY_NAME.get(name)
