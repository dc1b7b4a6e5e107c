"""
Client for the Langfuse public API.

Each method issues exactly one GET request and returns the decoded JSON body.
Argument problems are reported before anything is sent.
"""

import asyncio
import base64
import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypedDict, Union, cast
from urllib.parse import quote, urlencode

import aiohttp
from yarl import URL

from .errors import ArgumentValidationError, RemoteAPIError, ResponseParseError
from .tools.arguments import (
    GetSessionArgs,
    GetTraceArgs,
    ListAnnotationQueuesArgs,
    ListScoresArgs,
    ListTracesArgs,
    QueryLLMMetricsArgs,
)

logger = logging.getLogger(__name__)

METRICS_DAILY_PATH = "/api/public/metrics/daily"
TRACES_PATH = "/api/public/traces"
ANNOTATION_QUEUES_PATH = "/api/public/annotation-queues"
SCORES_PATH = "/api/public/scores"
SESSIONS_PATH = "/api/public/sessions"
PROJECTS_PATH = "/api/public/projects"

DEFAULT_METRICS_PAGE = "1"
DEFAULT_METRICS_LIMIT = "100"

TIMESTAMP_FORMAT_ERROR = "Invalid timestamp format. Expected ISO 8601 format (YYYY-MM-DDTHH:mm:ssZ)"

_ISO_TIMESTAMP = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z", re.ASCII)

# Characters encodeURIComponent leaves alone on top of quote()'s defaults
_PATH_SEGMENT_SAFE = "!*'()"

JSONValue = Any
QueryParams = List[Tuple[str, str]]


class DailyMetric(TypedDict, total=False):
    date: str


class MetricsResponse(TypedDict, total=False):
    data: List[DailyMetric]


def is_valid_iso_timestamp(timestamp: Any) -> bool:
    """Check for the YYYY-MM-DDTHH:mm:ss[.fraction]Z form the metrics endpoint expects."""
    return isinstance(timestamp, str) and _ISO_TIMESTAMP.fullmatch(timestamp) is not None


def build_auth_header(public_key: str, private_key: str) -> str:
    credentials = f"{public_key}:{private_key}".encode("utf-8")
    return f"Basic {base64.b64encode(credentials).decode('ascii')}"


def encode_path_segment(value: str) -> str:
    """Percent-encode a single path segment, including any slashes."""
    return quote(value, safe=_PATH_SEGMENT_SAFE)


def decode_body(raw: bytes, encoding: Optional[str] = None) -> str:
    """Decode a response body; undecodable bytes become U+FFFD."""
    try:
        return raw.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_json_body(body: str) -> JSONValue:
    """
    Parse a response body as strict JSON.

    Raises:
        ResponseParseError: If the body is not valid JSON, including NaN and Infinity
    """
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except ValueError as e:
        raise ResponseParseError(f"Failed to parse Langfuse API response: {e}") from e


def _format_number(value: Union[int, float]) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _join(values: Optional[Sequence[str]]) -> str:
    return ",".join(values) if values else ""


def build_metrics_params(args: QueryLLMMetricsArgs) -> QueryParams:
    """
    Build the query for the daily metrics endpoint.

    Every parameter is always sent: page and limit fall back to 1 and 100,
    missing filters are sent as empty strings.
    """
    return [
        ("fromTimestamp", args.from_timestamp),
        ("toTimestamp", args.to_timestamp),
        ("page", _format_number(args.page) if args.page is not None else DEFAULT_METRICS_PAGE),
        ("limit", _format_number(args.limit) if args.limit is not None else DEFAULT_METRICS_LIMIT),
        ("traceName", args.trace_name or ""),
        ("userId", args.user_id or ""),
        ("tags", _join(args.tags)),
        ("environment", _join(args.environment)),
    ]


def _sparse(pairs: Sequence[Tuple[str, Any]]) -> QueryParams:
    """Keep only the parameters that were given a value; lists are comma-joined."""
    params: QueryParams = []
    for name, value in pairs:
        if not value:
            continue
        if isinstance(value, (list, tuple)):
            params.append((name, ",".join(value)))
        elif isinstance(value, (int, float)):
            params.append((name, _format_number(value)))
        else:
            params.append((name, value))
    return params


def build_list_traces_params(args: ListTracesArgs) -> QueryParams:
    return _sparse(
        [
            ("page", args.page),
            ("limit", args.limit),
            ("userId", args.user_id),
            ("name", args.name),
            ("sessionId", args.session_id),
            ("fromTimestamp", args.from_timestamp),
            ("toTimestamp", args.to_timestamp),
            ("tags", args.tags),
            ("environment", args.environment),
        ]
    )


def build_list_annotation_queues_params(args: ListAnnotationQueuesArgs) -> QueryParams:
    return _sparse([("page", args.page), ("limit", args.limit)])


def build_list_scores_params(args: ListScoresArgs) -> QueryParams:
    return _sparse(
        [
            ("page", args.page),
            ("limit", args.limit),
            ("name", args.name),
            ("userId", args.user_id),
            ("environment", args.environment),
        ]
    )


class LangfuseClient:
    """Async client for the read-only Langfuse public API."""

    def __init__(self, domain: str, public_key: str, private_key: str):
        """
        Initialize the client.

        Args:
            domain: Base URL of the Langfuse deployment
            public_key: Langfuse public key
            private_key: Langfuse private (secret) key
        """
        self.domain = domain.rstrip("/")
        self.headers: Dict[str, str] = {
            "Authorization": build_auth_header(public_key, private_key),
            "Content-Type": "application/json",
        }

    def build_url(self, path: str, params: Optional[QueryParams] = None) -> URL:
        """Build the request URL; the result is sent as is, without re-encoding."""
        url = f"{self.domain}{path}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return URL(url, encoded=True)

    async def _get(self, path: str, params: Optional[QueryParams] = None) -> JSONValue:
        url = self.build_url(path, params)
        logger.debug(f"GET {url}")

        try:
            async with aiohttp.ClientSession(headers=self.headers) as session:
                async with session.get(url) as response:
                    status = response.status
                    raw = await response.read()
                    body = decode_body(raw, response.get_encoding())
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteAPIError(f"Langfuse API request failed: {e}") from e

        if not 200 <= status < 300:
            logger.warning(f"Langfuse API returned {status} for {path}")
            raise RemoteAPIError.from_response(status, body)

        return parse_json_body(body)

    async def get_llm_metrics_by_time_range(self, args: QueryLLMMetricsArgs) -> MetricsResponse:
        """
        Fetch daily LLM metrics for a time range.

        Raises:
            ArgumentValidationError: If either bound is not an ISO 8601 UTC timestamp
        """
        if not is_valid_iso_timestamp(args.from_timestamp) or not is_valid_iso_timestamp(args.to_timestamp):
            raise ArgumentValidationError(TIMESTAMP_FORMAT_ERROR)

        return cast(MetricsResponse, await self._get(METRICS_DAILY_PATH, build_metrics_params(args)))

    async def get_trace_by_id(self, args: GetTraceArgs) -> JSONValue:
        if not args.trace_id:
            raise ArgumentValidationError("traceId is required")

        return await self._get(f"{TRACES_PATH}/{encode_path_segment(args.trace_id)}")

    async def list_traces(self, args: ListTracesArgs) -> JSONValue:
        return await self._get(TRACES_PATH, build_list_traces_params(args))

    async def list_annotation_queues(self, args: Optional[ListAnnotationQueuesArgs] = None) -> JSONValue:
        if args is None:
            args = ListAnnotationQueuesArgs()
        return await self._get(ANNOTATION_QUEUES_PATH, build_list_annotation_queues_params(args))

    async def list_scores(self, args: Optional[ListScoresArgs] = None) -> JSONValue:
        if args is None:
            args = ListScoresArgs()
        return await self._get(SCORES_PATH, build_list_scores_params(args))

    async def get_session(self, args: GetSessionArgs) -> JSONValue:
        if not args.session_id:
            raise ArgumentValidationError("sessionId is required")

        return await self._get(f"{SESSIONS_PATH}/{encode_path_segment(args.session_id)}")

    async def get_projects(self) -> JSONValue:
        """Fetch the projects visible to the configured key pair."""
        return await self._get(PROJECTS_PATH)
