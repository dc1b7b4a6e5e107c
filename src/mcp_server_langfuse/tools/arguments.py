"""
Typed argument records for the Langfuse tools.

Hosts send tool arguments as a loose JSON object. decode_arguments checks the
object against the tool's declared schema and maps it onto one of the records
below, so the client only ever sees well-formed values.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

import jsonschema

from ..errors import ArgumentValidationError
from . import catalog
from .models import Tool

logger = logging.getLogger(__name__)

Number = Union[int, float]

T = TypeVar("T")


def _wire(name: str, **kwargs: Any) -> Any:
    """Declare a record field that is read from the camelCase argument `name`."""
    kwargs.setdefault("default", None)
    return field(metadata={"wire": name}, **kwargs)


@dataclass(frozen=True)
class QueryLLMMetricsArgs:
    from_timestamp: str = _wire("fromTimestamp", default="")
    to_timestamp: str = _wire("toTimestamp", default="")
    page: Optional[Number] = _wire("page")
    limit: Optional[Number] = _wire("limit")
    trace_name: Optional[str] = _wire("traceName")
    user_id: Optional[str] = _wire("userId")
    tags: Optional[List[str]] = _wire("tags")
    environment: Optional[List[str]] = _wire("environment")


@dataclass(frozen=True)
class GetTraceArgs:
    trace_id: str = _wire("traceId", default="")


@dataclass(frozen=True)
class ListTracesArgs:
    page: Optional[Number] = _wire("page")
    limit: Optional[Number] = _wire("limit")
    user_id: Optional[str] = _wire("userId")
    name: Optional[str] = _wire("name")
    session_id: Optional[str] = _wire("sessionId")
    from_timestamp: Optional[str] = _wire("fromTimestamp")
    to_timestamp: Optional[str] = _wire("toTimestamp")
    tags: Optional[List[str]] = _wire("tags")
    environment: Optional[List[str]] = _wire("environment")


@dataclass(frozen=True)
class ListAnnotationQueuesArgs:
    page: Optional[Number] = _wire("page")
    limit: Optional[Number] = _wire("limit")


@dataclass(frozen=True)
class ListScoresArgs:
    page: Optional[Number] = _wire("page")
    limit: Optional[Number] = _wire("limit")
    name: Optional[str] = _wire("name")
    user_id: Optional[str] = _wire("userId")
    environment: Optional[List[str]] = _wire("environment")


@dataclass(frozen=True)
class GetSessionArgs:
    session_id: str = _wire("sessionId", default="")


@dataclass(frozen=True)
class GetProjectsArgs:
    pass


ARGUMENT_TYPES: Dict[str, type] = {
    catalog.QUERY_LLM_METRICS: QueryLLMMetricsArgs,
    catalog.GET_TRACE_BY_ID: GetTraceArgs,
    catalog.LIST_TRACES: ListTracesArgs,
    catalog.LIST_ANNOTATION_QUEUES: ListAnnotationQueuesArgs,
    catalog.LIST_SCORES: ListScoresArgs,
    catalog.GET_SESSION: GetSessionArgs,
    catalog.GET_PROJECTS: GetProjectsArgs,
}


def _normalize(value: Any) -> Any:
    # JSON hosts may send 2.0 for 2
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, list):
        return list(value)
    return value


def _check_required(tool: Tool, arguments: Mapping[str, Any]) -> None:
    for name in tool.required_parameters:
        value = arguments.get(name)
        if value is None or value == "":
            raise ArgumentValidationError(f"{name} is required")


def _check_schema(tool: Tool, arguments: Mapping[str, Any]) -> None:
    # null means "not given" for optional filters
    present = {key: value for key, value in arguments.items() if value is not None}
    try:
        jsonschema.validate(instance=present, schema=tool.input_schema)
    except jsonschema.ValidationError as e:
        location = ".".join(str(part) for part in e.absolute_path)
        if location:
            raise ArgumentValidationError(f"Invalid value for '{location}' in {tool.name}: {e.message}") from e
        raise ArgumentValidationError(f"Invalid arguments for {tool.name}: {e.message}") from e


def build_record(record_type: Type[T], arguments: Mapping[str, Any]) -> T:
    """Map camelCase arguments onto a record, leaving absent fields at their defaults."""
    kwargs = {}
    for record_field in fields(record_type):
        wire_name = record_field.metadata["wire"]
        if arguments.get(wire_name) is not None:
            kwargs[record_field.name] = _normalize(arguments[wire_name])
    return record_type(**kwargs)


def decode_arguments(tool: Tool, arguments: Mapping[str, Any]) -> Any:
    """
    Validate an argument bag and decode it into the tool's argument record.

    Args:
        tool: The catalog entry the arguments are meant for
        arguments: The raw arguments sent by the host

    Returns:
        An instance of the record registered for the tool in ARGUMENT_TYPES

    Raises:
        ArgumentValidationError: If a required field is missing or empty, or a
            field does not match its declared type
    """
    if not isinstance(arguments, Mapping):
        raise ArgumentValidationError(f"Arguments for {tool.name} must be an object")

    _check_required(tool, arguments)
    _check_schema(tool, arguments)

    unknown = sorted(key for key in arguments if tool.get_parameter(key) is None)
    if unknown:
        logger.debug(f"Ignoring undeclared arguments for {tool.name}: {', '.join(unknown)}")

    return build_record(ARGUMENT_TYPES[tool.name], arguments)
