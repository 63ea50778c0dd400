"""
Dispatcher — resolves a tool id, runs its handler, wraps the outcome.

:meth:`Dispatcher.invoke` never raises.  Every per-call problem (unknown
tool, bad arguments, unavailable client, OCI service error, anything else)
comes back as a :class:`Failure` with a kind and a message.
"""

from __future__ import annotations

import asyncio
import copy
import enum
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Union

import oci
from jsonschema import Draft202012Validator

from ocimcp.clients import ClientSet, ServiceUnavailableError
from ocimcp.handlers import ToolContext
from ocimcp.registry import ToolRegistry

logger = logging.getLogger("oci-mcp.dispatch")


class ErrorKind(str, enum.Enum):
    UNKNOWN_TOOL = "unknown_tool"
    INVALID_PARAMS = "invalid_params"
    SERVICE_UNAVAILABLE = "service_unavailable"
    VENDOR_ERROR = "vendor_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str


InvocationResult = Union[Success, Failure]


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def apply_defaults(schema: Mapping[str, Any], params: Mapping[str, Any]) -> dict:
    """Return *params* completed with the schema's top-level defaults.

    Null values count as absent, so ``{"limit": null}`` gets the default.
    An integer property that has a default also takes it when given ``0``,
    and integral floats such as ``2.0`` are passed on as ints.
    """
    properties = schema.get("properties", {})
    args = {}
    for name, value in params.items():
        if value is None:
            continue
        prop = properties.get(name, {})
        if prop.get("type") == "integer" and _is_number(value):
            if value == 0 and "default" in prop:
                continue
            if isinstance(value, float) and value.is_integer():
                value = int(value)
        args[name] = value
    for name, prop in properties.items():
        if name not in args and "default" in prop:
            args[name] = copy.deepcopy(prop["default"])
    return args


def validate_arguments(schema: Mapping[str, Any], args: Mapping[str, Any]) -> str | None:
    """Return the first validation error message, or None if *args* is valid."""
    errors = sorted(Draft202012Validator(schema).iter_errors(args), key=str)
    if not errors:
        return None
    err = errors[0]
    if err.path:
        return f"{'/'.join(map(str, err.path))}: {err.message}"
    return err.message


def _error_message(exc: BaseException) -> str:
    message = ""
    if isinstance(exc, oci.exceptions.ServiceError):
        message = exc.message or ""
    message = message or str(exc)
    return message or type(exc).__name__


def _classify(exc: BaseException) -> ErrorKind:
    if isinstance(exc, ServiceUnavailableError):
        return ErrorKind.SERVICE_UNAVAILABLE
    if isinstance(exc, oci.exceptions.ServiceError):
        return ErrorKind.VENDOR_ERROR
    return ErrorKind.INTERNAL_ERROR


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

class Dispatcher:
    """Routes tool invocations to handlers against one shared client set."""

    def __init__(
        self,
        registry: ToolRegistry,
        clients: ClientSet,
        default_compartment_id: str | None = None,
    ) -> None:
        self.registry = registry
        self.context = ToolContext(clients=clients, default_compartment_id=default_compartment_id)

    def list_capabilities(self) -> list[dict]:
        return self.registry.list_capabilities()

    async def invoke(self, tool_id: str, params: Mapping[str, Any] | None = None) -> InvocationResult:
        handler = self.registry.handler(tool_id)
        descriptor = self.registry.descriptor(tool_id)
        if handler is None or descriptor is None:
            return Failure(ErrorKind.UNKNOWN_TOOL, f"Unknown tool: {tool_id}")

        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            return Failure(
                ErrorKind.INVALID_PARAMS,
                f"Invalid arguments for {tool_id}: expected an object",
            )

        args = apply_defaults(descriptor.input_schema, params)
        problem = validate_arguments(descriptor.input_schema, args)
        if problem:
            return Failure(ErrorKind.INVALID_PARAMS, f"Invalid arguments for {tool_id}: {problem}")

        logger.debug("Invoking %s", tool_id)
        try:
            # SDK calls block; keep the event loop free for other requests.
            payload = await asyncio.to_thread(handler, self.context, args)
        except Exception as exc:
            logger.warning("Tool execution error for %s: %s", tool_id, exc)
            return Failure(_classify(exc), _error_message(exc))

        return Success(payload)
