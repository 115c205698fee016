"""Request processor that routes tool calls and normalizes their outcomes.

This module provides the RequestProcessor class which looks up the requested
tool in a catalog, validates the arguments against the tool's parameter
model, runs the handler with the server's session, and wraps the outcome in
a ToolResponse envelope.

Architecture:
    - The transport awaits dispatch() for one request at a time
    - Unknown names and invalid arguments never reach a handler
    - Wrapped handlers return Ok/Err instead of raising
    - Every outcome, success or failure, leaves as the same envelope shape

Error Handling:
    dispatch() never raises. Anything a handler or the lookup produces is
    converted into an error envelope so one failing tool call cannot take
    down the channel.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional

from mcp import types
from pydantic import ValidationError

from .handler_registry import ToolCatalog
from .handler_wrappers import (
    Err,
    HandlerError,
    InvalidParams,
    Ok,
    ProviderFailure,
    Result,
)

logger = logging.getLogger(__name__)


@dataclass
class ToolRequest:
    """A single tool invocation received from the transport.

    Attributes:
        tool_name: Name of the tool to execute (e.g., "read_file", "find").
        arguments: Tool-specific arguments. Validated against the tool's
            parameter model before the handler runs.

    Example:
        >>> request = ToolRequest(
        ...     tool_name="find",
        ...     arguments={"collection": "orders", "filter": {"status": "open"}, "limit": 5}
        ... )
    """

    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolResponse:
    """Uniform envelope returned for every tool invocation.

    Attributes:
        content: Exactly one {"type": "text", "text": ...} item.
        is_error: True if the invocation failed. The text then carries a
            human-readable message, never a traceback.

    Example (success):
        >>> ToolResponse.text("Folder /tmp/a created successfully.")

    Example (error):
        >>> ToolResponse.text("Error: Unknown tool: delete_everything", is_error=True)
    """

    content: list[dict[str, str]]
    is_error: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResponse":
        return cls(content=[{"type": "text", "text": text}], is_error=is_error)

    @property
    def body(self) -> str:
        return self.content[0]["text"]

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=item["text"]) for item in self.content],
            isError=self.is_error,
        )


def to_envelope(result: Result, error_format: str) -> ToolResponse:
    """Collapse a handler Result into the envelope for a catalog's format.

    Payloads are normalized like this:
        - str -> used as the response text unchanged
        - dict -> {"success": True, **dict} as indented JSON
        - None -> {"success": True}
        - other -> {"success": True, "result": value}
    """
    if isinstance(result, Ok):
        return ToolResponse.text(_render_payload(result.payload))

    if error_format == "json":
        text = _dumps({"success": False, "error": result.message})
    else:
        text = f"Error: {result.message}"
    return ToolResponse.text(text, is_error=True)


def _render_payload(payload: Any) -> str:
    if isinstance(payload, str):
        return payload
    if payload is None:
        return _dumps({"success": True})
    if isinstance(payload, dict):
        return _dumps({"success": True, **payload})
    return _dumps({"success": True, "result": payload})


def _dumps(value: Any) -> str:
    # ObjectId, datetime and Decimal128 values render as their string form
    return json.dumps(_finite(value), indent=2, ensure_ascii=False, allow_nan=False, default=str)


def _finite(value: Any) -> Any:
    # NaN and +/-Infinity have no JSON form; they render as null
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value


def _format_validation_error(tool_name: str, error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{loc}: {item['msg']}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)


class RequestProcessor:
    """Routes tool requests to catalog handlers and normalizes the results.

    Usage:
        >>> processor = RequestProcessor(catalog, session)
        >>> response = await processor.dispatch("read_file", {"filepath": "/etc/hostname"})
        >>> response.is_error
        False

    Attributes:
        _catalog: The frozen tool catalog of this server instance.
        _session: The provider session handed to every handler.
    """

    def __init__(self, catalog: ToolCatalog, session: Any) -> None:
        self._catalog = catalog
        self._session = session

    @property
    def catalog(self) -> ToolCatalog:
        return self._catalog

    async def process(self, request: ToolRequest) -> ToolResponse:
        return await self.dispatch(request.tool_name, request.arguments)

    async def dispatch(
        self, tool_name: str, arguments: Optional[dict[str, Any]] = None
    ) -> ToolResponse:
        """Execute one tool call and return its envelope. Never raises."""
        logger.debug("Dispatching %s with %s", tool_name, arguments)
        try:
            result = await self._execute(tool_name, arguments or {})
        except Exception as e:
            # The router must not leak failures to the transport
            logger.exception("Dispatch of %s failed: %s", tool_name, e)
            result = Err(kind=ProviderFailure.kind, message=str(e) or type(e).__name__)

        if isinstance(result, Err):
            logger.info("Tool %s failed (%s): %s", tool_name, result.kind, result.message)
        return to_envelope(result, self._catalog.error_format)

    async def _execute(self, tool_name: str, arguments: dict[str, Any]) -> Result:
        try:
            entry = self._catalog.get_handler(tool_name)
            try:
                params = entry.params_model.model_validate(arguments)
            except ValidationError as e:
                raise InvalidParams(_format_validation_error(tool_name, e)) from e
        except HandlerError as e:
            return Err.from_error(e)

        return await entry.handler(params, self._session)
