"""Tool dispatcher - validates tool calls and runs the bound handler."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, Dict

from ide_mcp.bridge.errors import BridgeError, InvalidArgumentsError, ToolNotFoundError
from ide_mcp.bridge.registry import ToolRegistry
from ide_mcp.bridge.schema import ToolCall, ToolDef, ToolResult

logger = logging.getLogger(__name__)

INVALID_ARGUMENTS = "Invalid arguments format"


def extract_arguments(tool: ToolDef, arguments: Any) -> Dict[str, Any]:
    """
    Pull the declared parameter values out of an argument bag.

    Undeclared keys are ignored. Optional parameters that are absent or null are
    left out of the returned dict.

    Raises
    ------
    InvalidArgumentsError
        If ``arguments`` is not a mapping, a required parameter is missing,
        or a present parameter has the wrong primitive type.
    """
    if not isinstance(arguments, Mapping):
        raise InvalidArgumentsError(
            f"{tool.name}: expected an object of arguments, got {type(arguments).__name__}"
        )

    values: Dict[str, Any] = {}
    for param in tool.params:
        if arguments.get(param.name) is None and not param.required:
            continue
        if param.name not in arguments:
            raise InvalidArgumentsError(f"{tool.name}: missing required argument '{param.name}'")
        value = arguments[param.name]
        if not param.accepts(value):
            raise InvalidArgumentsError(
                f"{tool.name}: argument '{param.name}' must be {param.type}, got {type(value).__name__}"
            )
        values[param.name] = value
    return values


class ToolDispatcher:
    """
    Runs tool calls against a registry.

    Argument problems and bridge failures come back as error results; they
    never propagate out of ``dispatch()``. The only exception raised is
    ``ToolNotFoundError``, which the server reports to the client.
    """

    def __init__(self, registry: ToolRegistry):
        self._registry = registry

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def dispatch(self, invocation: ToolCall) -> ToolResult:
        entry = self._registry.get(invocation.tool_name)
        if entry is None:
            raise ToolNotFoundError(f"Unknown tool: {invocation.tool_name}")

        try:
            kwargs = extract_arguments(entry.tool, invocation.arguments)
        except InvalidArgumentsError as exc:
            logger.warning("Rejected call %s: %s", invocation.call_id, exc)
            return ToolResult.failure(INVALID_ARGUMENTS)

        logger.debug("Dispatching %s (call %s)", entry.name, invocation.call_id)
        t0 = time.perf_counter()
        try:
            result = entry.handler(**kwargs)
        except BridgeError as exc:
            logger.warning("Tool %s failed: %s", entry.name, exc)
            return ToolResult.failure(str(exc))

        elapsed_ms = int((time.perf_counter() - t0) * 1000)
        logger.debug("Tool %s finished in %d ms (error=%s)", entry.name, elapsed_ms, result.is_error)
        return result
