"""Tool registry - ordered tool descriptors bound to their handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from ide_mcp.bridge.errors import DuplicateToolError, ToolDefinitionError
from ide_mcp.bridge.schema import ToolDef, ToolResult

ToolHandler = Callable[..., ToolResult]


@dataclass(frozen=True)
class RegisteredTool:
    """A descriptor paired with the function that implements it."""

    tool: ToolDef
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.tool.name


class ToolRegistry:
    """
    In-memory registry of the tools this bridge exposes.

    Built once at startup and only read afterwards. Registration order is
    the order in which tools are advertised to clients. A name can be
    registered only once; there is no removal.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, RegisteredTool] = {}

    def register(self, tool: ToolDef, handler: ToolHandler) -> RegisteredTool:
        """
        Add a tool.

        Raises
        ------
        ToolDefinitionError
            If the tool name is empty.
        DuplicateToolError
            If a tool with the same name is already registered.
        """
        if not tool.name or not tool.name.strip():
            raise ToolDefinitionError("Tool name must not be empty")
        if tool.name in self._tools:
            raise DuplicateToolError(f"Tool already registered: {tool.name}")

        entry = RegisteredTool(tool=tool, handler=handler)
        self._tools[tool.name] = entry
        return entry

    # ── Lookup ────────────────────────────────────────────────────────────

    def get(self, name: str) -> Optional[RegisteredTool]:
        return self._tools.get(name)

    def list_tools(self) -> List[ToolDef]:
        """Return all descriptors in registration order."""
        return [entry.tool for entry in self._tools.values()]

    def names(self) -> List[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[RegisteredTool]:
        return iter(self._tools.values())
