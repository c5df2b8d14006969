"""Data models for bridge tool definitions, calls, results and outbound commands."""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Tuple

from mcp import types
from pydantic import BaseModel, ConfigDict, Field

ParamType = Literal["string", "number", "integer", "boolean"]

_PYTHON_TYPES: Dict[str, Tuple[type, ...]] = {
    "string": (str,),
    "number": (int, float),
    "integer": (int,),
    "boolean": (bool,),
}


class ToolParam(BaseModel):
    """A single named parameter of a tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ParamType = "string"
    description: str = ""
    required: bool = False

    def accepts(self, value: Any) -> bool:
        """True if ``value`` has the primitive type this parameter declares."""
        # bool is an int subclass but never a valid number
        if isinstance(value, bool) and self.type != "boolean":
            return False
        return isinstance(value, _PYTHON_TYPES[self.type])


class ToolDef(BaseModel):
    """Tool descriptor: what the bridge advertises to MCP clients."""

    model_config = ConfigDict(frozen=True)

    name: str  # e.g. "open_content_in_editor"
    description: str
    params: Tuple[ToolParam, ...] = ()

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the parameters, as sent in ``tools/list``."""
        properties: Dict[str, Any] = {}
        for p in self.params:
            prop: Dict[str, Any] = {"type": p.type}
            if p.description:
                prop["description"] = p.description
            properties[p.name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": [p.name for p in self.params if p.required],
        }

    def to_mcp(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
        )


class ToolCall(BaseModel):
    """A single inbound tool invocation."""

    call_id: str = ""
    tool_name: str = ""
    # Untyped; the dispatcher checks the shape.
    arguments: Any = Field(default_factory=dict)
    timestamp: str = ""

    def model_post_init(self, __context: Any) -> None:
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()
        if not self.call_id:
            raw = f"{self.tool_name}:{self.arguments!r}:{self.timestamp}"
            self.call_id = hashlib.sha256(raw.encode()).hexdigest()[:12]


class TextContent(BaseModel):
    """Plain-text content item of a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Result envelope returned for every tool call."""

    is_error: bool = False
    content: List[TextContent] = Field(default_factory=list)

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(is_error=False, content=[TextContent(text=text)])

    @classmethod
    def failure(cls, text: str) -> "ToolResult":
        return cls(is_error=True, content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        """All text items joined by newlines."""
        return "\n".join(item.text for item in self.content)

    def mcp_content(self) -> List[types.TextContent]:
        """Content items in MCP SDK form."""
        return [types.TextContent(type="text", text=item.text) for item in self.content]


class OutboundCommand(BaseModel):
    """A command to write to the IDE listener."""

    command: str
    params: List[str] = Field(default_factory=list)

    def encode(self, separator: str = "") -> bytes:
        """
        Serialize to the wire format.

        The command name is followed by each parameter, joined by
        ``separator``. With the default empty separator the tokens are
        simply concatenated; there is no framing or length prefix.
        """
        return separator.join([self.command, *self.params]).encode("utf-8")
