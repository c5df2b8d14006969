"""
Bridge core - MCP tool calls in, IDE commands out.

    MCP client --tools/call--> BridgeServer --> ToolDispatcher --> handler
                                                                     |
                                    IDE listener <-- CommandChannel <+

The registry is built once at startup; every call is stateless.
"""

from ide_mcp.bridge.channel import CommandChannel
from ide_mcp.bridge.dispatcher import ToolDispatcher, extract_arguments
from ide_mcp.bridge.errors import (
    BridgeError,
    CommandChannelError,
    DuplicateToolError,
    InvalidArgumentsError,
    ToolDefinitionError,
    ToolNotFoundError,
    ToolRegistryError,
)
from ide_mcp.bridge.registry import RegisteredTool, ToolRegistry
from ide_mcp.bridge.schema import (
    OutboundCommand,
    TextContent,
    ToolCall,
    ToolDef,
    ToolParam,
    ToolResult,
)

__all__ = [
    "BridgeError",
    "CommandChannel",
    "CommandChannelError",
    "DuplicateToolError",
    "InvalidArgumentsError",
    "OutboundCommand",
    "RegisteredTool",
    "TextContent",
    "ToolCall",
    "ToolDef",
    "ToolDefinitionError",
    "ToolDispatcher",
    "ToolNotFoundError",
    "ToolParam",
    "ToolRegistry",
    "ToolRegistryError",
    "ToolResult",
    "extract_arguments",
]
