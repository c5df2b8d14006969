"""
ide-mcp-server - Model Context Protocol bridge to a running IDE.

Exposes editor actions as MCP tools. Each tool call becomes a single
command written to the IDE's remote-control listener over a local TCP
connection.

Architecture:
- MCP client (agent) --tools/call--> Bridge Server --> Tool Dispatcher
- Tool handler --> Command Channel --> IDE listener (localhost:12345)
- One connection per command: connect, write, close. No reply is read.
"""

__version__ = "0.1.0"
__author__ = "ide-mcp-server Team"
__license__ = "Apache-2.0"

from ide_mcp.bridge.channel import CommandChannel
from ide_mcp.bridge.dispatcher import ToolDispatcher
from ide_mcp.bridge.registry import ToolRegistry
from ide_mcp.bridge.schema import ToolCall, ToolDef, ToolParam, ToolResult

__all__ = [
    "CommandChannel",
    "ToolCall",
    "ToolDef",
    "ToolDispatcher",
    "ToolParam",
    "ToolRegistry",
    "ToolResult",
    "__version__",
]
