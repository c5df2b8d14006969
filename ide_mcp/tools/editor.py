"""Editor tools - ask the IDE to open content or files."""

from __future__ import annotations

from typing import List, Tuple

from ide_mcp.bridge.channel import CommandChannel
from ide_mcp.bridge.registry import ToolHandler
from ide_mcp.bridge.schema import ToolDef, ToolParam, ToolResult

PARAM_CONTENT = "content"
PARAM_FILE_PATH = "filePath"

# Command names understood by the IDE listener
CMD_OPEN_EDITOR = "open_editor"
CMD_OPEN_FILE = "openFile"

OPEN_CONTENT = ToolDef(
    name="open_content_in_editor",
    description="Opens an editor with the specified content",
    params=(
        ToolParam(name=PARAM_CONTENT, description="content to show in the editor", required=True),
    ),
)

OPEN_FILE = ToolDef(
    name="open_file_in_editor",
    description="Opens the file at the given path in the editor",
    params=(
        ToolParam(name=PARAM_FILE_PATH, description="path of the file to open", required=True),
    ),
)


class EditorTools:
    """Handlers for the editor tools, all sharing one command channel."""

    def __init__(self, channel: CommandChannel):
        self.channel = channel

    def definitions(self) -> List[Tuple[ToolDef, ToolHandler]]:
        return [
            (OPEN_CONTENT, self.open_content),
            (OPEN_FILE, self.open_file),
        ]

    def open_content(self, content: str) -> ToolResult:
        self.channel.send(CMD_OPEN_EDITOR, content)
        return ToolResult.success("Opened editor for content.")

    def open_file(self, filePath: str) -> ToolResult:  # noqa: N803
        self.channel.send(CMD_OPEN_FILE, filePath)
        return ToolResult.success(f"Opened editor for {filePath}")
