"""
Tools exposed by the bridge.

``build_registry()`` is the single place where the process registry is
assembled. Add new tool groups here.
"""

from ide_mcp.bridge.channel import CommandChannel
from ide_mcp.bridge.registry import ToolRegistry
from ide_mcp.tools.editor import EditorTools


def build_registry(channel: CommandChannel) -> ToolRegistry:
    """Create the registry with every tool bound to ``channel``."""
    registry = ToolRegistry()
    for tool, handler in EditorTools(channel).definitions():
        registry.register(tool, handler)
    return registry


__all__ = ["EditorTools", "build_registry"]
