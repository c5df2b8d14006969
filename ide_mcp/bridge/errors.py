"""Exception hierarchy for the IDE bridge."""


class BridgeError(Exception):
    """Base class for all bridge failures."""


class CommandChannelError(BridgeError):
    """Raised when a command cannot be delivered to the IDE listener."""


class InvalidArgumentsError(BridgeError):
    """Raised when a tool's argument bag does not match its parameters."""


class ToolRegistryError(BridgeError):
    """Base error for tool registry failures."""


class ToolDefinitionError(ToolRegistryError):
    """Raised when a tool descriptor is unusable (e.g. empty name)."""


class DuplicateToolError(ToolRegistryError):
    """Raised when registering a tool name that is already taken."""


class ToolNotFoundError(ToolRegistryError):
    """Raised when dispatching to a tool that was never registered."""
