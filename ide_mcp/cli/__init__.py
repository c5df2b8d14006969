"""ide-mcp-server command-line launcher."""
