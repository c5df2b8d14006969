"""
ide-mcp-server validation module.

This module provides configuration loading and schema enforcement.
"""

from ide_mcp.validation.config import BridgeConfig, Config, ConfigError

__all__ = ["BridgeConfig", "Config", "ConfigError"]
