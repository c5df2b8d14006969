"""
ide-mcp-server Configuration - Configuration loading and validation.

This module provides the Config class for managing bridge configuration
from global (~/.ide-mcp/config.yaml) and local (.ide-mcp/config.yaml)
sources, plus command-line overrides.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ide_mcp.bridge.channel import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT, CommandChannel

LOG_LEVELS = ("debug", "info", "warning", "error")


class ConfigError(Exception):
    """Raised when there's a configuration error."""

    pass


class IDEConfig(BaseModel):
    """Where and how to reach the IDE listener."""

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    separator: str = ""


class ServerConfig(BaseModel):
    """Configuration for the MCP-facing server."""

    sse_port: int = Field(default=0, ge=0, le=65535)  # 0 = serve over stdio
    sse_host: str = "0.0.0.0"
    sse_base_url: str = ""


class LoggingConfig(BaseModel):
    """Configuration for log output."""

    level: str = "warning"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return value


class BridgeConfig(BaseModel):
    """Complete ide-mcp-server configuration schema."""

    ide: IDEConfig = Field(default_factory=IDEConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class Config:
    """
    ide-mcp-server configuration manager.

    Handles loading, merging, and validating configuration from:
    - Global: ~/.ide-mcp/config.yaml
    - Local: .ide-mcp/config.yaml (project-specific), or an explicit file
    - Overrides: command-line options and environment variables

    Later sources override earlier ones.

    Example:
        >>> config = Config.load()
        >>> config.set_overrides({"server": {"sse_port": 8080}})
        >>> channel = config.channel()
    """

    GLOBAL_CONFIG_DIR = Path.home() / ".ide-mcp"
    LOCAL_CONFIG_DIR = Path(".ide-mcp")

    def __init__(
        self,
        global_config: Optional[Dict[str, Any]] = None,
        local_config: Optional[Dict[str, Any]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize Config.

        Args:
            global_config: Global configuration dictionary.
            local_config: Local (project) configuration dictionary.
            overrides: Command-line overrides.
        """
        self._global_config = global_config or {}
        self._local_config = local_config or {}
        self._overrides = overrides or {}
        self._merged: Optional[BridgeConfig] = None

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """
        Load configuration from default locations.

        Args:
            path: Explicit config file used instead of the local lookup.

        Returns:
            Config instance with loaded configuration.
        """
        if path is not None and not Path(path).exists():
            raise ConfigError(f"Config file not found: {path}")

        global_config = cls._load_yaml(cls.GLOBAL_CONFIG_DIR / "config.yaml")
        local_config = cls._load_yaml(Path(path) if path is not None else cls._find_local_config())

        return cls(global_config=global_config, local_config=local_config)

    @classmethod
    def _load_yaml(cls, path: Optional[Path]) -> Dict[str, Any]:
        """Load YAML file if it exists."""
        if path is None or not path.exists():
            return {}

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    @classmethod
    def _find_local_config(cls) -> Optional[Path]:
        """Find the local config file by walking up the directory tree."""
        current = Path.cwd()
        while current != current.parent:
            config_path = current / cls.LOCAL_CONFIG_DIR / "config.yaml"
            if config_path.exists():
                return config_path
            current = current.parent
        return None

    def get_merged_config(self) -> Dict[str, Any]:
        """Get the merged configuration as a dictionary."""
        merged = self._deep_merge(self._global_config.copy(), self._local_config)
        return self._deep_merge(merged, self._overrides)

    def set_overrides(self, overrides: Dict[str, Any]) -> None:
        """Apply command-line overrides on top of the file configuration."""
        self._overrides = self._deep_merge(self._overrides, overrides)
        self._merged = None  # Reset cache

    @property
    def merged(self) -> BridgeConfig:
        """Get the validated merged configuration."""
        if self._merged is None:
            try:
                self._merged = BridgeConfig(**self.get_merged_config())
            except ValidationError as e:
                raise ConfigError(f"Invalid configuration: {e}")
        return self._merged

    def channel(self) -> CommandChannel:
        """Build the command channel described by the ``ide`` section."""
        ide = self.merged.ide
        return CommandChannel(
            host=ide.host,
            port=ide.port,
            timeout=ide.timeout,
            separator=ide.separator,
        )

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries, with override taking precedence."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
