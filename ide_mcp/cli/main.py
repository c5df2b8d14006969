"""
ide-mcp-server CLI - launch the bridge over stdio or HTTP/SSE.

Run `ide-mcp-server` to serve MCP on stdin/stdout, or pass --sse-port to
listen for HTTP/SSE clients instead.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from ide_mcp import __version__
from ide_mcp.validation.config import LOG_LEVELS, Config, ConfigError

console = Console()
# stdout carries the MCP stream in stdio mode
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Route all log records to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def _collect_overrides(
    log_level: Optional[str],
    sse_port: Optional[int],
    sse_base_url: Optional[str],
    ide_host: Optional[str],
    ide_port: Optional[int],
) -> Dict[str, Any]:
    """Turn the options that were actually given into a config overlay."""
    overrides: Dict[str, Any] = {}

    def put(section: str, key: str, value: Any) -> None:
        if value is not None:
            overrides.setdefault(section, {})[key] = value

    put("logging", "level", log_level)
    put("server", "sse_port", sse_port)
    put("server", "sse_base_url", sse_base_url)
    put("ide", "host", ide_host)
    put("ide", "port", ide_port)
    return overrides


@click.command()
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    envvar="IDE_MCP_LOG_LEVEL",
    help="Log verbosity (logs go to stderr)",
)
@click.option("--sse-port", type=int, envvar="IDE_MCP_SSE_PORT", help="Serve HTTP/SSE on this port instead of stdio")
@click.option("--sse-base-url", envvar="IDE_MCP_SSE_BASE_URL", help="Public base URL of the SSE server")
@click.option("--ide-host", envvar="IDE_MCP_IDE_HOST", help="Host of the IDE listener")
@click.option("--ide-port", type=int, envvar="IDE_MCP_IDE_PORT", help="Port of the IDE listener")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file to use instead of .ide-mcp/config.yaml",
)
def cli(
    version: bool,
    log_level: Optional[str],
    sse_port: Optional[int],
    sse_base_url: Optional[str],
    ide_host: Optional[str],
    ide_port: Optional[int],
    config_path: Optional[Path],
) -> None:
    """
    IDE Model Context Protocol (MCP) server.

    \b
    Examples:
        ide-mcp-server                       # serve over stdio
        ide-mcp-server --sse-port 8080       # serve HTTP/SSE on :8080
        ide-mcp-server --sse-port 8443 --sse-base-url https://example.com:8443
    """
    if version:
        console.print(f"ide-mcp-server v{__version__}")
        return

    try:
        config = Config.load(config_path)
        config.set_overrides(_collect_overrides(log_level, sse_port, sse_base_url, ide_host, ide_port))
        settings = config.merged
        channel = config.channel()
    except ConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    setup_logging(settings.logging.level)
    logger.debug("Starting ide-mcp-server v%s", __version__)

    from ide_mcp.bridge.server import BridgeServer
    from ide_mcp.tools import build_registry

    server = BridgeServer(build_registry(channel))
    logger.info("IDE listener at %s:%d", channel.host, channel.port)

    try:
        if settings.server.sse_port > 0:
            server.serve_sse(
                settings.server.sse_port,
                host=settings.server.sse_host,
                base_url=settings.server.sse_base_url,
            )
        else:
            server.serve_stdio()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
