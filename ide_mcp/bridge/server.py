"""MCP server that exposes the tool registry over stdio or SSE."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

import anyio
from mcp import types
from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route

from ide_mcp import __version__
from ide_mcp.bridge.dispatcher import ToolDispatcher
from ide_mcp.bridge.errors import ToolNotFoundError
from ide_mcp.bridge.registry import ToolRegistry
from ide_mcp.bridge.schema import ToolCall, ToolResult

logger = logging.getLogger(__name__)

SERVER_NAME = "ide-mcp-server"


class ToolCallFailed(Exception):
    """Carries an error result through the SDK, which reports it with isError set."""


class BridgeServer:
    """
    Wires a ``ToolRegistry`` into an MCP protocol server.

    ``tools/list`` advertises the registry in registration order and
    ``tools/call`` goes through the ``ToolDispatcher``. The SDK's own
    JSON-schema input validation is switched off so that malformed
    arguments produce the dispatcher's error result.

    Example:
        server = BridgeServer(build_registry(channel))
        server.serve_stdio()                # blocks
        server.serve_sse(8080)              # or: HTTP/SSE on :8080
    """

    def __init__(self, registry: ToolRegistry, name: str = SERVER_NAME, version: str = __version__):
        self.registry = registry
        self.dispatcher = ToolDispatcher(registry)
        self.server = Server(name, version=version)
        self.server.list_tools()(self.list_tools)
        self.server.call_tool(validate_input=False)(self._handle_call_tool)

    # ── MCP handlers ──────────────────────────────────────────────────────

    async def list_tools(self) -> List[types.Tool]:
        return [tool.to_mcp() for tool in self.registry.list_tools()]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
        """
        Run one tool call and return its result envelope.

        Dispatch runs in a worker thread because handlers do blocking
        socket I/O. Unknown tools become error results here.
        """
        invocation = ToolCall(tool_name=name, arguments=arguments if arguments is not None else {})
        try:
            return await anyio.to_thread.run_sync(self.dispatcher.dispatch, invocation)
        except ToolNotFoundError as exc:
            logger.warning("%s", exc)
            return ToolResult.failure(str(exc))

    async def _handle_call_tool(self, name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        result = await self.call_tool(name, arguments)
        if result.is_error:
            raise ToolCallFailed(result.text)
        return result.mcp_content()

    # ── stdio ─────────────────────────────────────────────────────────────

    async def run_stdio(self) -> None:
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

    def serve_stdio(self) -> None:
        """Serve MCP over stdin/stdout until the client disconnects."""
        logger.info("Serving %d tools over stdio", len(self.registry))
        anyio.run(self.run_stdio)

    # ── SSE ───────────────────────────────────────────────────────────────

    def sse_app(self) -> Starlette:
        """Create the Starlette app serving MCP over SSE."""
        sse_transport = SseServerTransport("/messages/")

        async def handle_sse(request: Request) -> Response:
            logger.info("SSE connection from %s", request.client)
            async with sse_transport.connect_sse(
                request.scope, request.receive, request._send
            ) as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
            logger.info("SSE connection closed from %s", request.client)
            return Response()

        return Starlette(
            routes=[
                Route("/health", endpoint=self._health, methods=["GET"]),
                Route("/sse", endpoint=handle_sse, methods=["GET"]),
                Mount("/messages/", app=sse_transport.handle_post_message),
            ]
        )

    async def _health(self, request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "ok",
                "server": SERVER_NAME,
                "tools": len(self.registry),
                "transport": "sse",
            }
        )

    def serve_sse(self, port: int, host: str = "0.0.0.0", base_url: str = "") -> None:
        """
        Serve MCP over HTTP/SSE (blocks).

        ``base_url`` is the public URL clients use, e.g. when running behind
        a reverse proxy; its path becomes the ASGI root path.
        """
        import uvicorn

        root_path = urlsplit(base_url).path.rstrip("/") if base_url else ""
        logger.info("SSE server starting on %s:%d", host, port)
        uvicorn.run(
            self.sse_app(),
            host=host,
            port=port,
            root_path=root_path,
            log_level="warning",
        )
