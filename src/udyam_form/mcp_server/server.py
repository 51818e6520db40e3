"""
MCP Server implementation for the Udyam form backend.

Provides both stdio and SSE transport support for the Model Context Protocol.
"""

import json
import logging
from typing import Any, Literal

from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from udyam_form.config import UdyamFormConfig, get_config
from udyam_form.mcp_server.tools import (
    get_mcp_tools,
    mcp_get_form_schema,
    mcp_validate_field,
    mcp_validate_submission,
)
from udyam_form.schema.defaults import SUPPORTED_STEPS
from udyam_form.schema.provider import SchemaProvider

logger = logging.getLogger("udyam-form-mcp")


async def dispatch_tool(
    name: str,
    arguments: dict[str, Any],
    provider: SchemaProvider | None = None,
) -> dict[str, Any]:
    """Run a tool by name and return its JSON-serializable result."""
    if name == "get_form_schema":
        step = arguments.get("step")
        if not isinstance(step, int) or isinstance(step, bool):
            return {"error": "step must be an integer"}
        return await mcp_get_form_schema(step, provider=provider)
    if name == "validate_field":
        return mcp_validate_field(arguments.get("kind", ""), arguments.get("value"))
    if name == "validate_submission":
        return mcp_validate_submission(arguments.get("record"))
    return {"error": f"Unknown tool: {name}"}


def create_mcp_server(provider: SchemaProvider | None = None) -> Server:
    """
    Create and configure the MCP server instance.

    Returns:
        Configured MCP Server with the form tools registered.
    """
    server = Server("udyam-form-mcp")
    provider = provider or SchemaProvider.from_config()

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return [
            Tool(
                name=t["name"],
                description=t["description"],
                inputSchema=t["inputSchema"],
            )
            for t in get_mcp_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls."""
        logger.info(f"Tool call: {name}")
        result = await dispatch_tool(name, arguments or {}, provider=provider)
        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    return server


async def run_stdio_server(server: Server) -> None:
    """Serve over stdin/stdout; stdout must carry nothing but protocol frames."""
    logger.info("Serving form tools over stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def create_sse_app(server: Server, config: UdyamFormConfig | None = None) -> Starlette:
    """
    Wrap the MCP server in a Starlette app for remote clients.

    Routes:
        GET  /health          tool list plus where schemas are resolved from
        GET  /sse             event stream
        POST /sse/messages/   client messages for an open stream
    """
    config = config or get_config()
    sse_transport = SseServerTransport("/messages/")

    async def handle_sse(scope, receive, send):
        async with sse_transport.connect_sse(scope, receive, send) as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    async def handle_messages(scope, receive, send):
        await sse_transport.handle_post_message(scope, receive, send)

    async def health_check(request):
        return JSONResponse({
            "status": "healthy",
            "service": server.name,
            "tools": [t["name"] for t in get_mcp_tools()],
            "steps": list(SUPPORTED_STEPS),
            "extraction_url": config.extraction_url,
            "schema_cache_dir": config.schema_cache_dir,
        })

    return Starlette(
        routes=[
            Route("/health", health_check, methods=["GET"]),
            Mount("/sse/messages", app=handle_messages),
            Mount("/sse", app=handle_sse),
        ],
    )


async def run_sse_server(
    server: Server,
    config: UdyamFormConfig | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Serve the SSE app with uvicorn on the configured host and MCP port."""
    import uvicorn

    config = config or get_config()
    host = host or config.server_host
    port = port or config.mcp_port
    logger.info(f"Serving form tools over SSE on {host}:{port}")

    app = create_sse_app(server, config)
    uvicorn_config = uvicorn.Config(app, host=host, port=port, log_level=config.log_level.lower())
    await uvicorn.Server(uvicorn_config).serve()


async def run_mcp_server(
    transport: Literal["stdio", "sse"] | None = None,
    host: str | None = None,
    port: int | None = None,
    config: UdyamFormConfig | None = None,
) -> None:
    """
    Build the server from the configuration and serve it.

    Args:
        transport: "stdio" or "sse"; defaults to ``config.mcp_transport``.
        host: SSE bind address; defaults to ``config.server_host``.
        port: SSE port; defaults to ``config.mcp_port``.
        config: Settings; defaults to the environment configuration.
    """
    config = config or get_config()
    transport = transport or config.mcp_transport
    server = create_mcp_server(SchemaProvider.from_config(config))

    if transport == "stdio":
        await run_stdio_server(server)
    elif transport == "sse":
        await run_sse_server(server, config, host, port)
    else:
        raise ValueError(f"Unknown transport: {transport}. Use 'stdio' or 'sse'.")
