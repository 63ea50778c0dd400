"""
MCP transport binding — exposes the dispatcher over the stdio protocol.

Only two requests are served: ``tools/list`` (the registry's descriptors)
and ``tools/call`` (one dispatcher invocation, wrapped in a text envelope).
"""

from __future__ import annotations

import logging

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from ocimcp import SERVER_NAME, __version__
from ocimcp.dispatch import Dispatcher, Failure, InvocationResult
from ocimcp.projections import serialize_payload

logger = logging.getLogger("oci-mcp.server")


def envelope_text(result: InvocationResult) -> str:
    """The text block sent back for *result*."""
    if isinstance(result, Failure):
        return f"Error: {result.message}"
    return serialize_payload(result.payload)


def to_call_tool_result(result: InvocationResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=envelope_text(result))],
        isError=isinstance(result, Failure),
    )


def build_server(dispatcher: Dispatcher) -> Server:
    """Create an MCP server answering from *dispatcher*."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=tool["name"],
                description=tool["description"],
                inputSchema=tool["inputSchema"],
            )
            for tool in dispatcher.list_capabilities()
        ]

    # Registered directly rather than via @server.call_tool() so the
    # envelope (including isError) is ours, not the runtime's.
    async def _call_tool(req: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.invoke(req.params.name, req.params.arguments)
        return types.ServerResult(to_call_tool_result(result))

    server.request_handlers[types.CallToolRequest] = _call_tool
    return server


async def serve(dispatcher: Dispatcher) -> None:
    """Serve on stdin/stdout until the channel closes."""
    server = build_server(dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("%s %s running on stdio", SERVER_NAME, __version__)
        logger.info("Serving %d tools: %s", len(dispatcher.registry), ", ".join(dispatcher.registry.tool_ids))
        await server.run(read_stream, write_stream, server.create_initialization_options())
