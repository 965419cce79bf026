"""MCP protocol binding for a tool registry."""

import logging

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from pydantic import AnyUrl

from jsoncut_mcp.config import SERVER_NAME, SERVER_VERSION
from jsoncut_mcp.services.registry import ToolRegistry

_logger = logging.getLogger(__name__)


def build_mcp_server(registry: ToolRegistry) -> Server:
    """Create a low-level MCP server that delegates to one registry."""
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in registry.list_tools()
        ]

    # Argument checks are done by the registry so failures use its error format.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> types.CallToolResult:
        result = await registry.call_tool(name, arguments)
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=result.text)],
            isError=result.is_error,
        )

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return [
            types.Resource(
                uri=resource.uri,
                name=resource.name,
                description=resource.description,
                mimeType=resource.mime_type,
            )
            for resource in registry.list_resources()
        ]

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        content = registry.read_resource(str(uri))
        _logger.debug("Serving resource %s", content.uri)
        return [
            ReadResourceContents(content=content.text, mime_type=content.mime_type)
        ]

    return server
