"""ASGI entrypoint for the Jsoncut MCP HTTP server."""

from jsoncut_mcp.api.app import create_app
from jsoncut_mcp.containers import build_container

app = create_app(build_container())
