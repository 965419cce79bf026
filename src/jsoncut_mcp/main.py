"""Command-line entry points for the stdio and HTTP variants."""

import logging

import anyio
import uvicorn
from mcp.server.stdio import stdio_server

from jsoncut_mcp.api.app import create_app
from jsoncut_mcp.api.mcp_server import build_mcp_server
from jsoncut_mcp.app_logging import configure_logging
from jsoncut_mcp.config import SERVER_NAME, Settings
from jsoncut_mcp.containers import AppContainer, build_container
from jsoncut_mcp.domain.errors import SchemaLoadError

_logger = logging.getLogger(__name__)


async def run_stdio(container: AppContainer) -> None:
    """Serve one MCP session over stdin/stdout with the process credential."""
    server = build_mcp_server(container.default_registry())
    if container.validation_service.api_key is None:
        _logger.warning(
            "JSONCUT_API_KEY is not set; validate_config needs an apiKey argument"
        )
    try:
        async with stdio_server() as (read_stream, write_stream):
            _logger.info("%s running on stdio", SERVER_NAME)
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )
    finally:
        await container.close_resources()


def main() -> None:
    """Run the stdio MCP server."""
    settings = Settings()
    configure_logging(settings.log_level)
    container = _build_or_exit(settings)
    anyio.run(run_stdio, container)


def http_main() -> None:
    """Run the Streamable HTTP MCP server under uvicorn."""
    settings = Settings()
    configure_logging(settings.log_level)
    container = _build_or_exit(settings)
    uvicorn.run(
        create_app(container),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def _build_or_exit(settings: Settings) -> AppContainer:
    try:
        return build_container(settings)
    except SchemaLoadError as exc:
        _logger.critical("Cannot start %s: %s", SERVER_NAME, exc.message)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
