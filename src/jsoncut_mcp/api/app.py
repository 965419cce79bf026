"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from jsoncut_mcp.api.sessions import SessionMultiplexer
from jsoncut_mcp.app_logging import configure_logging
from jsoncut_mcp.config import SERVER_NAME, SERVER_VERSION
from jsoncut_mcp.containers import AppContainer

HEALTH_MESSAGE = "Jsoncut MCP Server is running"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app serving MCP over Streamable HTTP."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    multiplexer = SessionMultiplexer(
        container.registry_for,
        json_response=container.settings.json_response,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("%s %s accepting MCP sessions", SERVER_NAME, SERVER_VERSION)
        try:
            async with app.state.multiplexer.run():
                yield
        finally:
            await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.state.multiplexer = multiplexer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Mcp-Session-Id"],
    )

    @app.get("/health")
    async def health(request: Request) -> dict[str, str | int]:
        """Simple health check endpoint."""
        state_multiplexer: SessionMultiplexer = request.app.state.multiplexer
        return {
            "status": "ok",
            "version": SERVER_VERSION,
            "message": HEALTH_MESSAGE,
            "sessions": len(state_multiplexer.sessions),
        }

    app.add_route("/mcp", multiplexer, methods=["GET", "POST", "DELETE"])

    return app
