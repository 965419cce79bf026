"""Tool and resource registry bound to one credential."""

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass

from jsoncut_mcp.domain.configs import Shape
from jsoncut_mcp.domain.errors import (
    InvalidArgumentError,
    JsoncutMCPError,
    UnknownOperationError,
    format_error,
)
from jsoncut_mcp.services.configs import ConfigBuilder
from jsoncut_mcp.services.schemas import SchemaStore
from jsoncut_mcp.services.tool_catalog import (
    SCHEMA_RESOURCES,
    Operation,
    ResourceDefinition,
    ToolDefinition,
    tool_definitions,
)
from jsoncut_mcp.services.validation import ValidationService, format_validation_result

_logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, object]], Awaitable["ToolResult"]]


@dataclass(frozen=True)
class ToolResult:
    """Text payload returned by a tool, flagged when it reports a failure."""

    text: str
    is_error: bool = False


@dataclass(frozen=True)
class ResourceContent:
    """Contents of a read resource."""

    uri: str
    mime_type: str
    text: str


@dataclass
class ToolRegistry:
    """Dispatches tool calls and resource reads.

    One registry exists per session (HTTP) or per process (stdio). The only
    state it carries is the credential bound into its validation service.
    """

    schema_store: SchemaStore
    config_builder: ConfigBuilder
    validation_service: ValidationService

    @property
    def api_key(self) -> str | None:
        """Credential used for remote validation."""
        return self.validation_service.api_key

    def list_tools(self) -> list[ToolDefinition]:
        """Return the callable tools."""
        return tool_definitions()

    def list_resources(self) -> list[ResourceDefinition]:
        """Return the addressable resources."""
        return list(SCHEMA_RESOURCES)

    async def call_tool(
        self, name: str, arguments: Mapping[str, object] | None = None
    ) -> ToolResult:
        """Invoke a tool by name and return its result or a failure result."""
        try:
            handler = self._handler(name)
            return await handler(dict(arguments or {}))
        except JsoncutMCPError as exc:
            _logger.info("Tool %s failed: %s", name, exc.message)
            return ToolResult(text=format_error(exc), is_error=True)
        except Exception:
            _logger.exception("Unexpected failure in tool %s", name)
            return ToolResult(
                text="Error: Internal error while running the tool", is_error=True
            )

    def read_resource(self, uri: str) -> ResourceContent:
        """Return the contents of a resource by URI."""
        normalized = uri.rstrip("/")
        for resource in SCHEMA_RESOURCES:
            if resource.uri == normalized:
                return ResourceContent(
                    uri=resource.uri,
                    mime_type=resource.mime_type,
                    text=self.schema_store.to_json(resource.shape),
                )
        raise UnknownOperationError(f"Unknown resource: {uri}")

    def _handler(self, name: str) -> ToolHandler:
        handlers: dict[str, ToolHandler] = {
            Operation.CREATE_IMAGE_CONFIG.value.name: self._create_image_config,
            Operation.CREATE_VIDEO_CONFIG.value.name: self._create_video_config,
            Operation.VALIDATE_CONFIG.value.name: self._validate_config,
            Operation.GET_IMAGE_SCHEMA.value.name: self._get_image_schema,
            Operation.GET_VIDEO_SCHEMA.value.name: self._get_video_schema,
        }
        handler = handlers.get(name)
        if handler is None:
            raise UnknownOperationError(f"Unknown tool: {name}")
        return handler

    async def _create_image_config(self, arguments: dict[str, object]) -> ToolResult:
        return self._build(Shape.IMAGE, arguments)

    async def _create_video_config(self, arguments: dict[str, object]) -> ToolResult:
        return self._build(Shape.VIDEO, arguments)

    async def _validate_config(self, arguments: dict[str, object]) -> ToolResult:
        if arguments.get("type") in (None, ""):
            raise InvalidArgumentError(
                "Missing required parameter: type", field="type"
            )
        if arguments.get("config") in (None, ""):
            raise InvalidArgumentError(
                "Missing required parameter: config", field="config"
            )
        shape = Shape.parse(arguments["type"])
        api_key = arguments.get("apiKey")
        result = await self.validation_service.validate(
            shape,
            arguments["config"],
            api_key=api_key if isinstance(api_key, str) else None,
        )
        return ToolResult(text=format_validation_result(result))

    async def _get_image_schema(self, arguments: dict[str, object]) -> ToolResult:
        return ToolResult(text=self.schema_store.to_json(Shape.IMAGE))

    async def _get_video_schema(self, arguments: dict[str, object]) -> ToolResult:
        return ToolResult(text=self.schema_store.to_json(Shape.VIDEO))

    def _build(self, shape: Shape, arguments: dict[str, object]) -> ToolResult:
        config = self.config_builder.build(shape, arguments)
        return ToolResult(
            text=json.dumps({"type": shape.value, "config": config}, indent=2)
        )
