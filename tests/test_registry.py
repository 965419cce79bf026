"""Tests for the tool and resource registry."""

import asyncio
import json
from dataclasses import replace

import pytest

from jsoncut_mcp.domain.configs import Shape
from jsoncut_mcp.domain.errors import TransportError, UnknownOperationError
from jsoncut_mcp.services.registry import ToolRegistry
from jsoncut_mcp.services.schemas import SchemaStore
from tests.conftest import FakeJsoncutClient


def test_lists_five_tools_and_two_resources(registry: ToolRegistry) -> None:
    assert [tool.name for tool in registry.list_tools()] == [
        "create_image_config",
        "create_video_config",
        "validate_config",
        "get_image_schema",
        "get_video_schema",
    ]
    assert [resource.uri for resource in registry.list_resources()] == [
        "schema://image",
        "schema://video",
    ]


def test_create_image_config_returns_typed_envelope(registry: ToolRegistry) -> None:
    result = asyncio.run(
        registry.call_tool("create_image_config", {"width": 500, "layers": []})
    )

    assert result.is_error is False
    assert json.loads(result.text) == {
        "type": "image",
        "config": {"width": 500, "height": 1080, "layers": []},
    }


def test_create_video_config_with_no_arguments(registry: ToolRegistry) -> None:
    result = asyncio.run(registry.call_tool("create_video_config", None))

    assert json.loads(result.text)["config"]["fps"] == 25


def test_unknown_tool_is_reported_as_error(registry: ToolRegistry) -> None:
    result = asyncio.run(registry.call_tool("render_video", {}))

    assert result.is_error is True
    assert result.text == "Error: Unknown tool: render_video"


def test_validate_config_requires_type(registry: ToolRegistry) -> None:
    result = asyncio.run(registry.call_tool("validate_config", {"config": {}}))

    assert result.is_error is True
    assert result.text == "Error: Missing required parameter: type (field: type)"


def test_validate_config_rejects_unknown_type(registry: ToolRegistry) -> None:
    result = asyncio.run(
        registry.call_tool("validate_config", {"type": "gif", "config": {}})
    )

    assert result.is_error is True
    assert "(field: type)" in result.text


def test_validate_config_without_credential(
    registry: ToolRegistry, jsoncut_client: FakeJsoncutClient
) -> None:
    result = asyncio.run(
        registry.call_tool("validate_config", {"type": "image", "config": {}})
    )

    assert result.is_error is True
    assert result.text.startswith("Error: API key is required")
    assert jsoncut_client.calls == []


def test_validate_config_with_api_key_argument(
    registry: ToolRegistry, jsoncut_client: FakeJsoncutClient
) -> None:
    result = asyncio.run(
        registry.call_tool(
            "validate_config",
            {"type": "image", "config": {"layers": []}, "apiKey": "arg-key"},
        )
    )

    assert result.is_error is False
    assert "- Valid: Yes" in result.text
    assert "- Estimated Tokens: 120" in result.text
    assert jsoncut_client.calls[0].api_key == "arg-key"


def test_transport_failure_is_formatted(
    registry: ToolRegistry, jsoncut_client: FakeJsoncutClient
) -> None:
    jsoncut_client.error = TransportError("Could not reach the Jsoncut API: timeout")
    bound = replace(
        registry,
        validation_service=registry.validation_service.with_api_key("k"),
    )

    result = asyncio.run(
        bound.call_tool("validate_config", {"type": "video", "config": "{}"})
    )

    assert result.is_error is True
    assert result.text == "Error: Could not reach the Jsoncut API: timeout"


def test_unexpected_failure_hides_internals(
    registry: ToolRegistry, jsoncut_client: FakeJsoncutClient
) -> None:
    jsoncut_client.error = RuntimeError("secret stack detail")

    result = asyncio.run(
        registry.call_tool(
            "validate_config", {"type": "image", "config": {}, "apiKey": "k"}
        )
    )

    assert result.is_error is True
    assert "secret" not in result.text


def test_schema_tools_match_resources(
    registry: ToolRegistry, schema_store: SchemaStore
) -> None:
    tool_result = asyncio.run(registry.call_tool("get_video_schema", {}))
    resource = registry.read_resource("schema://video/")

    assert tool_result.text == schema_store.to_json(Shape.VIDEO)
    assert resource.text == tool_result.text
    assert resource.uri == "schema://video"
    assert resource.mime_type == "application/json"


def test_unknown_resource_raises(registry: ToolRegistry) -> None:
    with pytest.raises(UnknownOperationError):
        registry.read_resource("schema://audio")


def test_registry_exposes_bound_credential(container) -> None:
    assert container.registry_for("session-key").api_key == "session-key"
    assert container.default_registry().api_key is None
