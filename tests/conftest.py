"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from jsoncut_mcp.adapters.jsoncut_client import JsoncutClient
from jsoncut_mcp.config import Settings
from jsoncut_mcp.containers import AppContainer
from jsoncut_mcp.services.configs import ConfigBuilder
from jsoncut_mcp.services.registry import ToolRegistry
from jsoncut_mcp.services.schemas import SchemaStore
from jsoncut_mcp.services.validation import ValidationService

IMAGE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "image",
    "type": "object",
    "properties": {"layers": {"type": "array"}},
}

VIDEO_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "video",
    "type": "object",
    "properties": {"clips": {"type": "array"}},
}

VALID_PAYLOAD: dict[str, object] = {
    "success": True,
    "data": {
        "isValid": True,
        "estimatedTokens": 120,
        "errors": [],
        "detectedResources": [
            {"type": "image", "url": "/image/2024-01-15/u1/a.png", "size": 1048576}
        ],
    },
}


@dataclass
class ValidationCall:
    """One recorded call to the fake Jsoncut client."""

    job_type: str
    config: dict[str, object]
    api_key: str


@dataclass
class FakeJsoncutClient(JsoncutClient):
    """Fake Jsoncut client that records calls and returns a fixed payload."""

    payload: object = field(default_factory=lambda: dict(VALID_PAYLOAD))
    error: Exception | None = None
    calls: list[ValidationCall] = field(default_factory=list)
    closed: bool = False

    async def validate_job(
        self, job_type: str, config: dict[str, object], api_key: str
    ) -> dict[str, object]:
        self.calls.append(ValidationCall(job_type, config, api_key))
        if self.error is not None:
            raise self.error
        return self.payload

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    (tmp_path / "image-schema.json").write_text(json.dumps(IMAGE_SCHEMA))
    (tmp_path / "video-schema.json").write_text(json.dumps(VIDEO_SCHEMA))
    return tmp_path


@pytest.fixture
def settings(schema_dir: Path) -> Settings:
    return Settings(
        jsoncut_api_key=None,
        jsoncut_api_url="https://api.jsoncut.test",
        jsoncut_schema_dir=schema_dir,
    )


@pytest.fixture
def schema_store(schema_dir: Path) -> SchemaStore:
    return SchemaStore.load(schema_dir)


@pytest.fixture
def jsoncut_client() -> FakeJsoncutClient:
    return FakeJsoncutClient()


@pytest.fixture
def validation_service(jsoncut_client: FakeJsoncutClient) -> ValidationService:
    return ValidationService(client=jsoncut_client)


@pytest.fixture
def registry(
    schema_store: SchemaStore, validation_service: ValidationService
) -> ToolRegistry:
    return ToolRegistry(
        schema_store=schema_store,
        config_builder=ConfigBuilder(),
        validation_service=validation_service,
    )


@pytest.fixture
def container(
    settings: Settings,
    schema_store: SchemaStore,
    jsoncut_client: FakeJsoncutClient,
    validation_service: ValidationService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        schema_store=schema_store,
        config_builder=ConfigBuilder(),
        jsoncut_client=jsoncut_client,
        validation_service=validation_service,
        close_resources=jsoncut_client.close,
    )
