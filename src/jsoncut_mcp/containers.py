"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from jsoncut_mcp.adapters.jsoncut_client import HttpxJsoncutClient, JsoncutClient
from jsoncut_mcp.config import Settings, parse_api_key, parse_timeout
from jsoncut_mcp.services.configs import ConfigBuilder
from jsoncut_mcp.services.registry import ToolRegistry
from jsoncut_mcp.services.schemas import SchemaStore
from jsoncut_mcp.services.validation import ValidationService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    schema_store: SchemaStore
    config_builder: ConfigBuilder
    jsoncut_client: JsoncutClient
    validation_service: ValidationService
    close_resources: Callable[[], Awaitable[None]]

    def registry_for(self, api_key: str | None) -> ToolRegistry:
        """Build a registry bound to a credential (one per session)."""
        return ToolRegistry(
            schema_store=self.schema_store,
            config_builder=self.config_builder,
            validation_service=self.validation_service.with_api_key(api_key),
        )

    def default_registry(self) -> ToolRegistry:
        """Registry bound to the process-wide credential."""
        return self.registry_for(self.validation_service.api_key)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    schema_store = SchemaStore.load(resolved_settings.jsoncut_schema_dir)
    jsoncut_client = HttpxJsoncutClient.create(
        base_url=resolved_settings.jsoncut_api_url,
        timeout=parse_timeout(resolved_settings.jsoncut_request_timeout),
    )
    validation_service = ValidationService(
        client=jsoncut_client,
        api_key=parse_api_key(resolved_settings.jsoncut_api_key),
    )

    async def close_resources() -> None:
        await jsoncut_client.close()

    return AppContainer(
        settings=resolved_settings,
        schema_store=schema_store,
        config_builder=ConfigBuilder(),
        jsoncut_client=jsoncut_client,
        validation_service=validation_service,
        close_resources=close_resources,
    )
