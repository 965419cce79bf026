"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

SERVER_NAME = "jsoncut-mcp-server"
SERVER_VERSION = "1.3.0"
DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    jsoncut_api_key: str | None = None
    jsoncut_api_url: str = "https://api.jsoncut.com"
    jsoncut_request_timeout: float = 30.0
    jsoncut_schema_dir: Path = DEFAULT_SCHEMA_DIR
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    json_response: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_api_key(raw: str | None) -> str | None:
    """Normalize an API key from env or headers; blank values mean none."""
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None


def parse_timeout(raw: float) -> float | None:
    """Return the request timeout in seconds, or None when disabled."""
    if raw <= 0:
        return None
    return raw
