"""Jsoncut API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from jsoncut_mcp.domain.errors import RemoteValidationError, TransportError

VALIDATE_PATH = "/api/v1/jobs/validate"

_logger = logging.getLogger(__name__)


class JsoncutClient(Protocol):
    """Interface for Jsoncut API interactions."""

    async def validate_job(
        self, job_type: str, config: dict[str, object], api_key: str
    ) -> dict[str, object]:
        """Validate a job configuration and return the raw API payload."""


@dataclass
class HttpxJsoncutClient(JsoncutClient):
    """HTTPX-backed Jsoncut client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float | None = 30.0

    @classmethod
    def create(
        cls, base_url: str, timeout: float | None = 30.0
    ) -> "HttpxJsoncutClient":
        """Create a Jsoncut client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(headers={"Content-Type": "application/json"}),
            timeout=timeout,
        )

    async def validate_job(
        self, job_type: str, config: dict[str, object], api_key: str
    ) -> dict[str, object]:
        """POST a configuration to the validation endpoint."""
        url = f"{self.base_url}{VALIDATE_PATH}"
        try:
            response = await self.http_client.post(
                url,
                json={"type": job_type, "config": config},
                headers={"X-API-Key": api_key},
                timeout=self.timeout,
            )
        except httpx.RequestError as exc:
            detail = str(exc) or type(exc).__name__
            _logger.warning("Jsoncut API unreachable: %s", detail)
            raise TransportError(
                f"Could not reach the Jsoncut API: {detail}", cause=exc
            ) from exc

        if not response.is_success:
            _logger.warning("Jsoncut API returned status %s", response.status_code)
            raise _remote_error(response)

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteValidationError(
                "Jsoncut API returned a response that is not JSON",
                status_code=response.status_code,
            ) from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _remote_error(response: httpx.Response) -> RemoteValidationError:
    """Map a non-2xx response to a RemoteValidationError."""
    try:
        body = response.json()
    except ValueError:
        body = None

    message: object = None
    details: object = None
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        details = body.get("details") or body.get("errors")
        if isinstance(message, dict):
            details = details or message
            message = message.get("message")
    if not isinstance(message, str) or not message:
        message = f"API Error: {response.status_code} {response.reason_phrase}".strip()
    return RemoteValidationError(
        message, status_code=response.status_code, details=details
    )
