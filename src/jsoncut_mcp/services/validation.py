"""Remote validation of job configurations."""

import json
import logging
from dataclasses import dataclass, replace

from jsoncut_mcp.adapters.jsoncut_client import JsoncutClient
from jsoncut_mcp.domain.configs import Shape
from jsoncut_mcp.domain.errors import (
    AuthenticationError,
    InvalidArgumentError,
    RemoteValidationError,
)
from jsoncut_mcp.domain.validation import (
    DetectedResource,
    ValidationIssue,
    ValidationResult,
)

_logger = logging.getLogger(__name__)

_BYTES_PER_MB = 1024 * 1024


@dataclass
class ValidationService:
    """Sends configurations to the Jsoncut API with a bound credential."""

    client: JsoncutClient
    api_key: str | None = None

    def with_api_key(self, api_key: str | None) -> "ValidationService":
        """Return a copy bound to another credential, sharing the client."""
        return replace(self, api_key=api_key)

    def resolve_api_key(self, provided: str | None = None) -> str:
        """Pick the explicit key, then the bound one, or fail."""
        api_key = provided or self.api_key
        if not api_key:
            raise AuthenticationError(
                "API key is required. Provide the X-API-Key header when "
                "connecting, set JSONCUT_API_KEY, or pass apiKey."
            )
        return api_key

    async def validate(
        self, shape: Shape, config: object, api_key: str | None = None
    ) -> ValidationResult:
        """Validate a configuration against the remote API."""
        parsed = parse_config_argument(config)
        key = self.resolve_api_key(api_key)
        payload = await self.client.validate_job(shape.value, parsed, key)
        if isinstance(payload, dict) and payload.get("success") is False:
            raise RemoteValidationError(
                _failure_message(payload), details=payload.get("details")
            )
        return map_validation_payload(payload)


def parse_config_argument(config: object) -> dict[str, object]:
    """Accept a configuration object or its JSON text."""
    if isinstance(config, str):
        try:
            config = json.loads(config)
        except json.JSONDecodeError as exc:
            raise InvalidArgumentError(
                "Invalid config JSON string", field="config"
            ) from exc
    if not isinstance(config, dict):
        raise InvalidArgumentError("Config must be a JSON object", field="config")
    return config


def map_validation_payload(payload: object) -> ValidationResult:
    """Map a successful API payload into a ValidationResult without raising."""
    data = payload.get("data") if isinstance(payload, dict) else None
    if data is None and isinstance(payload, dict) and "isValid" in payload:
        data = payload
    if not isinstance(data, dict):
        _logger.warning(
            "Unrecognized validation payload shape: %s",
            _describe_shape(payload),
        )
        return ValidationResult(
            is_valid=False,
            errors=[
                ValidationIssue(
                    message="Unrecognized validation response from the Jsoncut API"
                )
            ],
        )

    return ValidationResult(
        is_valid=data.get("isValid") is True,
        estimated_tokens=_as_number(data.get("estimatedTokens")),
        errors=_map_issues(data.get("errors")),
        detected_resources=_map_resources(data.get("detectedResources")),
    )


def format_validation_result(result: ValidationResult) -> str:
    """Render a validation result for the caller."""
    lines = [
        "Validation Result:",
        f"- Valid: {'Yes' if result.is_valid else 'No'}",
    ]
    if result.estimated_tokens is not None:
        lines.append(f"- Estimated Tokens: {_format_number(result.estimated_tokens)}")
    if result.errors:
        lines.extend(["", "Errors:"])
        for index, issue in enumerate(result.errors, start=1):
            line = f"  {index}. {issue.message}"
            if issue.field:
                line += f" (field: {issue.field})"
            lines.append(line)
    if result.detected_resources:
        lines.extend(["", "Detected Resources:"])
        for resource in result.detected_resources:
            line = f"  - {resource.type}: {resource.url}"
            if resource.size:
                line += f" ({resource.size / _BYTES_PER_MB:.2f} MB)"
            lines.append(line)
    return "\n".join(lines)


def _failure_message(payload: dict[str, object]) -> str:
    error = payload.get("error") or payload.get("message")
    if isinstance(error, dict):
        error = error.get("message")
    if isinstance(error, str) and error:
        return error
    return "Validation failed"


def _map_issues(raw: object) -> list[ValidationIssue]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        _logger.warning("Ignoring non-list validation errors: %s", _describe_shape(raw))
        return []
    issues: list[ValidationIssue] = []
    for entry in raw:
        if isinstance(entry, str):
            issues.append(ValidationIssue(message=entry))
        elif isinstance(entry, dict) and entry.get("message") is not None:
            field = entry.get("field")
            issues.append(
                ValidationIssue(
                    message=str(entry["message"]),
                    field=str(field) if field is not None else None,
                )
            )
        else:
            _logger.warning("Skipping malformed validation error entry")
    return issues


def _map_resources(raw: object) -> list[DetectedResource]:
    if not isinstance(raw, list):
        return []
    resources: list[DetectedResource] = []
    for entry in raw:
        if not isinstance(entry, dict) or entry.get("url") is None:
            _logger.warning("Skipping malformed detected resource entry")
            continue
        resources.append(
            DetectedResource(
                type=str(entry.get("type", "file")),
                url=str(entry["url"]),
                size=_as_number(entry.get("size")),
            )
        )
    return resources


def _as_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _describe_shape(value: object) -> str:
    if isinstance(value, dict):
        return f"object with keys {sorted(value)}"
    return type(value).__name__
