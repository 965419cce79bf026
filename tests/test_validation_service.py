"""Tests for the validation service."""

import asyncio

import pytest

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
from jsoncut_mcp.services.validation import (
    ValidationService,
    format_validation_result,
    map_validation_payload,
)
from tests.conftest import FakeJsoncutClient


def test_missing_credential_makes_no_remote_call(
    validation_service: ValidationService, jsoncut_client: FakeJsoncutClient
) -> None:
    with pytest.raises(AuthenticationError):
        asyncio.run(validation_service.validate(Shape.IMAGE, {"layers": []}))

    assert jsoncut_client.calls == []


def test_bound_credential_is_used(
    validation_service: ValidationService, jsoncut_client: FakeJsoncutClient
) -> None:
    service = validation_service.with_api_key("session-key")

    result = asyncio.run(service.validate(Shape.VIDEO, {"clips": []}))

    assert result.is_valid is True
    assert jsoncut_client.calls[0].api_key == "session-key"
    assert jsoncut_client.calls[0].job_type == "video"
    assert validation_service.api_key is None


def test_explicit_credential_wins(
    validation_service: ValidationService, jsoncut_client: FakeJsoncutClient
) -> None:
    service = validation_service.with_api_key("session-key")

    asyncio.run(service.validate(Shape.IMAGE, {}, api_key="explicit-key"))

    assert jsoncut_client.calls[0].api_key == "explicit-key"


def test_config_string_is_parsed(
    validation_service: ValidationService, jsoncut_client: FakeJsoncutClient
) -> None:
    service = validation_service.with_api_key("k")

    asyncio.run(service.validate(Shape.IMAGE, '{"width": 10, "layers": []}'))

    assert jsoncut_client.calls[0].config == {"width": 10, "layers": []}


@pytest.mark.parametrize("config", ["{broken", "[1, 2]", 42])
def test_invalid_config_argument_rejected(
    validation_service: ValidationService,
    jsoncut_client: FakeJsoncutClient,
    config: object,
) -> None:
    service = validation_service.with_api_key("k")

    with pytest.raises(InvalidArgumentError) as exc_info:
        asyncio.run(service.validate(Shape.IMAGE, config))

    assert exc_info.value.field == "config"
    assert jsoncut_client.calls == []


def test_unsuccessful_payload_raises_with_details(
    validation_service: ValidationService, jsoncut_client: FakeJsoncutClient
) -> None:
    jsoncut_client.payload = {
        "success": False,
        "error": {"message": "Quota exceeded"},
        "details": {"limit": 100},
    }
    service = validation_service.with_api_key("k")

    with pytest.raises(RemoteValidationError) as exc_info:
        asyncio.run(service.validate(Shape.IMAGE, {}))

    assert exc_info.value.message == "Quota exceeded"
    assert exc_info.value.details == {"limit": 100}


def test_validation_is_idempotent(
    validation_service: ValidationService, jsoncut_client: FakeJsoncutClient
) -> None:
    service = validation_service.with_api_key("k")
    config = {"width": 100, "height": 100, "layers": []}

    first = asyncio.run(service.validate(Shape.IMAGE, config))
    second = asyncio.run(service.validate(Shape.IMAGE, config))

    assert first == second
    assert len(jsoncut_client.calls) == 2


def test_map_payload_with_issues_and_resources() -> None:
    result = map_validation_payload(
        {
            "success": True,
            "data": {
                "isValid": False,
                "estimatedTokens": 40,
                "errors": [
                    "Canvas too large",
                    {"message": "Unknown layer type", "field": "layers[0].type"},
                    {"code": 3},
                ],
                "detectedResources": [
                    {"type": "font", "url": "/font/u1/a.ttf"},
                    {"type": "image"},
                ],
            },
        }
    )

    assert result == ValidationResult(
        is_valid=False,
        estimated_tokens=40,
        errors=[
            ValidationIssue(message="Canvas too large"),
            ValidationIssue(message="Unknown layer type", field="layers[0].type"),
        ],
        detected_resources=[DetectedResource(type="font", url="/font/u1/a.ttf")],
    )


def test_map_payload_accepts_unwrapped_result() -> None:
    result = map_validation_payload({"isValid": True, "estimatedTokens": 7})

    assert result.is_valid is True
    assert result.estimated_tokens == 7


@pytest.mark.parametrize("payload", [None, [], "ok", {"success": True}])
def test_map_payload_never_raises_on_unknown_shapes(payload: object) -> None:
    result = map_validation_payload(payload)

    assert result.is_valid is False
    assert result.errors[0].message.startswith("Unrecognized validation response")


def test_format_validation_result() -> None:
    result = ValidationResult(
        is_valid=False,
        estimated_tokens=120,
        errors=[ValidationIssue(message="Bad width", field="width")],
        detected_resources=[
            DetectedResource(type="image", url="/image/u1/a.png", size=1048576)
        ],
    )

    text = format_validation_result(result)

    assert text.splitlines() == [
        "Validation Result:",
        "- Valid: No",
        "- Estimated Tokens: 120",
        "",
        "Errors:",
        "  1. Bad width (field: width)",
        "",
        "Detected Resources:",
        "  - image: /image/u1/a.png (1.00 MB)",
    ]
